#!/usr/bin/env python3
"""
Taco Drop - Main Entry Point

The closer you are to the nearest Taco Bell, the more tacos fall.
Tap (click) tacos to pop them; clear the screen for a fresh batch.

Usage:
    taco-drop --lat 34.05 --lon -118.24
    taco-drop --offline --distance 0.5
    taco-drop --location-status denied

Controls:
    Left click: Pop a taco
    R: Refresh location
    Escape: Quit
"""
import argparse
import logging

import pygame

from taco_drop.config import get_settings
from taco_drop.gameplay.game import Game
from taco_drop.gameplay.geo import Coordinate, DEFAULT_LOCATION, distance_meters
from taco_drop.gameplay.permissions import permission_from_status
from taco_drop.gameplay.search import Place, StaticPlacesProvider
from taco_drop.gameplay.constants import METERS_PER_MILE
from taco_drop.network import FixedLocationProvider, LocationService, NominatimPlacesProvider
from taco_drop.ui.renderer import Renderer
from taco_drop.ui.input_handler import InputHandler

logger = logging.getLogger(__name__)


def offline_places(query: str, here: Coordinate, miles: float) -> StaticPlacesProvider:
    """A single fake place `miles` due north of `here`."""
    meters = miles * METERS_PER_MILE
    north = Coordinate(here.latitude + 1.0, here.longitude)
    degrees = meters / distance_meters(here, north)
    return StaticPlacesProvider([
        Place(name=query, coordinate=Coordinate(here.latitude + degrees, here.longitude))
    ])


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Taco Drop")
    parser.add_argument("--lat", type=float, default=settings.latitude, help="Your latitude")
    parser.add_argument("--lon", type=float, default=settings.longitude, help="Your longitude")
    parser.add_argument("--query", "-q", default=settings.search_query, help="Place to search for")
    parser.add_argument("--offline", action="store_true", help="Skip the places service")
    parser.add_argument("--distance", type=float, default=2.5,
                        help="Distance in miles to the fake place (with --offline)")
    parser.add_argument("--location-status", default="authorizedWhenInUse",
                        help="Location authorization status (authorizedWhenInUse, denied, notDetermined, ...)")
    return parser


def main():
    settings = get_settings()
    args = build_parser(settings).parse_args()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    here = None
    if args.lat is not None and args.lon is not None:
        here = Coordinate(args.lat, args.lon)

    if args.offline:
        places = offline_places(args.query, here or DEFAULT_LOCATION, args.distance)
    else:
        places = NominatimPlacesProvider(
            settings.nominatim_url,
            settings.user_agent,
            timeout=settings.request_timeout_seconds,
            max_results=settings.max_results,
        )

    service = LocationService(
        places,
        FixedLocationProvider(here),
        query=args.query,
        radius_meters=settings.search_radius_meters,
    )

    game = Game(
        settings.screen_width,
        settings.screen_height,
        query=args.query,
        policy=settings.repopulate_policy,
    )
    renderer = Renderer(game)
    renderer.init_display()
    input_handler = InputHandler(game, service.request)

    service.start()
    permission = permission_from_status(args.location_status)
    logger.info("Location permission: %s", permission.name)
    if game.apply_permission(permission):
        service.request()

    logger.info("Starting game loop")
    clock = pygame.time.Clock()
    running = True
    try:
        while running:
            dt = clock.tick(settings.fps) / 1000.0

            for event in pygame.event.get():
                if input_handler.handle_event(event):
                    running = False

            # Results cross back to this thread here, and only here
            for result in service.poll():
                game.apply_search_result(result)

            game.update(dt)
            renderer.render()
    finally:
        service.stop()
        pygame.quit()


if __name__ == "__main__":
    main()
