"""
Coordinates and great-circle distances.
NO UI DEPENDENCIES.
"""
import math
from dataclasses import dataclass

from .constants import (
    EARTH_RADIUS_METERS, METERS_PER_MILE, DEFAULT_LATITUDE, DEFAULT_LONGITUDE
)


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in degrees."""
    latitude: float
    longitude: float


DEFAULT_LOCATION = Coordinate(DEFAULT_LATITUDE, DEFAULT_LONGITUDE)


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def bounding_box(center: Coordinate, radius_meters: float):
    """
    Return (west, south, east, north) in degrees around a point.
    Longitude span widens with latitude; clamped near the poles.
    """
    dlat = math.degrees(radius_meters / EARTH_RADIUS_METERS)
    cos_lat = max(math.cos(math.radians(center.latitude)), 1e-6)
    dlon = min(180.0, math.degrees(radius_meters / (EARTH_RADIUS_METERS * cos_lat)))
    return (
        center.longitude - dlon,
        max(-90.0, center.latitude - dlat),
        center.longitude + dlon,
        min(90.0, center.latitude + dlat),
    )
