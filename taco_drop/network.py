"""
Location and places lookup running in a background thread.
Results are handed back to the main game thread through a queue.
"""

import logging
import queue
import threading
from typing import List, Optional, Protocol

import requests

from taco_drop.gameplay.geo import Coordinate, DEFAULT_LOCATION, bounding_box
from taco_drop.gameplay.search import (
    Place, PlacesProvider, SearchError, SearchResult, find_nearest
)
from taco_drop.gameplay.constants import SEARCH_QUERY, SEARCH_RADIUS_METERS

logger = logging.getLogger(__name__)


class LocationError(Exception):
    """The current position could not be determined."""


class LocationProvider(Protocol):
    def current_location(self) -> Coordinate:
        """Return the player's position; raise LocationError on failure."""
        ...


class FixedLocationProvider:
    """A location that never moves (configured lat/lon, or none at all)."""

    def __init__(self, coordinate: Optional[Coordinate] = None):
        self.coordinate = coordinate

    def current_location(self) -> Coordinate:
        if self.coordinate is None:
            raise LocationError("No location configured")
        return self.coordinate


class NominatimPlacesProvider:
    """
    Places search against an OpenStreetMap Nominatim endpoint.
    Only results inside the search box around the player are returned.
    """

    def __init__(
        self,
        url: str,
        user_agent: str,
        timeout: float = 10.0,
        max_results: int = 20,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.max_results = max_results
        self.session = session if session else requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def search(self, query: str, center: Coordinate, radius_meters: float) -> List[Place]:
        west, south, east, north = bounding_box(center, radius_meters)
        params = {
            "q": query,
            "format": "jsonv2",
            "limit": self.max_results,
            "viewbox": f"{west},{north},{east},{south}",
            "bounded": 1,
        }

        try:
            resp = self.session.get(self.url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise SearchError(f"Places request failed: {e}") from e
        except ValueError as e:
            raise SearchError(f"Bad places response: {e}") from e

        if not isinstance(data, list):
            raise SearchError("Bad places response: expected a list")

        places = []
        for entry in data:
            try:
                coordinate = Coordinate(float(entry["lat"]), float(entry["lon"]))
            except (KeyError, TypeError, ValueError):
                logger.debug("Skipping malformed place entry: %r", entry)
                continue
            name = entry.get("name") or entry.get("display_name") or query
            places.append(Place(name=name, coordinate=coordinate))
        return places


class LocationService:
    """
    Looks up the distance to the nearest place in a background thread.

    The main thread calls request() to ask for a lookup and poll() each
    frame to collect finished results. Game state is never touched from
    the worker thread.
    """

    def __init__(
        self,
        places: PlacesProvider,
        location: LocationProvider,
        query: str = SEARCH_QUERY,
        radius_meters: float = SEARCH_RADIUS_METERS,
    ):
        self.places = places
        self.location = location
        self.query = query
        self.radius_meters = radius_meters

        # Thread-safe queues
        self.requests: queue.Queue = queue.Queue()
        self.results: queue.Queue = queue.Queue()

        # Thread management
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def start(self) -> None:
        """Start the lookup thread."""
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the lookup thread."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None

    def request(self) -> None:
        """Queue a lookup. Requests made while one is pending are merged."""
        self.requests.put(True)

    def poll(self) -> List[SearchResult]:
        """Collect finished lookups (main thread)."""
        found = []
        while True:
            try:
                found.append(self.results.get_nowait())
            except queue.Empty:
                return found

    def lookup(self) -> SearchResult:
        """Run one location fix + search synchronously."""
        try:
            here = self.location.current_location()
        except LocationError as e:
            logger.warning("Location error: %s, using default location", e)
            here = DEFAULT_LOCATION

        return find_nearest(self.places, self.query, here, self.radius_meters)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.requests.get(timeout=0.1)
            except queue.Empty:
                continue

            # Drop duplicates queued while we were busy
            while True:
                try:
                    self.requests.get_nowait()
                except queue.Empty:
                    break

            try:
                result = self.lookup()
            except Exception as e:
                logger.exception("Lookup failed")
                result = SearchResult(error=SearchError(str(e)))
            self.results.put(result)
