"""
Nearest-place search - provider protocol and single-shot results.
NO UI DEPENDENCIES.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .geo import Coordinate, distance_meters, meters_to_miles
from .constants import SEARCH_RADIUS_METERS

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """A places search could not be completed."""


class NoPlacesFound(SearchError):
    """The search worked but nothing matched nearby."""


@dataclass(frozen=True)
class Place:
    name: str
    coordinate: Coordinate


class PlacesProvider(Protocol):
    """Anything that can look up places around a point."""

    def search(self, query: str, center: Coordinate, radius_meters: float) -> List[Place]:
        """Return matching places; raise SearchError on failure."""
        ...


@dataclass
class SearchResult:
    """
    Outcome of one nearest-place lookup.
    Exactly one of `distance_miles` / `error` is set.
    """
    distance_miles: Optional[float] = None
    place: Optional[Place] = None
    error: Optional[SearchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StaticPlacesProvider:
    """In-memory provider over a fixed list of places."""

    def __init__(self, places: Sequence[Place] = ()):
        self.places = list(places)

    def search(self, query: str, center: Coordinate, radius_meters: float) -> List[Place]:
        needle = query.lower()
        return [
            p for p in self.places
            if needle in p.name.lower()
            and distance_meters(center, p.coordinate) <= radius_meters
        ]


def find_nearest(
    provider: PlacesProvider,
    query: str,
    location: Coordinate,
    radius_meters: float = SEARCH_RADIUS_METERS,
) -> SearchResult:
    """
    Search around `location` and measure the distance to the closest match.
    Failures come back as a SearchResult with `error` set, never raised.
    """
    try:
        places = provider.search(query, location, radius_meters)
        if not places:
            raise NoPlacesFound(f"No '{query}' locations within {radius_meters:.0f} m")
    except SearchError as e:
        logger.warning("Search error: %s", e)
        return SearchResult(error=e)

    nearest = min(places, key=lambda p: distance_meters(location, p.coordinate))
    miles = meters_to_miles(distance_meters(location, nearest.coordinate))
    logger.info("Found %s at %.2f miles", nearest.name, miles)
    return SearchResult(distance_miles=miles, place=nearest)
