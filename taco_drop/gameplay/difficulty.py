"""
Proximity-driven difficulty - distance buckets, taco counts, level state.
NO UI DEPENDENCIES.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .constants import (
    LEVEL_DISTANCE_BANDS, MIN_LEVEL, INITIAL_LEVEL,
    TACO_COUNTS, DEFAULT_TACO_COUNT
)

logger = logging.getLogger(__name__)


def classify_distance(distance_miles: float) -> int:
    """
    Map a distance to the nearest taco place onto a level.

    Closer is harder: within a mile is level 5, beyond four miles is level 1.
    Each band's upper bound is inclusive.
    """
    for upper_bound, level in LEVEL_DISTANCE_BANDS:
        if distance_miles <= upper_bound:
            return level
    return MIN_LEVEL


def count_for_level(level: int) -> int:
    """Number of tacos to spawn for a level (2 for anything unknown)."""
    return TACO_COUNTS.get(level, DEFAULT_TACO_COUNT)


class RepopulatePolicy(Enum):
    """When a measurement should ask the field to respawn."""
    ON_CHANGE = "on_change"  # Only when the level actually changes
    ALWAYS = "always"        # Every measurement, even at the same level


@dataclass(frozen=True)
class RepopulateEvent:
    """Tells the rendering side to respawn `count` tacos for `level`."""
    level: int
    count: int


RepopulateListener = Callable[[RepopulateEvent], None]


class DifficultyController:
    """
    Holds the current level for one game session.

    Not thread-safe: measurements must arrive on a single thread, otherwise
    two calls can both see the old level and emit duplicate events.

    Usage:
        controller = DifficultyController()
        controller.subscribe(field_respawner)
        event = controller.on_distance_measured(0.5)  # -> RepopulateEvent(5, 25)
    """

    def __init__(self, policy: RepopulatePolicy = RepopulatePolicy.ON_CHANGE):
        self.policy = policy
        self._current_level = INITIAL_LEVEL
        self._listeners: List[RepopulateListener] = []

    @property
    def current_level(self) -> int:
        return self._current_level

    @property
    def current_count(self) -> int:
        """Taco count for the level we're currently on."""
        return count_for_level(self._current_level)

    def subscribe(self, listener: RepopulateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: RepopulateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def on_distance_measured(self, distance_miles: float) -> Optional[RepopulateEvent]:
        """
        Feed a new distance measurement.

        Returns a RepopulateEvent when the field should respawn, None when
        the level is unchanged (under the ON_CHANGE policy).
        """
        new_level = classify_distance(distance_miles)
        logger.debug("Distance %.3f miles -> level %d", distance_miles, new_level)

        if new_level == self._current_level and self.policy == RepopulatePolicy.ON_CHANGE:
            return None

        if new_level != self._current_level:
            logger.info("Level %d -> %d", self._current_level, new_level)
            self._current_level = new_level

        event = RepopulateEvent(level=new_level, count=count_for_level(new_level))
        for listener in list(self._listeners):
            listener(event)
        return event
