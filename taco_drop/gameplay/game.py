"""
Main Game class - ties difficulty, the taco field and scoring together.
NO UI DEPENDENCIES.

This is the central gameplay module. It can be fully tested
without any UI framework or network access.
"""
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .difficulty import DifficultyController, RepopulateEvent, RepopulatePolicy
from .permissions import LocationPermission, PERMISSION_DENIED_MESSAGE
from .search import SearchResult, NoPlacesFound
from .tacos import Taco, TacoField
from .constants import (
    SEARCH_QUERY, PULSE_GROW_TIME, PULSE_SHRINK_TIME, PULSE_SCALE
)

logger = logging.getLogger(__name__)


@dataclass
class GameEvent:
    """Something that happened during gameplay (for UI to react to)."""
    pass


@dataclass
class StatusChangedEvent(GameEvent):
    text: str


@dataclass
class LevelChangedEvent(GameEvent):
    old_level: int
    new_level: int


@dataclass
class TacosSpawnedEvent(GameEvent):
    level: int
    count: int


@dataclass
class TacoPoppedEvent(GameEvent):
    taco_id: int
    score: int


@dataclass
class FieldClearedEvent(GameEvent):
    """Every taco has been popped; a fresh batch follows."""
    level: int


class Game:
    """
    One game session.

    This class is COMPLETELY DECOUPLED from UI and from location lookup.
    Search results are pushed in from outside, on the same thread that
    calls update() and tap().

    Usage:
        game = Game(width=400, height=800)
        if game.apply_permission(LocationPermission.GRANTED):
            location_service.request()
        ...
        for result in location_service.poll():
            game.apply_search_result(result)
        game.update(dt)
    """

    def __init__(
        self,
        width: int,
        height: int,
        query: str = SEARCH_QUERY,
        policy: RepopulatePolicy = RepopulatePolicy.ON_CHANGE,
        rng: Optional[random.Random] = None,
    ):
        self.query = query
        self.controller = DifficultyController(policy)
        self.field = TacoField(width, height, rng)

        self.score = 0
        self.status_text = f"Finding nearest {query}..."
        self.distance_miles: Optional[float] = None
        self.refreshing = False
        self.permission = LocationPermission.NOT_DETERMINED

        # Last level announced to the UI
        self._shown_level = self.controller.current_level

        # Level label pulse, seconds since it started (None when idle)
        self.pulse_timer: Optional[float] = None

        self._events: List[GameEvent] = []

        self.controller.subscribe(self._on_repopulate)

    @property
    def level(self) -> int:
        return self.controller.current_level

    @property
    def pulse_scale(self) -> float:
        """Current scale of the level label."""
        t = self.pulse_timer
        if t is None:
            return 1.0
        if t < PULSE_GROW_TIME:
            return 1.0 + (PULSE_SCALE - 1.0) * (t / PULSE_GROW_TIME)
        t -= PULSE_GROW_TIME
        if t < PULSE_SHRINK_TIME:
            return PULSE_SCALE - (PULSE_SCALE - 1.0) * (t / PULSE_SHRINK_TIME)
        return 1.0

    # =========================================================================
    # LOCATION INPUT
    # =========================================================================

    def apply_permission(self, permission: LocationPermission) -> bool:
        """
        React to the current location permission.
        Returns True if the caller should request a location now.
        """
        self.permission = permission
        if permission == LocationPermission.DENIED:
            self._set_status(PERMISSION_DENIED_MESSAGE)
            self.refreshing = False
            return False
        return permission == LocationPermission.GRANTED

    def apply_search_result(self, result: SearchResult) -> Optional[RepopulateEvent]:
        """
        Apply a nearest-place lookup.
        Errors only change the status line; the level stays where it is.
        Results arriving without a granted permission are dropped.
        """
        self.refreshing = False

        if self.permission != LocationPermission.GRANTED:
            logger.debug("Ignoring search result, location permission is %s", self.permission.name)
            return None

        if not result.ok:
            if isinstance(result.error, NoPlacesFound):
                self._set_status(f"No {self.query} locations found nearby")
            else:
                self._set_status(f"Error finding {self.query} locations")
            return None

        self.distance_miles = result.distance_miles
        self._set_status(f"Nearest {self.query}: {result.distance_miles:.1f} miles")

        event = self.controller.on_distance_measured(result.distance_miles)
        if event is None and self.field.is_empty:
            # Same level, but nothing on screen yet (first fix, or after a refresh)
            self._spawn(self.controller.current_level, self.controller.current_count)
        return event

    def refresh(self) -> bool:
        """
        Pull-to-refresh: drop the current tacos and ask for a new location.
        Returns True if the caller should request a location.
        """
        if self.permission != LocationPermission.GRANTED or self.refreshing:
            return False
        self.field.clear()
        self.refreshing = True
        return True

    # =========================================================================
    # PLAY
    # =========================================================================

    def tap(self, x: float, y: float) -> Optional[Taco]:
        """Pop the taco under the point, if any."""
        taco = self.field.hit_test(x, y)
        if taco is None or not self.field.pop(taco):
            return None
        self.score += 1
        self._events.append(TacoPoppedEvent(taco.id, self.score))
        return taco

    def update(self, dt: float) -> List[GameEvent]:
        """
        Advance the game by dt seconds.
        Returns events that occurred since the last call.
        """
        if self.pulse_timer is not None:
            self.pulse_timer += dt
            if self.pulse_timer >= PULSE_GROW_TIME + PULSE_SHRINK_TIME:
                self.pulse_timer = None

        if self.field.update(dt):
            level = self.controller.current_level
            logger.debug("Field cleared at level %d", level)
            self._events.append(FieldClearedEvent(level))
            self._spawn(level, self.controller.current_count)

        return self.drain_events()

    def drain_events(self) -> List[GameEvent]:
        events = self._events
        self._events = []
        return events

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _on_repopulate(self, event: RepopulateEvent) -> None:
        if event.level != self._shown_level:
            self._events.append(LevelChangedEvent(self._shown_level, event.level))
            self._shown_level = event.level
        self.pulse_timer = 0.0
        self._spawn(event.level, event.count)

    def _spawn(self, level: int, count: int) -> None:
        logger.info("Creating %d tacos for level %d", count, level)
        self.field.spawn(count)
        self._events.append(TacosSpawnedEvent(level, count))

    def _set_status(self, text: str) -> None:
        if text != self.status_text:
            self.status_text = text
            self._events.append(StatusChangedEvent(text))
