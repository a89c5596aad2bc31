"""
Taco field - the falling, tappable tacos.
NO UI DEPENDENCIES.

Motion is simple: gravity, bounces off the walls and floor,
and a spin that dies down. Tacos do not collide with each other.
"""
import random
from dataclasses import dataclass
from typing import List, Optional

from .constants import (
    TACO_SIZE, SPAWN_MARGIN, SPAWN_START_Y, SPAWN_STACK_SPACING,
    MAX_ANGULAR_VELOCITY, GRAVITY, ELASTICITY, FRICTION, ANGULAR_DAMPING,
    REST_SPEED, POP_DURATION, POP_SCALE
)


@dataclass
class Taco:
    """A single taco. (x, y) is the top-left corner in pixels."""
    id: int
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0
    angular_velocity: float = 0.0
    size: int = TACO_SIZE
    pop_timer: Optional[float] = None  # Seconds into the pop, None if intact

    @property
    def popping(self) -> bool:
        return self.pop_timer is not None

    @property
    def pop_progress(self) -> float:
        """0.0 to 1.0 through the pop animation."""
        if self.pop_timer is None:
            return 0.0
        return min(1.0, self.pop_timer / POP_DURATION)

    @property
    def scale(self) -> float:
        return 1.0 + (POP_SCALE - 1.0) * self.pop_progress

    @property
    def alpha(self) -> float:
        return 1.0 - self.pop_progress

    @property
    def center(self):
        return (self.x + self.size / 2, self.y + self.size / 2)

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.size and self.y <= py <= self.y + self.size


class TacoField:
    """
    All tacos currently on screen.

    Usage:
        field = TacoField(400, 800)
        field.spawn(11)
        cleared = field.update(dt)
    """

    def __init__(self, width: int, height: int, rng: Optional[random.Random] = None):
        self.width = width
        self.height = height
        self.rng = rng if rng else random.Random()
        self.tacos: List[Taco] = []
        self._next_id = 0

    def __len__(self) -> int:
        return len(self.tacos)

    @property
    def is_empty(self) -> bool:
        return not self.tacos

    def clear(self) -> None:
        self.tacos.clear()

    def spawn(self, count: int) -> List[Taco]:
        """Replace the field with `count` new tacos stacked above the screen."""
        self.clear()

        low = SPAWN_MARGIN
        high = max(low, self.width - SPAWN_MARGIN)

        for i in range(count):
            taco = Taco(
                id=self._next_id,
                x=self.rng.uniform(low, high),
                y=SPAWN_START_Y - i * SPAWN_STACK_SPACING,
                angular_velocity=self.rng.uniform(-MAX_ANGULAR_VELOCITY, MAX_ANGULAR_VELOCITY),
            )
            self._next_id += 1
            self.tacos.append(taco)

        return list(self.tacos)

    def hit_test(self, px: float, py: float) -> Optional[Taco]:
        """Topmost intact taco under the point, if any."""
        for taco in reversed(self.tacos):
            if not taco.popping and taco.contains(px, py):
                return taco
        return None

    def pop(self, taco: Taco) -> bool:
        """
        Start popping a taco. It stops moving and is removed once the
        animation finishes. Returns False if it was already popping.
        """
        if taco.popping or taco not in self.tacos:
            return False
        taco.pop_timer = 0.0
        taco.vx = taco.vy = 0.0
        taco.angular_velocity = 0.0
        return True

    def update(self, dt: float) -> bool:
        """
        Advance motion and pop animations.
        Returns True if this step removed the last taco.
        """
        if not self.tacos:
            return False

        for taco in self.tacos:
            if taco.popping:
                taco.pop_timer += dt
            else:
                self._step(taco, dt)

        remaining = [t for t in self.tacos if not (t.popping and t.pop_timer >= POP_DURATION)]
        removed_any = len(remaining) < len(self.tacos)
        self.tacos = remaining
        return removed_any and not self.tacos

    def _step(self, taco: Taco, dt: float) -> None:
        taco.vy += GRAVITY * dt
        taco.x += taco.vx * dt
        taco.y += taco.vy * dt
        taco.angle += taco.angular_velocity * dt
        taco.angular_velocity *= max(0.0, 1.0 - ANGULAR_DAMPING * dt)

        # Floor
        floor = self.height - taco.size
        if taco.y > floor:
            taco.y = floor
            taco.vy = -taco.vy * ELASTICITY
            taco.vx *= (1.0 - FRICTION)
            if abs(taco.vy) < REST_SPEED:
                taco.vy = 0.0

        # Walls
        right = self.width - taco.size
        if taco.x < 0:
            taco.x = 0.0
            taco.vx = -taco.vx * ELASTICITY
        elif taco.x > right:
            taco.x = max(0.0, right)
            taco.vx = -taco.vx * ELASTICITY
