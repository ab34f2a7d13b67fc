"""Tick-based simulation engine composing geometry, creature and food logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from wyrm.controls import DirectionQueue, request_direction
from wyrm.creature import Creature, Direction
from wyrm.food import DEFAULT_MAX_SPAWN_ATTEMPTS, FoodItem, FoodSpawner
from wyrm.geometry import Cell, GridGeometry

logger = logging.getLogger(__name__)


class TickResult(enum.Enum):
    """Outcome of a single tick."""

    CONTINUE = "continue"
    WALL_COLLISION = "wall"
    SELF_COLLISION = "self"

    @property
    def collided(self) -> bool:
        return self is not TickResult.CONTINUE


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the engine state, as consumed by the renderer."""

    creature: tuple[Cell, ...]
    heading: Direction
    food: FoodItem | None
    score: int
    tick: int

    @property
    def head(self) -> Cell:
        return self.creature[0]

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "tick": self.tick,
            "score": self.score,
            "heading": self.heading.name.lower(),
            "creature": [list(c) for c in self.creature],
            "food": self.food.to_dict() if self.food is not None else None,
        }


class SimulationEngine:
    """Single-creature, tick-based game engine.

    The engine owns the creature, the heading pair, the food item and the
    score for one session. Each call to :meth:`advance_tick` moves the
    creature one cell and reports the outcome as a :class:`TickResult`.
    """

    def __init__(
        self,
        geometry: GridGeometry,
        rng: np.random.Generator | None = None,
        max_spawn_attempts: int = DEFAULT_MAX_SPAWN_ATTEMPTS,
        initial_length: int = 3,
    ) -> None:
        if initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if geometry.width < initial_length or geometry.height < 1:
            raise ValueError(
                f"A {geometry.width}x{geometry.height} grid cannot hold a "
                f"creature of length {initial_length}.",
            )
        self.geometry = geometry
        self.initial_length = initial_length
        self.spawner = FoodSpawner(
            geometry,
            rng=rng if rng is not None else np.random.default_rng(),
            max_attempts=max_spawn_attempts,
        )
        self.queue = DirectionQueue()
        self.reset()

    def reset(self) -> None:
        """Start a fresh session: new creature, heading, score and food."""
        start_x = max(self.geometry.width // 4, self.initial_length - 1)
        start_y = self.geometry.height // 2
        self.creature = Creature(
            start_x, start_y, Direction.RIGHT, length=self.initial_length,
        )
        self.heading = Direction.RIGHT
        self.pending = Direction.RIGHT
        self.score = 0
        self.tick = 0
        self.result: TickResult | None = None
        self.queue.clear()
        self.food = self.spawner.spawn(self.creature.body)

    def request_direction(self, direction: Direction) -> Direction:
        """Apply a direction request to the pending heading immediately."""
        self.pending = request_direction(direction, self.heading, self.pending)
        return self.pending

    def advance_tick(self) -> TickResult:
        """Advance the game by one tick."""
        if self.result is not None and self.result.collided:
            return self.result

        self.pending = self.queue.drain(self.heading, self.pending)
        self.heading = self.pending

        new_head = self.creature.next_head(self.heading)

        # Wall check runs before the self check; both end the tick.
        if not self.geometry.in_bounds(new_head):
            return self._collide(TickResult.WALL_COLLISION)
        if self.creature.occupies(new_head):
            return self._collide(TickResult.SELF_COLLISION)

        if self.food is not None and new_head == self.food.cell:
            self.creature.grow_into(new_head)
            self.score += self.food.points
            self.food = self.spawner.spawn(self.creature.body)
        else:
            self.creature.move_into(new_head)

        self.tick += 1
        self.result = TickResult.CONTINUE
        return self.result

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            creature=self.creature.cells(),
            heading=self.heading,
            food=self.food,
            score=self.score,
            tick=self.tick,
        )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        state = self.snapshot().to_dict()
        state["game_over"] = self.result is not None and self.result.collided
        state["grid"] = {
            "width": self.geometry.width,
            "height": self.geometry.height,
        }
        return state

    def _collide(self, result: TickResult) -> TickResult:
        self.result = result
        logger.info(
            "Creature hit %s at tick %d with score %d.",
            "a wall" if result is TickResult.WALL_COLLISION else "itself",
            self.tick, self.score,
        )
        return result
