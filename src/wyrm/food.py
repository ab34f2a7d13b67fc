"""Food kinds and weighted food spawning."""

from __future__ import annotations

import enum
import logging
from collections.abc import Container
from dataclasses import dataclass
from itertools import accumulate

import numpy as np

from wyrm.geometry import Cell, GridGeometry

logger = logging.getLogger(__name__)

DEFAULT_MAX_SPAWN_ATTEMPTS = 100


class FoodKind(enum.Enum):
    """Consumable items: (name, symbol, points, spawn weight)."""

    APPLE = ("Avalon Apple", "🍎", 1, 0.60)
    SHAMROCK = ("Lucky Shamrock", "☘️", 2, 0.25)
    MISTLETOE = ("Druid's Mistletoe", "🌿", 3, 0.15)

    def __init__(
        self, label: str, symbol: str, points: int, weight: float,
    ) -> None:
        self.label = label
        self.symbol = symbol
        self.points = points
        self.weight = weight

    @classmethod
    def from_draw(cls, u: float) -> FoodKind:
        """Map a uniform draw in [0, 1) onto a kind by cumulative weight."""
        for kind, threshold in zip(cls, _THRESHOLDS, strict=True):
            if u < threshold:
                return kind
        # Float rounding can leave the last threshold a hair under 1.0.
        return list(cls)[-1]


_THRESHOLDS: tuple[float, ...] = tuple(accumulate(k.weight for k in FoodKind))


@dataclass(frozen=True)
class FoodItem:
    """A food kind sitting on a grid cell."""

    cell: Cell
    kind: FoodKind

    @property
    def points(self) -> int:
        return self.kind.points

    def to_dict(self) -> dict:
        return {
            "cell": list(self.cell),
            "kind": self.kind.name.lower(),
            "points": self.kind.points,
        }


class FoodSpawner:
    """Places food on the grid.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Placement avoids occupied cells for up to ``max_attempts`` draws; after
    that the last candidate is used even if it overlaps.
    """

    def __init__(
        self,
        geometry: GridGeometry,
        rng: np.random.Generator | None = None,
        max_attempts: int = DEFAULT_MAX_SPAWN_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.geometry = geometry
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def draw_kind(self) -> FoodKind:
        return FoodKind.from_draw(float(self.rng.random()))

    def draw_cell(self) -> Cell:
        x = int(self.rng.integers(self.geometry.width))
        y = int(self.rng.integers(self.geometry.height))
        return x, y

    def spawn(self, occupied: Container[Cell] = ()) -> FoodItem:
        """Spawn one food item, avoiding *occupied* cells where possible."""
        kind = self.draw_kind()
        for attempt in range(1, self.max_attempts + 1):
            cell = self.draw_cell()
            if cell not in occupied:
                break
        else:
            logger.warning(
                "No free cell found after %d attempts; placing %s on "
                "occupied cell %s.",
                attempt, kind.name, cell,
            )
        logger.debug("Spawned %s at %s.", kind.name, cell)
        return FoodItem(cell=cell, kind=kind)
