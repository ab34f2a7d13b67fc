"""Tests for food kinds and the food spawner."""

import logging
from collections import Counter

import numpy as np
import pytest

from wyrm.food import FoodItem, FoodKind, FoodSpawner
from wyrm.geometry import GridGeometry


class TestFoodKind:
    def test_weights_sum_to_one(self):
        assert sum(k.weight for k in FoodKind) == pytest.approx(1.0)

    def test_points(self):
        assert FoodKind.APPLE.points == 1
        assert FoodKind.SHAMROCK.points == 2
        assert FoodKind.MISTLETOE.points == 3

    @pytest.mark.parametrize(
        ("u", "kind"),
        [
            (0.0, FoodKind.APPLE),
            (0.59, FoodKind.APPLE),
            (0.6, FoodKind.SHAMROCK),
            (0.84, FoodKind.SHAMROCK),
            (0.86, FoodKind.MISTLETOE),
            (0.999, FoodKind.MISTLETOE),
        ],
    )
    def test_from_draw_thresholds(self, u, kind):
        assert FoodKind.from_draw(u) is kind

    def test_item_points_follow_kind(self):
        item = FoodItem(cell=(1, 2), kind=FoodKind.SHAMROCK)
        assert item.points == 2
        assert item.to_dict() == {"cell": [1, 2], "kind": "shamrock", "points": 2}


class TestFoodSpawner:
    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError, match="at least 1"):
            FoodSpawner(GridGeometry(5, 5), max_attempts=0)

    def test_spawn_in_bounds(self):
        geometry = GridGeometry(7, 5)
        spawner = FoodSpawner(geometry, rng=np.random.default_rng(3))
        for _ in range(200):
            assert geometry.in_bounds(spawner.spawn().cell)

    def test_spawn_avoids_occupied(self):
        geometry = GridGeometry(4, 4)
        occupied = {(x, y) for x in range(4) for y in range(4)} - {(2, 3)}
        spawner = FoodSpawner(geometry, rng=np.random.default_rng(0), max_attempts=10_000)
        assert spawner.spawn(occupied).cell == (2, 3)

    def test_spawn_accepts_overlap_after_attempts(self, caplog):
        geometry = GridGeometry(4, 4)
        occupied = {(x, y) for x in range(4) for y in range(4)}
        spawner = FoodSpawner(geometry, rng=np.random.default_rng(0), max_attempts=5)
        with caplog.at_level(logging.WARNING, logger="wyrm.food"):
            item = spawner.spawn(occupied)
        assert item.cell in occupied
        assert "after 5 attempts" in caplog.text

    def test_spawn_deterministic(self):
        items_a = self._spawn_with_seed(42)
        items_b = self._spawn_with_seed(42)
        assert items_a == items_b

    def test_spawn_different_seeds(self):
        assert self._spawn_with_seed(1) != self._spawn_with_seed(2)

    def test_kind_frequencies_match_weights(self):
        spawner = FoodSpawner(GridGeometry(20, 20), rng=np.random.default_rng(1234))
        draws = 20_000
        counts = Counter(spawner.spawn().kind for _ in range(draws))
        for kind in FoodKind:
            assert counts[kind] / draws == pytest.approx(kind.weight, abs=0.02)

    @staticmethod
    def _spawn_with_seed(seed: int) -> list[FoodItem]:
        spawner = FoodSpawner(GridGeometry(10, 10), rng=np.random.default_rng(seed))
        return [spawner.spawn() for _ in range(5)]
