"""Tests for the creature module."""

import pytest

from wyrm.creature import Creature, Direction


class TestDirection:
    @pytest.mark.parametrize(
        ("direction", "opposite"),
        [
            (Direction.UP, Direction.DOWN),
            (Direction.DOWN, Direction.UP),
            (Direction.LEFT, Direction.RIGHT),
            (Direction.RIGHT, Direction.LEFT),
        ],
    )
    def test_opposites(self, direction, opposite):
        assert direction.opposite is opposite
        assert direction.is_opposite(opposite)
        assert not direction.is_opposite(direction)

    def test_vectors_use_screen_coordinates(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.RIGHT.value == (1, 0)


class TestCreatureInit:
    def test_default_creation(self):
        creature = Creature(5, 5)
        assert creature.head == (5, 5)
        assert len(creature) == 3

    def test_body_extends_opposite_to_direction(self):
        creature = Creature(5, 5, Direction.RIGHT, length=3)
        assert creature.cells() == ((5, 5), (4, 5), (3, 5))

    def test_body_extends_down_when_heading_up(self):
        creature = Creature(5, 5, Direction.UP, length=3)
        assert creature.cells() == ((5, 5), (5, 6), (5, 7))

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Creature(0, 0, length=0)

    def test_from_cells(self):
        creature = Creature.from_cells([(1, 1), (1, 2)])
        assert creature.head == (1, 1)
        assert creature.tail == (1, 2)

    def test_explicit_body_overrides_layout(self):
        creature = Creature(body=[[5, 5], [6, 5], [5, 5]])
        assert creature.cells() == ((5, 5), (6, 5), (5, 5))
        assert Creature.from_cells(creature.body).cells() == creature.cells()

    def test_from_cells_empty(self):
        with pytest.raises(ValueError, match="at least 1"):
            Creature.from_cells([])


class TestCreatureMovement:
    def test_next_head(self):
        creature = Creature(5, 5)
        assert creature.next_head(Direction.RIGHT) == (6, 5)
        assert creature.next_head(Direction.UP) == (5, 4)

    def test_move_into_keeps_length(self):
        creature = Creature(5, 5, Direction.RIGHT, length=3)
        vacated = creature.move_into((6, 5))
        assert vacated == (3, 5)
        assert creature.cells() == ((6, 5), (5, 5), (4, 5))

    def test_grow_into_adds_one(self):
        creature = Creature(5, 5, Direction.RIGHT, length=3)
        creature.grow_into((6, 5))
        assert creature.cells() == ((6, 5), (5, 5), (4, 5), (3, 5))

    def test_occupies(self):
        creature = Creature(5, 5, Direction.RIGHT, length=3)
        assert creature.occupies((3, 5))
        assert not creature.occupies((0, 0))

    def test_to_dict(self):
        creature = Creature(2, 2, Direction.RIGHT, length=2)
        assert creature.to_dict() == {"body": [[2, 2], [1, 2]]}
