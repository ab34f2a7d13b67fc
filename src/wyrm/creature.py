"""Headings and the wyrm's body."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable

from wyrm.geometry import Cell


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) values. Screen y grows downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_opposite(self, other: Direction) -> bool:
        """True when *other* points the exact other way (a 180° reversal)."""
        return _OPPOSITES[self] is other


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Creature:
    """The wyrm as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        head_x: int = 0,
        head_y: int = 0,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
        body: Iterable[Cell] | None = None,
    ) -> None:
        """Lay out a straight body behind the head, or take *body* as given."""
        if body is None:
            body = (
                (head_x - direction.dx * i, head_y - direction.dy * i)
                for i in range(length)
            )
        self.body: deque[Cell] = deque(tuple(c) for c in body)
        if not self.body:
            raise ValueError("Creature length must be at least 1.")

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> Creature:
        """Build a creature from explicit cells, head first."""
        return cls(body=cells)

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def next_head(self, direction: Direction) -> Cell:
        """Compute the cell the head would move into."""
        x, y = self.head
        return x + direction.dx, y + direction.dy

    def occupies(self, cell: Cell) -> bool:
        return cell in self.body

    def grow_into(self, cell: Cell) -> None:
        """Prepend a new head and keep the tail."""
        self.body.appendleft(cell)

    def move_into(self, cell: Cell) -> Cell:
        """Prepend a new head and drop the tail. Returns the vacated cell."""
        self.body.appendleft(cell)
        return self.body.pop()

    def cells(self) -> tuple[Cell, ...]:
        return tuple(self.body)

    def to_dict(self) -> dict:
        """Serialize creature state to a dictionary."""
        return {"body": [list(seg) for seg in self.body]}
