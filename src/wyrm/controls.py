"""Input normalization: keys, on-screen buttons and swipes to headings."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from wyrm.creature import Direction

DEFAULT_SWIPE_THRESHOLD = 30

_KEY_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "arrowup": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "arrowdown": Direction.DOWN,
    "s": Direction.DOWN,
    "left": Direction.LEFT,
    "arrowleft": Direction.LEFT,
    "a": Direction.LEFT,
    "right": Direction.RIGHT,
    "arrowright": Direction.RIGHT,
    "d": Direction.RIGHT,
}

_BUTTON_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def request_direction(
    candidate: object, current: Direction, pending: Direction,
) -> Direction:
    """Return the pending heading after a direction request.

    Reversals of the committed heading and anything that is not a
    :class:`Direction` leave *pending* unchanged.
    """
    if not isinstance(candidate, Direction):
        return pending
    if candidate.is_opposite(current):
        return pending
    return candidate


def direction_for_key(key: str) -> Direction | None:
    """Map a key name (``"ArrowUp"``, ``"w"``, ``"up"`` ...) to a heading."""
    return _KEY_MAP.get(key.lower())


def direction_for_button(name: str) -> Direction | None:
    """Map an on-screen button name to a heading."""
    return _BUTTON_MAP.get(name.lower())


def classify_swipe(
    start: tuple[float, float],
    end: tuple[float, float],
    threshold: float = DEFAULT_SWIPE_THRESHOLD,
) -> Direction | None:
    """Classify a touch drag from *start* to *end* as a heading.

    The axis with the larger displacement wins; ties count as vertical.
    Drags whose dominant displacement does not exceed *threshold* are not
    gestures.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) > abs(dy):
        if abs(dx) <= threshold:
            return None
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    if abs(dy) <= threshold:
        return None
    return Direction.DOWN if dy > 0 else Direction.UP


def parse_direction(token: object) -> Direction | None:
    """Normalize a direction token from any channel, or ``None``."""
    if isinstance(token, Direction):
        return token
    if isinstance(token, str):
        return direction_for_key(token.strip())
    return None


class DirectionQueue:
    """Direction requests posted by input channels between ticks.

    The engine drains the queue once at the start of each tick.
    """

    def __init__(self) -> None:
        self._requests: deque[Direction] = deque()

    def __len__(self) -> int:
        return len(self._requests)

    def post(self, token: object) -> bool:
        """Queue a request. Returns False if the token was not recognized."""
        direction = parse_direction(token)
        if direction is None:
            return False
        self._requests.append(direction)
        return True

    def drain(self, current: Direction, pending: Direction) -> Direction:
        """Fold all queued requests into a new pending heading."""
        while self._requests:
            pending = request_direction(
                self._requests.popleft(), current, pending,
            )
        return pending

    def clear(self) -> None:
        self._requests.clear()


@dataclass(frozen=True)
class ButtonPad:
    """On-screen d-pad laid out as a plus sign.

    ``origin`` is the top-left pixel of the 3x3 button block.
    """

    origin: tuple[int, int]
    button_size: int = 48

    def button_rects(self) -> dict[str, tuple[int, int, int, int]]:
        """Return ``(left, top, right, bottom)`` boxes keyed by button name."""
        ox, oy = self.origin
        s = self.button_size
        slots = {"up": (1, 0), "left": (0, 1), "right": (2, 1), "down": (1, 2)}
        return {
            name: (ox + col * s, oy + row * s, ox + (col + 1) * s, oy + (row + 1) * s)
            for name, (col, row) in slots.items()
        }

    @property
    def size(self) -> tuple[int, int]:
        return self.button_size * 3, self.button_size * 3

    def button_at(self, pos: tuple[float, float]) -> str | None:
        """Return the name of the button under *pos*, if any."""
        px, py = pos
        for name, (left, top, right, bottom) in self.button_rects().items():
            if left <= px < right and top <= py < bottom:
                return name
        return None

    def direction_at(self, pos: tuple[float, float]) -> Direction | None:
        name = self.button_at(pos)
        return direction_for_button(name) if name is not None else None
