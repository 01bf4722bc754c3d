"""Snake body and direction primitives."""

from __future__ import annotations

import enum
from collections import deque


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) unit vectors.

    Screen coordinates: ``y`` grows downward, so ``UP`` decrements it.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_reverse_of(self, other: Direction) -> bool:
        """Return True if turning from *other* to this would be a 180° turn."""
        return other.opposite is self


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. The body is laid out
    behind the head, opposite to *facing*.
    """

    def __init__(
        self,
        start_x: int,
        start_y: int,
        facing: Direction = Direction.UP,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = facing.value
        self.body: deque[tuple[int, int]] = deque(
            (start_x - dx * i, start_y - dy * i) for i in range(length)
        )

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> tuple[int, int]:
        """Return the head coordinate."""
        return self.body[0]

    def next_head(self, direction: Direction) -> tuple[int, int]:
        """Compute the next head position without moving."""
        dx, dy = direction.value
        x, y = self.head
        return x + dx, y + dy

    def advance(
        self, direction: Direction, grow: bool = False,
    ) -> tuple[int, int] | None:
        """Move the snake one cell in *direction*.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(self.next_head(direction))
        if grow:
            return None
        return self.body.pop()

    def occupies(self, x: int, y: int) -> bool:
        """Check whether the snake occupies a given cell."""
        return (x, y) in self.body

    def to_list(self) -> list[list[int]]:
        return [list(seg) for seg in self.body]
