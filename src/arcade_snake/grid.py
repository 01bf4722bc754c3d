"""Square board geometry and occupancy snapshots."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np


class CellType(enum.IntEnum):
    """Integer codes stored in an occupancy matrix."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """Square game board of side ``size``.

    Coordinates are ``(x, y)`` = ``(column, row)``. The occupancy matrix is
    indexed ``[row, column]`` to match NumPy ordering.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the board."""
        return 0 <= x < self.size and 0 <= y < self.size

    def occupancy(
        self,
        snake: Iterable[tuple[int, int]],
        food: tuple[int, int] | None,
    ) -> np.ndarray:
        """Build an int8 matrix of :class:`CellType` codes."""
        cells = np.zeros((self.size, self.size), dtype=np.int8)
        for x, y in snake:
            cells[y, x] = CellType.SNAKE
        if food is not None:
            cells[food[1], food[0]] = CellType.FOOD
        return cells

    def to_dict(
        self,
        snake: Iterable[tuple[int, int]],
        food: tuple[int, int] | None,
    ) -> dict:
        """Serialize the board and its occupancy to a dictionary."""
        return {
            "size": self.size,
            "cells": self.occupancy(snake, food).tolist(),
        }
