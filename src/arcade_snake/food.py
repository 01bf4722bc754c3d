"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from arcade_snake.grid import Grid
    from arcade_snake.snake import Snake

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food uniformly at random on cells the snake does not cover.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Placement is rejection sampling: draw a cell, redraw while it lands
    on the snake.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def place(self, snake: Snake) -> tuple[int, int] | None:
        """Return a fresh food cell outside *snake*.

        Returns ``None`` when the snake covers the whole board.
        """
        if len(snake) >= self.grid.cell_count:
            logger.warning("No free cells left for food placement.")
            return None

        size = self.grid.size
        while True:
            x, y = self.rng.integers(0, size, size=2).tolist()
            if not snake.occupies(x, y):
                return x, y
