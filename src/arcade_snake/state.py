"""Mutable game state owned by :class:`~arcade_snake.engine.GameEngine`."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from arcade_snake.grid import Grid
from arcade_snake.snake import Direction, Snake


class Phase(str, enum.Enum):
    """Lifecycle phases of a game."""

    IDLE = "idle"
    ACTIVE = "active"
    PAUSED = "paused"
    TERMINATED = "terminated"


@dataclass
class GameState:
    """Everything a renderer needs to draw one frame.

    ``facing`` is the direction applied on the last step; ``pending`` is
    the direction the next step will apply.
    """

    snake: Snake
    food: tuple[int, int] | None
    facing: Direction
    pending: Direction
    phase: Phase = Phase.IDLE
    score: int = 0
    high_score: int = 0
    tick: int = 0

    @property
    def new_high_score(self) -> bool:
        return self.score > 0 and self.score == self.high_score

    def to_dict(self, grid: Grid) -> dict:
        """Return the full, serializable render snapshot."""
        return {
            "tick": self.tick,
            "phase": self.phase.value,
            "score": self.score,
            "high_score": self.high_score,
            "new_high_score": self.new_high_score,
            "snake": {
                "body": self.snake.to_list(),
                "facing": self.facing.name.lower(),
                "pending": self.pending.name.lower(),
            },
            "food": list(self.food) if self.food is not None else None,
            "grid": grid.to_dict(self.snake.body, self.food),
        }
