"""Arcade Snake — single-player snake game core."""

from arcade_snake.config import GameConfig
from arcade_snake.controls import Command, InputEvent, InputMapper
from arcade_snake.engine import GameEngine
from arcade_snake.grid import CellType, Grid
from arcade_snake.persistence import (
    HighScoreStore,
    JsonFileHighScoreStore,
    MemoryHighScoreStore,
)
from arcade_snake.scheduler import TickScheduler
from arcade_snake.session import GameSession
from arcade_snake.snake import Direction, Snake
from arcade_snake.state import GameState, Phase

__all__ = [
    "CellType",
    "Command",
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameSession",
    "GameState",
    "Grid",
    "HighScoreStore",
    "InputEvent",
    "InputMapper",
    "JsonFileHighScoreStore",
    "MemoryHighScoreStore",
    "Phase",
    "Snake",
    "TickScheduler",
]
