"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants for a game session.

    Supports JSON serialization so a setup can be saved and replayed.
    """

    # Board
    grid_size: int = 20
    initial_length: int = 3

    # Scoring
    food_reward: int = 10

    # Timing
    tick_ms: int = 150

    # Input
    swipe_threshold: float = 30.0

    # Persistence
    high_score_key: str = "snakeHighScore"
    high_score_path: str = "highscore.json"

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.initial_length > self.grid_size - self.grid_size // 2:
            raise ValueError(
                "initial_length does not fit between the center row and "
                "the bottom edge."
            )
        if self.food_reward <= 0:
            raise ValueError("food_reward must be positive.")
        if self.tick_ms <= 0:
            raise ValueError("tick_ms must be positive.")
        if self.swipe_threshold <= 0:
            raise ValueError("swipe_threshold must be positive.")

    def with_overrides(self, **overrides) -> GameConfig:
        """Return a copy with *overrides* applied (``None`` values skipped)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError("Config file must contain a JSON object.")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**raw)
