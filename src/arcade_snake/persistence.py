"""High score persistence adapters.

Stores never raise into the engine: a failed read degrades to a high score
of zero and a failed write is skipped, both with a logged warning.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_KEY = "snakeHighScore"


class HighScoreStore(Protocol):
    """Durable key -> integer store for the high score."""

    def read(self) -> int: ...

    def write(self, value: int) -> None: ...

    def clear(self) -> None: ...


def _coerce_score(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"Not an integer score: {value!r}")
    score = int(value)
    if score < 0:
        raise ValueError(f"Negative score: {score}")
    return score


class MemoryHighScoreStore:
    """Process-local store, mostly useful for tests and ephemeral servers."""

    def __init__(self, initial: int = 0, key: str = DEFAULT_KEY) -> None:
        self.key = key
        self._values: dict[str, int] = {}
        if initial:
            self._values[key] = initial

    def read(self) -> int:
        return self._values.get(self.key, 0)

    def write(self, value: int) -> None:
        self._values[self.key] = value

    def clear(self) -> None:
        self._values.pop(self.key, None)


class JsonFileHighScoreStore:
    """Keeps scores in a single JSON object on disk, one entry per key.

    Writes go through a sibling temp file and :func:`os.replace`, so a
    crash mid-write never leaves a truncated file behind.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        raw = json.loads(self.path.read_text())
        if not isinstance(raw, dict):
            raise ValueError("High score file must contain a JSON object.")
        return raw

    def _dump(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2))
        os.replace(tmp, self.path)

    def read(self) -> int:
        try:
            data = self._load()
            if self.key not in data:
                return 0
            return _coerce_score(data[self.key])
        except (OSError, ValueError) as exc:
            logger.warning(
                "Could not read high score from %s: %s", self.path, exc,
            )
            return 0

    def write(self, value: int) -> None:
        try:
            try:
                data = self._load()
            except ValueError:
                # Corrupt file: overwrite rather than lose the new record.
                data = {}
            data[self.key] = int(value)
            self._dump(data)
        except OSError as exc:
            logger.warning(
                "Could not write high score to %s: %s", self.path, exc,
            )

    def clear(self) -> None:
        try:
            data = self._load()
            if data.pop(self.key, None) is not None:
                self._dump(data)
        except (OSError, ValueError) as exc:
            logger.warning(
                "Could not clear high score in %s: %s", self.path, exc,
            )
