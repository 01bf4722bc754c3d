"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from arcade_snake.controls import (
    DIRECTION_NAMES,
    Command,
    InputEvent,
    event_from_button,
    event_from_key,
    event_from_swipe,
)
from arcade_snake.state import Phase


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_size: int | None = Field(default=None, ge=4, le=100)
    tick_ms: int | None = Field(default=None, ge=20, le=2000)
    seed: int | None = None


class InputRequest(BaseModel):
    """One input event, given as exactly one of its accepted shapes.

    ``swipe`` is a ``[dx, dy]`` gesture delta in screen units; ``button``
    names an on-screen control (``"up"`` .. ``"right"``).
    """

    direction: str | None = None
    command: Command | None = None
    key: str | None = None
    button: str | None = None
    swipe: tuple[float, float] | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> InputRequest:
        given = [
            v for v in (
                self.direction, self.command, self.key, self.button,
                self.swipe,
            )
            if v is not None
        ]
        if len(given) != 1:
            raise ValueError(
                "Provide exactly one of direction, command, key, button, swipe.",
            )
        if (
            self.direction is not None
            and self.direction.lower() not in DIRECTION_NAMES
        ):
            raise ValueError(f"Unknown direction: {self.direction!r}")
        return self

    def to_event(self, swipe_threshold: float) -> InputEvent | None:
        """Translate to an engine event; unknown keys and buttons yield ``None``."""
        if self.direction is not None:
            return InputEvent.turn(DIRECTION_NAMES[self.direction.lower()])
        if self.command is not None:
            return InputEvent.control(self.command)
        if self.key is not None:
            return event_from_key(self.key)
        if self.button is not None:
            return event_from_button(self.button)
        dx, dy = self.swipe
        return event_from_swipe(dx, dy, threshold=swipe_threshold)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: Phase
    score: int
    high_score: int
    grid_size: int
    tick_ms: int


class HighScoreResponse(BaseModel):
    high_score: int

