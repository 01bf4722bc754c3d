"""Input vocabulary, raw-device translators, and the phase state machine.

Devices (keyboard, touch, on-screen buttons) are translated into
:class:`InputEvent` values first; :class:`InputMapper` then applies an
event to a :class:`~arcade_snake.engine.GameEngine` according to the
current phase. Inputs that do not apply in a phase are dropped silently.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from arcade_snake.snake import Direction
from arcade_snake.state import Phase

if TYPE_CHECKING:
    from arcade_snake.engine import GameEngine

logger = logging.getLogger(__name__)

DEFAULT_SWIPE_THRESHOLD = 30.0


class Command(str, enum.Enum):
    """Non-directional controls."""

    ACTIVATE = "activate"
    PAUSE_RESUME = "pause-resume"
    RESET = "reset"


@dataclass(frozen=True)
class InputEvent:
    """A single discrete input: either a direction or a command."""

    direction: Direction | None = None
    command: Command | None = None

    def __post_init__(self) -> None:
        if (self.direction is None) == (self.command is None):
            raise ValueError(
                "InputEvent needs exactly one of direction or command.",
            )

    @classmethod
    def turn(cls, direction: Direction) -> InputEvent:
        return cls(direction=direction)

    @classmethod
    def control(cls, command: Command) -> InputEvent:
        return cls(command=command)


DIRECTION_NAMES: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

_KEY_MAP: dict[str, InputEvent] = {
    "ArrowUp": InputEvent.turn(Direction.UP),
    "ArrowDown": InputEvent.turn(Direction.DOWN),
    "ArrowLeft": InputEvent.turn(Direction.LEFT),
    "ArrowRight": InputEvent.turn(Direction.RIGHT),
    "w": InputEvent.turn(Direction.UP),
    "s": InputEvent.turn(Direction.DOWN),
    "a": InputEvent.turn(Direction.LEFT),
    "d": InputEvent.turn(Direction.RIGHT),
    " ": InputEvent.control(Command.ACTIVATE),
    "Enter": InputEvent.control(Command.RESET),
}


def event_from_key(key: str) -> InputEvent | None:
    """Translate a DOM-style ``KeyboardEvent.key`` value."""
    event = _KEY_MAP.get(key)
    if event is None and len(key) == 1:
        event = _KEY_MAP.get(key.lower())
    return event


def event_from_swipe(
    dx: float,
    dy: float,
    threshold: float = DEFAULT_SWIPE_THRESHOLD,
) -> InputEvent:
    """Classify a touch gesture by its start-to-end delta.

    Movement under *threshold* on both axes is a tap. Otherwise the axis
    with the larger magnitude wins; equal magnitudes count as vertical.
    """
    if abs(dx) < threshold and abs(dy) < threshold:
        return InputEvent.control(Command.ACTIVATE)
    if abs(dx) > abs(dy):
        return InputEvent.turn(Direction.RIGHT if dx > 0 else Direction.LEFT)
    return InputEvent.turn(Direction.DOWN if dy > 0 else Direction.UP)


def event_from_button(name: str) -> InputEvent | None:
    """Translate an on-screen control button (``"up"`` .. ``"right"``)."""
    direction = DIRECTION_NAMES.get(name.lower())
    return InputEvent.turn(direction) if direction is not None else None


class InputMapper:
    """Applies input events to an engine according to its phase."""

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine

    def apply(self, event: InputEvent) -> bool:
        """Apply *event*; return True if it changed anything."""
        handlers = {
            Phase.IDLE: self._on_idle,
            Phase.ACTIVE: self._on_active,
            Phase.PAUSED: self._on_paused,
            Phase.TERMINATED: self._on_terminated,
        }
        accepted = handlers[self.engine.phase](event)
        if not accepted:
            logger.debug(
                "Ignored %s in phase %s.", event, self.engine.phase.value,
            )
        return accepted

    def _on_idle(self, event: InputEvent) -> bool:
        if event.direction is not None:
            return self.engine.start(event.direction)
        if event.command in (Command.ACTIVATE, Command.PAUSE_RESUME):
            return self.engine.start()
        return False

    def _on_active(self, event: InputEvent) -> bool:
        if event.direction is not None:
            return self.engine.set_direction(event.direction)
        if event.command in (Command.ACTIVATE, Command.PAUSE_RESUME):
            return self.engine.pause()
        return False

    def _on_paused(self, event: InputEvent) -> bool:
        if event.command in (Command.ACTIVATE, Command.PAUSE_RESUME):
            return self.engine.resume()
        return False

    def _on_terminated(self, event: InputEvent) -> bool:
        if event.command in (Command.ACTIVATE, Command.RESET):
            return self.engine.reset()
        return False
