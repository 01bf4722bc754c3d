"""A playable game: engine, input mapper, tick scheduler and listeners."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from arcade_snake.config import GameConfig
from arcade_snake.controls import InputEvent, InputMapper
from arcade_snake.engine import GameEngine
from arcade_snake.persistence import HighScoreStore
from arcade_snake.scheduler import TickScheduler
from arcade_snake.state import Phase

logger = logging.getLogger(__name__)

FrameListener = Callable[[dict], Awaitable[None]]


class GameSession:
    """Drives one :class:`GameEngine` in real time.

    Inputs are applied immediately through an :class:`InputMapper`; after
    every accepted input the scheduler is brought in line with the phase
    (running only while Active). Listeners receive a render snapshot after
    each tick and each accepted input.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        seed: int | None = None,
    ) -> None:
        self.engine = GameEngine(config=config, store=store, seed=seed)
        self.mapper = InputMapper(self.engine)
        self.scheduler = TickScheduler(
            self.engine.config.tick_ms, self._on_tick,
        )
        self._listeners: list[FrameListener] = []

    @property
    def config(self) -> GameConfig:
        return self.engine.config

    @property
    def phase(self) -> Phase:
        return self.engine.phase

    def add_listener(self, listener: FrameListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: FrameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_state(self) -> dict:
        return self.engine.get_state()

    async def handle(self, event: InputEvent) -> bool:
        """Apply *event*; return True if it was accepted."""
        was_active = self.engine.phase is Phase.ACTIVE
        accepted = self.mapper.apply(event)
        if not accepted:
            return False
        self._sync_scheduler(was_active)
        await self._notify(self.engine.get_state())
        return True

    def _sync_scheduler(self, was_active: bool) -> None:
        active = self.engine.phase is Phase.ACTIVE
        if active and not was_active:
            self.scheduler.start()
        elif not active:
            self.scheduler.cancel()

    async def _on_tick(self) -> None:
        state = self.engine.step()
        if self.engine.phase is not Phase.ACTIVE:
            self.scheduler.cancel()
        await self._notify(state)

    async def _notify(self, state: dict) -> None:
        for listener in list(self._listeners):
            await listener(state)

    async def close(self) -> None:
        """Stop ticking and drop all listeners."""
        await self.scheduler.aclose()
        self._listeners.clear()
        logger.debug("Session closed.")
