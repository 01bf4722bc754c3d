"""Fixed-period asyncio tick loop with synchronous cancellation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class TickScheduler:
    """Owns one repeating timer task that awaits *on_tick* every period.

    Every :meth:`start` and :meth:`cancel` bumps a generation counter. A
    loop only fires while its generation is current, so once
    :meth:`cancel` returns no further tick runs, even one whose sleep has
    already finished. A tick already in progress is allowed to finish
    rather than being interrupted halfway. Ticks never overlap: the loop
    awaits each callback before sleeping again.
    """

    def __init__(self, period_ms: int, on_tick: TickCallback) -> None:
        if period_ms <= 0:
            raise ValueError("period_ms must be positive.")
        self.period_ms = period_ms
        self._on_tick = on_tick
        self._generation = 0
        self._task: asyncio.Task | None = None
        self._ticking: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """(Re)start ticking with a fresh full period. Needs a running loop."""
        self.cancel()
        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(
            self._run(self._generation),
        )
        logger.debug(
            "Tick scheduler started (generation %d).", self._generation,
        )

    def cancel(self) -> None:
        """Stop ticking immediately. Safe to call from inside a tick."""
        self._generation += 1
        task, self._task = self._task, None
        if task is None or task.done():
            return
        # A loop that is mid-tick is ended by the generation check once the
        # callback returns, so its frame still goes out in full.
        if task not in self._ticking:
            task.cancel()
        logger.debug("Tick scheduler cancelled.")

    async def aclose(self) -> None:
        """Cancel and wait for the loop task to finish."""
        task = self._task
        self.cancel()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    async def _run(self, generation: int) -> None:
        interval = self.period_ms / 1000.0
        try:
            while generation == self._generation:
                await asyncio.sleep(interval)
                if generation != self._generation:
                    break
                await self._tick()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled (generation %d).", generation)
        except Exception:
            logger.exception("Tick loop error; scheduler stopped.")
            if generation == self._generation:
                self._generation += 1
                self._task = None

    async def _tick(self) -> None:
        task = asyncio.current_task()
        self._ticking.add(task)
        try:
            await self._on_tick()
        finally:
            self._ticking.discard(task)
