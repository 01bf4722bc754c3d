"""Tests for the TickScheduler."""

from __future__ import annotations

import asyncio

import pytest

from arcade_snake.scheduler import TickScheduler


class _Counter:
    def __init__(self) -> None:
        self.ticks = 0

    async def __call__(self) -> None:
        self.ticks += 1


class TestSchedulerInit:
    def test_invalid_period(self):
        with pytest.raises(ValueError, match="positive"):
            TickScheduler(0, _Counter())

    def test_not_running_initially(self):
        assert not TickScheduler(10, _Counter()).running


class TestSchedulerTicking:
    @pytest.mark.asyncio
    async def test_ticks_while_running(self):
        counter = _Counter()
        scheduler = TickScheduler(10, counter)
        scheduler.start()
        assert scheduler.running
        await asyncio.sleep(0.08)
        await scheduler.aclose()
        assert counter.ticks >= 2

    @pytest.mark.asyncio
    async def test_no_tick_before_first_period(self):
        counter = _Counter()
        scheduler = TickScheduler(200, counter)
        scheduler.start()
        await asyncio.sleep(0.02)
        assert counter.ticks == 0
        await scheduler.aclose()

    @pytest.mark.asyncio
    async def test_cancel_stops_ticks(self):
        counter = _Counter()
        scheduler = TickScheduler(10, counter)
        scheduler.start()
        await asyncio.sleep(0.05)
        scheduler.cancel()
        assert not scheduler.running
        seen = counter.ticks
        await asyncio.sleep(0.05)
        assert counter.ticks == seen

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self):
        scheduler = TickScheduler(10, _Counter())
        scheduler.cancel()
        scheduler.start()
        scheduler.cancel()
        scheduler.cancel()
        assert not scheduler.running

    @pytest.mark.asyncio
    async def test_restart_replaces_previous_loop(self):
        scheduler = TickScheduler(10, _Counter())
        scheduler.start()
        first = scheduler._task
        scheduler.start()
        await asyncio.sleep(0.005)
        assert first.done()
        assert scheduler.running
        await scheduler.aclose()

    @pytest.mark.asyncio
    async def test_cancel_from_inside_tick(self):
        calls: list[str] = []

        async def on_tick() -> None:
            calls.append("tick")
            scheduler.cancel()
            # The rest of the tick still runs after cancelling.
            await asyncio.sleep(0)
            calls.append("after")

        scheduler = TickScheduler(10, on_tick)
        scheduler.start()
        await asyncio.sleep(0.06)
        assert calls == ["tick", "after"]
        assert not scheduler.running

    @pytest.mark.asyncio
    async def test_outside_cancel_lets_running_tick_finish(self):
        calls: list[str] = []
        release = asyncio.Event()

        async def on_tick() -> None:
            calls.append("start")
            await release.wait()
            calls.append("end")

        scheduler = TickScheduler(10, on_tick)
        scheduler.start()
        task = scheduler._task
        while not calls:
            await asyncio.sleep(0.005)

        scheduler.cancel()
        assert not scheduler.running
        release.set()
        await asyncio.sleep(0.05)
        assert calls == ["start", "end"]
        assert task.done()
        assert not task.cancelled()

    @pytest.mark.asyncio
    async def test_ticks_do_not_overlap(self):
        active = 0
        overlaps = 0

        async def slow_tick() -> None:
            nonlocal active, overlaps
            active += 1
            if active > 1:
                overlaps += 1
            await asyncio.sleep(0.02)
            active -= 1

        scheduler = TickScheduler(5, slow_tick)
        scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.aclose()
        assert overlaps == 0

    @pytest.mark.asyncio
    async def test_callback_error_stops_scheduler(self, caplog):
        async def broken() -> None:
            raise RuntimeError("boom")

        scheduler = TickScheduler(10, broken)
        with caplog.at_level("ERROR"):
            scheduler.start()
            await asyncio.sleep(0.05)
        assert not scheduler.running
        assert "Tick loop error" in caplog.text
