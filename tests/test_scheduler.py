"""Unit tests for the repeating live-update scheduler."""

from __future__ import annotations

import asyncio
import logging

from services.scheduler import LiveUpdateScheduler, SchedulerState


def test_scheduler_fires_action_repeatedly() -> None:
    calls: list[int] = []
    scheduler = LiveUpdateScheduler(lambda: calls.append(1), interval_seconds=0.01)

    async def run() -> None:
        scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.shutdown()

    asyncio.run(run())

    assert len(calls) >= 2
    assert scheduler.state is SchedulerState.idle


def test_start_twice_keeps_single_task() -> None:
    scheduler = LiveUpdateScheduler(lambda: None, interval_seconds=10)

    async def run() -> tuple[bool, bool, int]:
        first = scheduler.start()
        task = scheduler._task
        second = scheduler.start()
        same_task = scheduler._task is task
        running = sum(
            1 for t in asyncio.all_tasks() if t is not asyncio.current_task()
        )
        await scheduler.shutdown()
        return first, second and same_task, running

    first, second, running = asyncio.run(run())

    assert first is True
    assert second is False
    assert running == 1


def test_stop_is_idempotent() -> None:
    scheduler = LiveUpdateScheduler(lambda: None, interval_seconds=10)

    async def run() -> tuple[bool, bool]:
        scheduler.start()
        return scheduler.stop(), scheduler.stop()

    first, second = asyncio.run(run())

    assert first is True
    assert second is False
    assert scheduler.state is SchedulerState.idle
    assert scheduler.is_running is False


def test_stop_while_idle_is_noop() -> None:
    scheduler = LiveUpdateScheduler(lambda: None)

    assert scheduler.stop() is False
    assert scheduler.state is SchedulerState.idle


def test_failing_action_is_logged_and_schedule_continues(caplog) -> None:
    calls: list[int] = []

    def flaky() -> None:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")

    scheduler = LiveUpdateScheduler(flaky, interval_seconds=0.01)

    async def run() -> None:
        scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.shutdown()

    with caplog.at_level(logging.ERROR, logger="services.scheduler"):
        asyncio.run(run())

    assert len(calls) >= 2
    assert any(record.getMessage() == "Live update failed" for record in caplog.records)
