"""Repeating background action driven by an asyncio task."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from enum import Enum
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    idle = "idle"
    running = "running"


class LiveUpdateScheduler:
    """Runs ``action`` every ``interval_seconds`` until stopped.

    ``start`` must be called from within a running event loop.
    """

    def __init__(self, action: Callable[[], Any], interval_seconds: float = 10.0) -> None:
        self.action = action
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.running if self._task is not None else SchedulerState.idle

    @property
    def is_running(self) -> bool:
        return self._task is not None

    def start(self) -> bool:
        """Begin firing; returns ``False`` when already running."""
        if self._task is not None:
            return False
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(
            "Live updates started",
            extra={"interval_seconds": self.interval_seconds},
        )
        return True

    def stop(self) -> bool:
        """Cancel the repeating task; returns ``False`` when already idle."""
        task, self._task = self._task, None
        if task is None:
            return False
        task.cancel()
        logger.info("Live updates stopped")
        return True

    async def shutdown(self) -> None:
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.action()
            except Exception:  # noqa: BLE001 - keep the schedule alive
                logger.exception("Live update failed")
