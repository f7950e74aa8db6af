"""Background task that periodically purges expired cache entries."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger()


class PeriodicSweeper:
    """Runs an async callback every ``interval_seconds`` until stopped.

    A failing pass is logged and the schedule continues.
    """

    def __init__(
        self,
        sweep: Callable[[], Awaitable[object]],
        interval_seconds: float,
    ) -> None:
        """Initialize with the sweep coroutine factory and its cadence."""
        if interval_seconds <= 0:
            msg = "interval_seconds must be positive"
            raise ValueError(msg)
        self._sweep = sweep
        self._interval = interval_seconds
        self._stop = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        """True while the background task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Launch the background task on the running event loop."""
        if self.running:
            return
        self._stop = asyncio.Event()
        self._task = asyncio.create_task(self._run(), name="cache-sweeper")
        logger.debug("cache_sweeper_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        """Signal the task to exit and wait for it. Safe to call repeatedly."""
        task = self._task
        if task is None:
            return
        self._stop.set()
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=self._interval)
        except TimeoutError:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._task = None
        logger.debug("cache_sweeper_stopped")

    async def _run(self) -> None:
        while not self._stop.is_set():
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._interval)
            except TimeoutError:
                pass
            else:
                break
            try:
                await self._sweep()
            except Exception:
                logger.exception("cache_sweep_failed")
