"""Background resolution of due hack operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

Resolver = Callable[[], int]


class HackMonitor:
    """Periodically run a resolution pass on a worker thread.

    ``resolver`` performs one synchronous pass (typically opening its own
    database session) and returns the number of operations it resolved.
    Passes never overlap: the periodic loop and :meth:`resolve_now` share a
    lock.
    """

    MIN_INTERVAL_SECONDS = 0.01

    def __init__(self, resolver: Resolver, *, interval_seconds: float = 5.0) -> None:
        self._resolver = resolver
        self._interval = max(interval_seconds, self.MIN_INTERVAL_SECONDS)
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()
        self._lock = asyncio.Lock()
        self.total_resolved = 0

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the polling loop on the running event loop; no-op if running."""
        if self.is_running:
            return
        self._stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run_loop(), name="netwatch-hack-monitor")
        logger.info("hack monitor started (every %.2fs)", self._interval)

    async def stop(self) -> None:
        task = self._task
        if task is None:
            return
        self._stop_event.set()
        await task
        self._task = None
        logger.info("hack monitor stopped")

    async def resolve_now(self) -> int:
        """Run one pass immediately and return how many hacks it resolved."""
        async with self._lock:
            count = await asyncio.to_thread(self._resolver)
        self.total_resolved += count
        return count

    async def _run_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
                    break
                except TimeoutError:
                    pass
                await self._run_cycle()
        finally:
            self._task = None

    async def _run_cycle(self) -> None:
        try:
            count = await self.resolve_now()
        except Exception:
            # one failed pass must not kill the loop; the next pass retries
            logger.exception("hack resolution pass failed")
            return
        if count:
            logger.info("resolved %d due hack operation(s)", count)
