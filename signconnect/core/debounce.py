"""
Debounce for the transcript stream.

Only the latest event of a burst is delivered, once the stream has been quiet
for the configured period. At most one timer is pending at any time.
"""

import asyncio
from typing import Any, Callable, Optional, Set

from ..util.logging import logger


class DebounceScheduler:
    """
    Coalesces rapid events into one callback with the most recent event.

    Must be driven from a running event loop. The callback may be a plain
    function or a coroutine function; coroutines are scheduled as tasks.
    """

    def __init__(self, callback: Callable[[Any], Any], quiet_period: float = 1.0):
        self.callback = callback
        self.quiet_period = quiet_period
        self._handle: Optional[asyncio.TimerHandle] = None
        self._latest = None
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False
        self.fired = 0

    @property
    def pending(self) -> bool:
        """True while a fire is scheduled."""
        return self._handle is not None

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._closed

    def on_event(self, event: Any) -> None:
        """Record an event and restart the quiet period."""
        if self._closed:
            return

        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()

        self._latest = event
        self._handle = loop.call_later(self.quiet_period, self._fire)

    def cancel(self) -> None:
        """Drop the pending fire, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._latest = None

    def close(self) -> None:
        """Cancel the pending fire and ignore further events."""
        self.cancel()
        self._closed = True

    async def wait_callbacks(self) -> None:
        """Wait for coroutine callbacks that are still running."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _fire(self) -> None:
        event = self._latest
        self._handle = None
        self._latest = None
        self.fired += 1

        try:
            result = self.callback(event)
        except Exception as e:
            logger.error(f"Debounce callback failed: {e}")
            return

        if asyncio.iscoroutine(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Debounce callback task failed: {type(error).__name__}: {error}")
