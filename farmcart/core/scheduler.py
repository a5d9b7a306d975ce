"""
Debounced scheduling

Timers are created through a small scheduler interface so the same code runs
on the asyncio event loop in production and on a virtual clock in tests.
"""

import asyncio
import heapq
import itertools
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay"""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> Cancellable: ...


class AsyncioScheduler:
    """Scheduler backed by the running event loop"""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class ManualTimer:
    """Timer registered on a ManualScheduler"""

    def __init__(self, when: float, callback: Callable[[], Any]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual-time scheduler.

    Nothing fires until advance() is called. Due timers run in the order of
    their deadline, ties in the order they were registered.
    """

    def __init__(self):
        self.now = 0.0
        self._timers: list[tuple[float, int, ManualTimer]] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        heapq.heappush(self._timers, (timer.when, next(self._sequence), timer))
        return timer

    @property
    def pending_count(self) -> int:
        """Number of timers that are still armed"""
        return sum(1 for _, _, timer in self._timers if not timer.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every timer that comes due.

        Returns:
            Number of callbacks fired
        """
        target = self.now + seconds
        fired = 0
        while self._timers and self._timers[0][0] <= target:
            when, _, timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self.now = when
            timer.callback()
            fired += 1
        self.now = target
        return fired


class DebouncedTask:
    """
    Coalesces bursts of calls into a single run of an async action.

    schedule() always cancels the armed timer and starts a new one, so at most
    one timer is pending. Each fire spawns the action as an asyncio task.
    Tasks from earlier fires are tracked but never awaited in order.
    """

    def __init__(
        self,
        action: Callable[[], Awaitable[None]],
        delay: float,
        scheduler: Scheduler,
    ):
        self._action = action
        self.delay = delay
        self._scheduler = scheduler
        self._handle: Optional[Cancellable] = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is armed"""
        return self._handle is not None

    @property
    def running(self) -> bool:
        """True while a spawned action has not finished"""
        return any(not task.done() for task in self._inflight)

    def schedule(self) -> None:
        """Arm the timer, restarting the quiet period"""
        self.cancel()
        self._handle = self._scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Disarm the pending timer, if any"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.ensure_future(self._action())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def flush(self) -> bool:
        """
        Run a pending action now instead of waiting for the timer.

        Returns:
            True if an action was pending and has been run
        """
        if self._handle is None:
            return False
        self.cancel()
        await self._action()
        return True

    async def wait(self) -> None:
        """Wait until every spawned action has finished"""
        while True:
            unfinished = [task for task in self._inflight if not task.done()]
            if not unfinished:
                return
            await asyncio.gather(*unfinished, return_exceptions=True)
