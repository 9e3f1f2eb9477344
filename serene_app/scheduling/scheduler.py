"""One-shot callback schedulers used to drive session ticks."""

import heapq
import itertools
import threading
from typing import Callable, Protocol


class TickHandle(Protocol):
    """Cancellable reference to a scheduled callback."""

    def cancel(self) -> None:
        ...


class TickScheduler(Protocol):
    """Runs a callback once after a delay."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TickHandle:
        ...


class ThreadingTickScheduler:
    """Real-time scheduler backed by daemon threading.Timer objects."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_seconds, callback)
        timer.daemon = True
        timer.start()
        return timer


class ManualHandle:
    """Handle returned by ManualTickScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTickScheduler:
    """
    Deterministic scheduler whose time only moves on ``advance()``.

    Callbacks fire in due-time order, including callbacks scheduled by
    other callbacks during the same advance.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, ManualHandle]] = []
        self._counter = itertools.count()

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + delay_seconds, callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    def advance(self, seconds: float) -> int:
        """
        Move time forward, firing every callback that falls due.

        Returns:
            Number of callbacks fired
        """
        target = self.now + seconds
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = due
            handle.fired = True
            handle.callback()
            fired += 1

        self.now = target
        return fired

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks not yet fired or cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)
