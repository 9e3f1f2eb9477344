"""
Tick driver binding a session state machine to a scheduler.

The driver holds at most one outstanding scheduled callback. Starting
cancels any earlier callback before arming a new one, and pause, reset
and close cancel the callback before returning. A callback that still
fires after cancellation is recognised by its generation number and
ignored, so a stale tick can never decrement the session.

Ticks usually run on a scheduler thread where nothing above the driver
can catch an exception. An error raised by ``target.tick()`` (or by a
listener it notifies) is logged, kept as ``last_error`` and handed to
``on_error``; without a handler it is re-raised to the scheduler.
"""

import threading
from typing import Any, Callable, Optional, Protocol

from ..logging.config import get_session_logger
from .scheduler import TickHandle, TickScheduler

session_logger = get_session_logger(__name__)

ErrorHandler = Callable[[Exception], None]


class Tickable(Protocol):
    """State machine advanced one interval per tick."""

    @property
    def is_running(self) -> bool:
        ...

    def start(self) -> None:
        ...

    def pause(self) -> None:
        ...

    def reset(self) -> None:
        ...

    def tick(self) -> Any:
        ...


class TickDriver:
    """Drives a Tickable on a fixed cadence."""

    def __init__(
        self,
        target: Tickable,
        scheduler: TickScheduler,
        interval_seconds: float = 1.0,
        name: Optional[str] = None,
        on_error: Optional[ErrorHandler] = None
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.target = target
        self.scheduler = scheduler
        self.interval_seconds = interval_seconds
        self.on_error = on_error
        self.last_error: Optional[Exception] = None
        self.logger = session_logger.bind(driver=name or type(target).__name__)

        self._lock = threading.RLock()
        self._handle: Optional[TickHandle] = None
        self._generation = 0

    @property
    def has_pending_tick(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Start or resume the target and arm a full interval."""
        with self._lock:
            if self.target.is_running and self._handle is not None:
                return
            self.target.start()
            self._arm()

    resume = start

    def pause(self) -> None:
        with self._lock:
            self._cancel()
            self.target.pause()

    def toggle(self) -> None:
        """Pause when running, otherwise start."""
        with self._lock:
            if self.target.is_running:
                self.pause()
            else:
                self.start()

    def reset(self) -> None:
        with self._lock:
            self._cancel()
            self.target.reset()

    def close(self) -> None:
        """Release the scheduled callback on teardown."""
        with self._lock:
            self._cancel()
            if self.target.is_running:
                self.target.pause()

    def __enter__(self) -> "TickDriver":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _arm(self) -> None:
        self._cancel()
        generation = self._generation
        self._handle = self.scheduler.schedule(
            self.interval_seconds, lambda: self._fire(generation)
        )

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                self.logger.debug("Ignored stale tick", generation=generation)
                return

            self._handle = None
            try:
                self.target.tick()
            except Exception as e:
                self.last_error = e
                self.logger.exception("Tick failed", generation=generation,
                                      error_type=type(e).__name__)
                if self.on_error is None:
                    raise
                self.on_error(e)
            finally:
                if self.target.is_running and self._handle is None:
                    self._arm()

            if not self.target.is_running:
                self.logger.debug("Tick driver idle", generation=generation)
