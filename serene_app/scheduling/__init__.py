"""
Tick scheduling module.

Schedulers hand out cancellable one-shot callbacks; the TickDriver turns
them into a steady one-second cadence for a session state machine while
keeping at most one callback outstanding.
"""

from .driver import ErrorHandler, Tickable, TickDriver
from .scheduler import ManualTickScheduler, ThreadingTickScheduler, TickHandle, TickScheduler

__all__ = [
    "ErrorHandler",
    "Tickable",
    "TickDriver",
    "ManualTickScheduler",
    "ThreadingTickScheduler",
    "TickHandle",
    "TickScheduler",
]
