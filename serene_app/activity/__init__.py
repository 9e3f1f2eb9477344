"""
Self-care activity module.

Countdown timer for timed self-care activities.
"""

from .timer import ActivityTimer, TimerStatus

__all__ = ["ActivityTimer", "TimerStatus"]
