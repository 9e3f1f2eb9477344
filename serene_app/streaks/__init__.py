"""
Streak module.

Incremental streak updates for journaling and self-care, plus replay of
an activity log into a consecutive-day count.
"""

from .calculator import compute_consecutive_day_count, has_activity_on, record_activity
from .models import ActivityKind, StreakRecord, UserStreaks
from .tracker import StreakTracker

__all__ = [
    "compute_consecutive_day_count",
    "has_activity_on",
    "record_activity",
    "ActivityKind",
    "StreakRecord",
    "UserStreaks",
    "StreakTracker",
]
