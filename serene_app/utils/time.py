"""
Clock sources and calendar date utilities.

Components that need "now" receive a Clock so tests and replays can
supply a fixed or advancing time instead of the wall clock.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Protocol, Union
from zoneinfo import ZoneInfo

DateLike = Union[date, datetime]


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in a fixed time zone."""

    def __init__(self, tz: Optional[Union[str, tzinfo]] = None):
        if isinstance(tz, str):
            tz = ZoneInfo(tz)
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def set(self, current: datetime) -> None:
        self.current = current

    def advance(self, days: int = 0, seconds: float = 0) -> datetime:
        """Move the clock forward and return the new time."""
        self.current = self.current + timedelta(days=days, seconds=seconds)
        return self.current


def to_local_date(value: DateLike, tz: Optional[tzinfo] = None) -> date:
    """
    Normalize a date or datetime to a calendar date.

    Aware datetimes are converted to ``tz`` first when one is given, so the
    calendar day matches the user's local midnight. Naive datetimes are
    taken as already local.

    Args:
        value: Date or datetime to normalize
        tz: Local time zone of the session

    Returns:
        Calendar date with time-of-day discarded
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def days_between(earlier: DateLike, later: DateLike, tz: Optional[tzinfo] = None) -> int:
    """
    Whole calendar days from ``earlier`` to ``later``.

    Negative when ``later`` precedes ``earlier``.
    """
    return (to_local_date(later, tz) - to_local_date(earlier, tz)).days


def format_local_date(value: DateLike, tz: Optional[tzinfo] = None) -> str:
    """Format a date as ISO8601 (YYYY-MM-DD) for storage and logging."""
    return to_local_date(value, tz).isoformat()


def parse_timestamp(value: str) -> DateLike:
    """
    Parse a stored ISO8601 date or timestamp.

    Plain ``YYYY-MM-DD`` strings become dates. Timestamps keep their offset
    so they can be converted to the local zone; a trailing ``Z`` means UTC.
    """
    value = value.strip()
    if len(value) <= 10:
        return date.fromisoformat(value)
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
