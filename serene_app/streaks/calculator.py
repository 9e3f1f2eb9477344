"""
Streak calculation.

Pure functions over calendar dates. The caller supplies "today" from a
single clock reading; nothing here reads the wall clock or performs I/O.

Two views of a streak exist:
- ``record_activity`` updates a stored record incrementally and is the
  canonical value persisted on the user profile
- ``compute_consecutive_day_count`` replays an activity log and is a
  derived view, used for display and reconciliation
"""

from datetime import timedelta, tzinfo
from typing import Iterable, Optional

from ..errors import InvalidTemporalOrder
from ..utils.time import DateLike, days_between, to_local_date
from .models import StreakRecord


def record_activity(
    record: StreakRecord,
    today: DateLike,
    tz: Optional[tzinfo] = None
) -> StreakRecord:
    """
    Compute the streak after an activity recorded on ``today``.

    Args:
        record: Current streak record
        today: Date (or datetime) of the new activity
        tz: Local time zone used to normalize aware datetimes

    Returns:
        Updated record; the input record itself when the activity falls
        on the same day as the last one

    Raises:
        InvalidTemporalOrder: ``today`` precedes the last activity date
    """
    day = to_local_date(today, tz)

    if record.last_activity_date is None:
        return StreakRecord(streak_count=1, last_activity_date=day)

    last = to_local_date(record.last_activity_date, tz)
    gap_days = days_between(last, day)

    if gap_days < 0:
        raise InvalidTemporalOrder(
            f"Activity date {day.isoformat()} precedes last activity {last.isoformat()}",
            today=day,
            last_activity_date=last,
            context={"gap_days": gap_days}
        )
    if gap_days == 0:
        return record
    if gap_days == 1:
        return StreakRecord(streak_count=record.streak_count + 1, last_activity_date=day)

    return StreakRecord(streak_count=1, last_activity_date=day)


def compute_consecutive_day_count(
    entries: Iterable[DateLike],
    today: DateLike,
    tz: Optional[tzinfo] = None
) -> int:
    """
    Count consecutive days with activity, walking back from ``today``.

    Same-day entries count once. The walk stops at the first missing day,
    so a log without an entry for ``today`` yields 0. Entries dated after
    ``today`` are ignored.

    Args:
        entries: Activity timestamps in any order
        today: Day the walk starts from
        tz: Local time zone used to normalize aware datetimes

    Returns:
        Number of consecutive days ending at ``today``
    """
    start = to_local_date(today, tz)
    days = sorted(
        {d for d in (to_local_date(e, tz) for e in entries) if d <= start},
        reverse=True
    )

    count = 0
    expected = start
    for day in days:
        if day != expected:
            break
        count += 1
        expected = expected - timedelta(days=1)

    return count


def has_activity_on(
    entries: Iterable[DateLike],
    day: DateLike,
    tz: Optional[tzinfo] = None
) -> bool:
    """True if any entry falls on the calendar day ``day``."""
    target = to_local_date(day, tz)
    return any(to_local_date(e, tz) == target for e in entries)
