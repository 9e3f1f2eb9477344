"""
Streak bookkeeping for a single user.

Wraps the pure calculator with an injected clock and an optional
persistence effect, so "record activity now" reads the clock once and
hands only changed records to the persistence collaborator.
"""

from datetime import date, tzinfo
from typing import Any, Callable, Iterable, Optional, Union
from zoneinfo import ZoneInfo

from ..errors import InvalidTemporalOrder, PersistenceError
from ..logging.config import get_streak_logger, log_streak_update
from ..utils.time import Clock, DateLike, days_between, format_local_date, to_local_date
from .calculator import compute_consecutive_day_count, has_activity_on, record_activity
from .models import ActivityKind, StreakRecord, UserStreaks

streak_logger = get_streak_logger(__name__)

PersistStreak = Callable[[ActivityKind, StreakRecord], None]


class StreakTracker:
    """Records qualifying activities and keeps streaks current."""

    def __init__(
        self,
        clock: Clock,
        persist: Optional[PersistStreak] = None,
        tz: Optional[Union[str, tzinfo]] = None
    ):
        if isinstance(tz, str):
            tz = ZoneInfo(tz)
        self.clock = clock
        self.persist = persist
        self.tz = tz
        self.logger = streak_logger

    def today(self) -> date:
        """Current calendar day in the tracker's time zone."""
        return to_local_date(self.clock.now(), self.tz)

    def load(self, data: dict[str, Any]) -> UserStreaks:
        """Parse a stored profile document, reading dates in the tracker's zone."""
        return UserStreaks.from_dict(data, self.tz)

    def record(self, streaks: UserStreaks, kind: ActivityKind) -> UserStreaks:
        """
        Record a qualifying activity happening now.

        Args:
            streaks: The user's current streak records
            kind: Activity kind being recorded

        Returns:
            Updated streak records (the same object on a repeat same-day activity)

        Raises:
            InvalidTemporalOrder: the clock reads earlier than the last activity
            PersistenceError: the persistence collaborator failed
        """
        day = self.today()
        previous = streaks.get(kind)

        try:
            updated = record_activity(previous, day, self.tz)
        except InvalidTemporalOrder as e:
            self.logger.warning(
                "Rejected out-of-order activity",
                kind=kind.value,
                today=format_local_date(day),
                last_activity_date=format_local_date(e.last_activity_date)
                if e.last_activity_date else None
            )
            raise

        if updated is previous:
            self.logger.debug("Activity already counted today", kind=kind.value,
                              streak_count=previous.streak_count)
            return streaks

        gap_days = None
        if previous.last_activity_date is not None:
            gap_days = days_between(previous.last_activity_date, day, self.tz)

        log_streak_update(
            self.logger,
            kind=kind.value,
            previous_count=previous.streak_count,
            new_count=updated.streak_count,
            gap_days=gap_days
        )

        if self.persist is not None:
            try:
                self.persist(kind, updated)
            except Exception as e:
                raise PersistenceError(
                    f"Failed to persist {kind.value} streak: {e}",
                    operation="update_streak",
                    target=kind.value
                ) from e

        return streaks.with_record(kind, updated)

    def derive(self, entries: Iterable[DateLike]) -> int:
        """Consecutive-day count replayed from an activity log, ending today."""
        return compute_consecutive_day_count(entries, self.today(), self.tz)

    def done_today(self, entries: Iterable[DateLike]) -> bool:
        """True if the activity log has an entry for today."""
        return has_activity_on(entries, self.today(), self.tz)

    def reconcile(self, streaks: UserStreaks, kind: ActivityKind,
                  entries: Iterable[DateLike]) -> bool:
        """
        Compare the stored streak with the one replayed from the log.

        The replay runs back from the stored last activity date, so a streak
        that has not been extended yet today is not reported as a mismatch.
        The stored record stays canonical; a mismatch is only logged.

        Returns:
            True if both views agree
        """
        record = streaks.get(kind)
        if record.last_activity_date is None:
            derived = 0
        else:
            derived = compute_consecutive_day_count(entries, record.last_activity_date, self.tz)

        if derived != record.streak_count:
            self.logger.warning(
                "Stored streak disagrees with activity log",
                kind=kind.value,
                stored_count=record.streak_count,
                derived_count=derived,
                last_activity_date=format_local_date(record.last_activity_date)
                if record.last_activity_date else None
            )
            return False

        return True
