"""Tests for streak models and the streak tracker."""

import pytest
from datetime import date, datetime, timedelta, timezone
from unittest.mock import Mock
from zoneinfo import ZoneInfo

from serene_app.errors import InvalidTemporalOrder, PersistenceError
from serene_app.streaks.models import ActivityKind, StreakRecord, UserStreaks
from serene_app.streaks.tracker import StreakTracker
from serene_app.utils.time import FixedClock


class TestStreakModels:
    """Test streak records and profile serialization."""

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            StreakRecord(streak_count=-1)

    def test_missing_kind_is_empty(self):
        assert UserStreaks().get(ActivityKind.JOURNAL) == StreakRecord.empty()

    def test_with_record_does_not_mutate(self, today):
        original = UserStreaks()
        updated = original.with_record(ActivityKind.SELF_CARE, StreakRecord(1, today))

        assert original.get(ActivityKind.SELF_CARE) == StreakRecord.empty()
        assert updated.get(ActivityKind.SELF_CARE).streak_count == 1

    def test_to_dict_profile_shape(self, today):
        streaks = UserStreaks().with_record(ActivityKind.JOURNAL, StreakRecord(3, today))

        assert streaks.to_dict() == {
            "journal": 3,
            "lastJournalDate": "2024-03-15",
            "selfCare": 0,
        }

    def test_from_dict(self):
        streaks = UserStreaks.from_dict({
            "journal": 2,
            "selfCare": 5,
            "lastJournalDate": "2024-03-14T00:00:00",
            "lastSelfCareDate": datetime(2024, 3, 15, 0, 0),
        })

        assert streaks.get(ActivityKind.JOURNAL) == StreakRecord(2, date(2024, 3, 14))
        assert streaks.get(ActivityKind.SELF_CARE) == StreakRecord(5, date(2024, 3, 15))

    def test_from_dict_new_user(self):
        streaks = UserStreaks.from_dict({"journal": 0, "selfCare": 0})
        assert streaks.get(ActivityKind.JOURNAL).last_activity_date is None

    def test_from_dict_utc_timestamp_of_local_midnight(self):
        """Local midnight stored as UTC reads back as the local calendar day."""
        tokyo = ZoneInfo("Asia/Tokyo")
        streaks = UserStreaks.from_dict({
            "journal": 5,
            "lastJournalDate": "2024-03-01T15:00:00.000Z",
        }, tokyo)

        assert streaks.get(ActivityKind.JOURNAL) == StreakRecord(5, date(2024, 3, 2))

    def test_from_dict_aware_datetime(self):
        tokyo = ZoneInfo("Asia/Tokyo")
        streaks = UserStreaks.from_dict({
            "selfCare": 2,
            "lastSelfCareDate": datetime(2024, 3, 1, 15, 0, tzinfo=timezone.utc),
        }, tokyo)

        assert streaks.get(ActivityKind.SELF_CARE).last_activity_date == date(2024, 3, 2)

    def test_records_are_read_only(self, today):
        streaks = UserStreaks().with_record(ActivityKind.JOURNAL, StreakRecord(1, today))

        with pytest.raises(TypeError):
            streaks.records[ActivityKind.SELF_CARE] = StreakRecord(9, today)

    def test_hashable(self, today):
        first = UserStreaks().with_record(ActivityKind.JOURNAL, StreakRecord(1, today))
        second = UserStreaks({ActivityKind.JOURNAL: StreakRecord(1, today)})

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1


class TestStreakTracker:
    """Test recording activities with an injected clock and persistence."""

    def test_first_activity_persisted(self, fixed_clock):
        persist = Mock()
        tracker = StreakTracker(fixed_clock, persist)

        streaks = tracker.record(UserStreaks(), ActivityKind.JOURNAL)

        record = streaks.get(ActivityKind.JOURNAL)
        assert record == StreakRecord(1, date(2024, 3, 15))
        persist.assert_called_once_with(ActivityKind.JOURNAL, record)

    def test_same_day_not_persisted_again(self, fixed_clock):
        persist = Mock()
        tracker = StreakTracker(fixed_clock, persist)

        streaks = tracker.record(UserStreaks(), ActivityKind.SELF_CARE)
        fixed_clock.advance(seconds=3600)
        again = tracker.record(streaks, ActivityKind.SELF_CARE)

        assert again is streaks
        assert persist.call_count == 1

    def test_daily_activity_builds_streak(self, fixed_clock):
        tracker = StreakTracker(fixed_clock)
        streaks = UserStreaks()

        for _ in range(4):
            streaks = tracker.record(streaks, ActivityKind.JOURNAL)
            fixed_clock.advance(days=1)

        assert streaks.get(ActivityKind.JOURNAL).streak_count == 4
        assert streaks.get(ActivityKind.SELF_CARE).streak_count == 0

    def test_missed_days_reset(self, fixed_clock):
        tracker = StreakTracker(fixed_clock)
        streaks = UserStreaks().with_record(
            ActivityKind.JOURNAL, StreakRecord(6, date(2024, 3, 12))
        )

        streaks = tracker.record(streaks, ActivityKind.JOURNAL)
        assert streaks.get(ActivityKind.JOURNAL) == StreakRecord(1, date(2024, 3, 15))

    def test_clock_behind_last_activity_raises(self, fixed_clock):
        persist = Mock()
        tracker = StreakTracker(fixed_clock, persist)
        streaks = UserStreaks().with_record(
            ActivityKind.JOURNAL, StreakRecord(2, date(2024, 3, 16))
        )

        with pytest.raises(InvalidTemporalOrder):
            tracker.record(streaks, ActivityKind.JOURNAL)
        persist.assert_not_called()

    def test_persistence_failure_wrapped(self, fixed_clock):
        persist = Mock(side_effect=RuntimeError("backend unavailable"))
        tracker = StreakTracker(fixed_clock, persist)

        with pytest.raises(PersistenceError) as exc_info:
            tracker.record(UserStreaks(), ActivityKind.SELF_CARE)

        assert exc_info.value.operation == "update_streak"
        assert exc_info.value.target == "self_care"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_local_time_zone(self):
        """Late evening UTC is already the next day in Tokyo."""
        clock = FixedClock(datetime(2024, 3, 15, 20, 0, tzinfo=timezone.utc))
        tracker = StreakTracker(clock, tz="Asia/Tokyo")

        assert tracker.today() == date(2024, 3, 16)

    def test_stored_utc_midnight_extends_streak_next_local_day(self):
        """A streak saved at Tokyo midnight continues on the next Tokyo day."""
        clock = FixedClock(datetime(2024, 3, 3, 9, 0, tzinfo=ZoneInfo("Asia/Tokyo")))
        tracker = StreakTracker(clock, tz="Asia/Tokyo")

        streaks = tracker.load({"journal": 5, "lastJournalDate": "2024-03-01T15:00:00.000Z"})
        streaks = tracker.record(streaks, ActivityKind.JOURNAL)

        assert streaks.get(ActivityKind.JOURNAL) == StreakRecord(6, date(2024, 3, 3))

    def test_derive_and_done_today(self, fixed_clock):
        tracker = StreakTracker(fixed_clock)
        log = [datetime(2024, 3, 15, 8, 0, tzinfo=timezone.utc),
               datetime(2024, 3, 14, 8, 0, tzinfo=timezone.utc)]

        assert tracker.derive(log) == 2
        assert tracker.done_today(log) is True
        assert tracker.done_today(log[1:]) is False


class TestReconcile:
    """Test comparing the stored streak with the replayed log."""

    def test_consistent(self, fixed_clock):
        tracker = StreakTracker(fixed_clock)
        streaks = UserStreaks().with_record(
            ActivityKind.JOURNAL, StreakRecord(2, date(2024, 3, 14))
        )
        log = [date(2024, 3, 14), date(2024, 3, 13)]

        assert tracker.reconcile(streaks, ActivityKind.JOURNAL, log) is True

    def test_mismatch_logged(self, fixed_clock):
        tracker = StreakTracker(fixed_clock)
        tracker.logger = Mock()
        streaks = UserStreaks().with_record(
            ActivityKind.JOURNAL, StreakRecord(5, date(2024, 3, 15))
        )
        log = [date(2024, 3, 15), date(2024, 3, 14)]

        assert tracker.reconcile(streaks, ActivityKind.JOURNAL, log) is False

        tracker.logger.warning.assert_called_once()
        kwargs = tracker.logger.warning.call_args.kwargs
        assert kwargs["stored_count"] == 5
        assert kwargs["derived_count"] == 2

    def test_no_activity_yet(self, fixed_clock):
        tracker = StreakTracker(fixed_clock)
        assert tracker.reconcile(UserStreaks(), ActivityKind.SELF_CARE, []) is True

    def test_replayed_log_matches_incremental_updates(self, fixed_clock):
        tracker = StreakTracker(fixed_clock)
        streaks = UserStreaks()
        log = []

        for offset in (0, 1, 2, 4, 5):
            fixed_clock.set(datetime(2024, 3, 1, 12, tzinfo=timezone.utc) + timedelta(days=offset))
            streaks = tracker.record(streaks, ActivityKind.JOURNAL)
            log.append(fixed_clock.now())

        assert streaks.get(ActivityKind.JOURNAL).streak_count == 2
        assert tracker.derive(log) == 2
        assert tracker.reconcile(streaks, ActivityKind.JOURNAL, log) is True
