"""
Tests for clock sources and calendar date utilities.
"""

from datetime import date, datetime, timezone
from unittest.mock import patch
from zoneinfo import ZoneInfo

from serene_app.utils.time import (
    FixedClock, SystemClock, days_between, format_local_date, parse_timestamp,
    to_local_date
)


class TestSystemClock:
    """Test the wall-clock source."""

    def test_uses_configured_zone(self):
        with patch('serene_app.utils.time.datetime') as mock_datetime:
            mock_now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=ZoneInfo("Europe/Paris"))
            mock_datetime.now.return_value = mock_now

            result = SystemClock("Europe/Paris").now()

            assert result == mock_now
            mock_datetime.now.assert_called_once_with(ZoneInfo("Europe/Paris"))

    def test_returns_aware_time(self):
        assert SystemClock(timezone.utc).now().tzinfo is not None


class TestFixedClock:
    """Test the controllable clock."""

    def test_advance_and_set(self):
        start = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
        clock = FixedClock(start)

        assert clock.now() == start
        assert clock.advance(days=1, seconds=30) == datetime(2024, 1, 2, 8, 0, 30, tzinfo=timezone.utc)

        clock.set(start)
        assert clock.now() == start


class TestDateNormalization:
    """Test calendar date helpers."""

    def test_date_passthrough(self):
        assert to_local_date(date(2024, 5, 1)) == date(2024, 5, 1)

    def test_naive_datetime_drops_time(self):
        assert to_local_date(datetime(2024, 5, 1, 23, 59)) == date(2024, 5, 1)

    def test_aware_datetime_converted(self):
        moment = datetime(2024, 5, 1, 23, 30, tzinfo=timezone.utc)
        assert to_local_date(moment) == date(2024, 5, 1)
        assert to_local_date(moment, ZoneInfo("Asia/Kolkata")) == date(2024, 5, 2)

    def test_days_between(self):
        assert days_between(date(2024, 2, 28), date(2024, 3, 1)) == 2
        assert days_between(datetime(2024, 3, 1, 23, 0), datetime(2024, 3, 2, 1, 0)) == 1
        assert days_between(date(2024, 3, 2), date(2024, 3, 1)) == -1

    def test_format_local_date(self):
        assert format_local_date(datetime(2024, 7, 4, 15, 0)) == "2024-07-04"


class TestParseTimestamp:
    """Test parsing stored dates and timestamps."""

    def test_plain_date(self):
        assert parse_timestamp("2024-03-02") == date(2024, 3, 2)

    def test_utc_suffix(self):
        parsed = parse_timestamp("2024-03-01T15:00:00.000Z")
        assert parsed == datetime(2024, 3, 1, 15, 0, tzinfo=timezone.utc)

    def test_offset_converted_to_local_day(self):
        parsed = parse_timestamp("2024-03-01T15:00:00+00:00")
        assert to_local_date(parsed, ZoneInfo("Asia/Tokyo")) == date(2024, 3, 2)

    def test_naive_timestamp(self):
        assert parse_timestamp("2024-03-14T00:00:00") == datetime(2024, 3, 14)
