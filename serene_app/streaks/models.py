"""
Streak data models.

A StreakRecord is the running count plus the calendar date of the last
qualifying activity. UserStreaks groups one record per activity kind in
the shape stored on the external user profile.
"""

from dataclasses import dataclass, field
from datetime import date, tzinfo
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..utils.time import format_local_date, parse_timestamp, to_local_date


class ActivityKind(str, Enum):
    """Activities that keep a streak alive."""
    JOURNAL = "journal"
    SELF_CARE = "self_care"


# Field names used by the stored user profile document
_PROFILE_FIELDS = {
    ActivityKind.JOURNAL: ("journal", "lastJournalDate"),
    ActivityKind.SELF_CARE: ("selfCare", "lastSelfCareDate"),
}


@dataclass(frozen=True)
class StreakRecord:
    """Streak count and the date of the last qualifying activity."""

    streak_count: int = 0
    last_activity_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.streak_count < 0:
            raise ValueError("streak_count must not be negative")

    @classmethod
    def empty(cls) -> "StreakRecord":
        return cls()


@dataclass(frozen=True)
class UserStreaks:
    """Streak records for every activity kind of one user."""

    records: Mapping[ActivityKind, StreakRecord] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", MappingProxyType(dict(self.records)))

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.records.items(), key=lambda item: item[0].value)))

    def get(self, kind: ActivityKind) -> StreakRecord:
        return self.records.get(kind, StreakRecord.empty())

    def with_record(self, kind: ActivityKind, record: StreakRecord) -> "UserStreaks":
        records = dict(self.records)
        records[kind] = record
        return UserStreaks(records=records)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the profile document shape."""
        data: dict[str, Any] = {}
        for kind, (count_field, date_field) in _PROFILE_FIELDS.items():
            record = self.get(kind)
            data[count_field] = record.streak_count
            if record.last_activity_date is not None:
                data[date_field] = format_local_date(record.last_activity_date)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any], tz: Optional[tzinfo] = None) -> "UserStreaks":
        """
        Parse the profile document shape; missing fields mean no activity yet.

        Stored dates may be full timestamps of local midnight written in
        another zone (``2024-03-01T15:00:00Z`` for Tokyo midnight). Those are
        converted to ``tz`` before the time of day is dropped.
        """
        records = {}
        for kind, (count_field, date_field) in _PROFILE_FIELDS.items():
            last = data.get(date_field)
            if isinstance(last, str):
                last = parse_timestamp(last)
            if last is not None:
                last = to_local_date(last, tz)
            records[kind] = StreakRecord(
                streak_count=int(data.get(count_field, 0)),
                last_activity_date=last,
            )
        return cls(records=records)
