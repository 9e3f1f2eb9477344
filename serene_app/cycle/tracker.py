"""
Menstrual cycle phase estimation.

A simple calendar model: the cycle repeats every ``cycle_length`` days from
the last period start. Days before ``period_length`` are menstruation, the
follicular phase runs to day 14, ovulation covers days 14-16 and the rest
of the cycle is luteal.
"""

from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from enum import Enum
from typing import Any, Optional

from ..config.defaults import CycleTrackingParams
from ..errors import InvalidCycleSettings, InvalidTemporalOrder
from ..utils.time import DateLike, days_between, format_local_date, parse_timestamp, to_local_date

OVULATION_START_DAY = 14
LUTEAL_START_DAY = 17


class CyclePhase(str, Enum):
    MENSTRUATION = "menstruation"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"


@dataclass(frozen=True)
class CycleSettings:
    """Cycle tracking preferences stored on the user profile."""

    enabled: bool = False
    last_period: Optional[date] = None
    cycle_length: int = 28
    period_length: int = 5

    def validate(self, limits: Optional[CycleTrackingParams] = None) -> "CycleSettings":
        """
        Check lengths against the allowed ranges.

        Raises:
            InvalidCycleSettings: a length is out of range
        """
        limits = limits or CycleTrackingParams()

        if not limits.min_cycle_length <= self.cycle_length <= limits.max_cycle_length:
            raise InvalidCycleSettings(
                f"Cycle length must be between {limits.min_cycle_length} "
                f"and {limits.max_cycle_length} days",
                field="cycle_length", value=self.cycle_length
            )
        if not limits.min_period_length <= self.period_length <= limits.max_period_length:
            raise InvalidCycleSettings(
                f"Period length must be between {limits.min_period_length} "
                f"and {limits.max_period_length} days",
                field="period_length", value=self.period_length
            )
        return self

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        defaults: Optional[CycleTrackingParams] = None,
        tz: Optional[tzinfo] = None
    ) -> "CycleSettings":
        """
        Parse the ``periodTracking`` profile document.

        Lengths missing from the document fall back to ``defaults``.
        """
        defaults = defaults or CycleTrackingParams()
        last = data.get("lastPeriod")
        if isinstance(last, str):
            last = parse_timestamp(last)
        if last is not None:
            last = to_local_date(last, tz)
        return cls(
            enabled=bool(data.get("enabled", False)),
            last_period=last,
            cycle_length=int(data.get("cycleLength", defaults.cycle_length)),
            period_length=int(data.get("periodLength", defaults.period_length)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "lastPeriod": format_local_date(self.last_period) if self.last_period else None,
            "cycleLength": self.cycle_length,
            "periodLength": self.period_length,
        }


@dataclass(frozen=True)
class CycleStatus:
    """Estimated position in the current cycle."""

    phase: CyclePhase
    day_in_cycle: int          # 0-based
    days_until_next: int       # Days until the next phase milestone
    next_period: date


def estimate_cycle_status(
    settings: CycleSettings,
    today: DateLike,
    tz: Optional[tzinfo] = None
) -> Optional[CycleStatus]:
    """
    Estimate the cycle phase on ``today``.

    Args:
        settings: Validated cycle settings
        today: Day to estimate for
        tz: Local time zone used to normalize aware datetimes

    Returns:
        CycleStatus, or None when tracking is disabled or no period is recorded

    Raises:
        InvalidTemporalOrder: ``today`` precedes the last period start
    """
    if not settings.enabled or settings.last_period is None:
        return None

    day = to_local_date(today, tz)
    last_period = to_local_date(settings.last_period, tz)
    days_since = days_between(last_period, day)

    if days_since < 0:
        raise InvalidTemporalOrder(
            f"Date {format_local_date(day)} precedes last period start "
            f"{format_local_date(last_period)}",
            today=day,
            last_activity_date=last_period
        )

    day_in_cycle = days_since % settings.cycle_length
    next_period = day + timedelta(days=settings.cycle_length - day_in_cycle)

    if day_in_cycle < settings.period_length:
        phase = CyclePhase.MENSTRUATION
        days_until_next = 0
    elif day_in_cycle < OVULATION_START_DAY:
        phase = CyclePhase.FOLLICULAR
        days_until_next = OVULATION_START_DAY - day_in_cycle
    elif day_in_cycle < LUTEAL_START_DAY:
        phase = CyclePhase.OVULATION
        days_until_next = settings.cycle_length - day_in_cycle
    else:
        phase = CyclePhase.LUTEAL
        days_until_next = settings.cycle_length - day_in_cycle

    return CycleStatus(
        phase=phase,
        day_in_cycle=day_in_cycle,
        days_until_next=days_until_next,
        next_period=next_period,
    )
