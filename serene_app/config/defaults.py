"""Default configuration parameters for the wellness core."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BreathingParams:
    """Breathing session parameters."""
    default_exercise: str = "box"
    target_cycles: int = 3
    target_cycle_choices: tuple[int, ...] = (3, 5, 7, 10)   # Offered in the cycle picker
    tick_interval_seconds: float = 1.0


@dataclass(frozen=True)
class ActivityTimerParams:
    """Self-care activity timer parameters."""
    duration_minutes: int = 5
    tick_interval_seconds: float = 1.0


@dataclass(frozen=True)
class CycleTrackingParams:
    """Menstrual cycle tracking parameters."""
    cycle_length: int = 28
    period_length: int = 5
    min_cycle_length: int = 21
    max_cycle_length: int = 35
    min_period_length: int = 3
    max_period_length: int = 7


@dataclass(frozen=True)
class TimeParams:
    """Time-based parameters."""
    timezone: str = "UTC"


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    breathing: BreathingParams
    activity_timer: ActivityTimerParams
    cycle_tracking: CycleTrackingParams
    time: TimeParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        breathing=BreathingParams(),
        activity_timer=ActivityTimerParams(),
        cycle_tracking=CycleTrackingParams(),
        time=TimeParams(),
        logging=LoggingParams(),
    )
