"""
Wellness core coordinator.

Loads configuration, builds the exercise catalog and wires the injected
clock, scheduler and persistence collaborators into breathing sessions,
activity timers, streak tracking and cycle estimation.
"""

from dataclasses import fields
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo

import structlog

from .activity.timer import ActivityTimer
from .breathing.catalog import ExerciseCatalog
from .breathing.models import BreathingProfile
from .breathing.sequencer import BreathingSequencer
from .config.defaults import CycleTrackingParams
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .cycle.tracker import CycleSettings, CycleStatus, estimate_cycle_status
from .errors import DataQualityError
from .logging.config import configure_logging
from .scheduling.driver import ErrorHandler, TickDriver
from .scheduling.scheduler import ThreadingTickScheduler, TickScheduler
from .streaks.models import ActivityKind, UserStreaks
from .streaks.tracker import PersistStreak, StreakTracker
from .utils.time import Clock, SystemClock

logger = structlog.get_logger(__name__)


class WellnessEngine:
    """
    Main coordinator for the wellness core.

    Owns the configuration and the collaborators shared by every session:
    Config → Catalog → Sessions (breathing, activity) → Streaks
    """

    def __init__(
        self,
        config_dir: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[TickScheduler] = None,
        persist_streak: Optional[PersistStreak] = None,
        persist_profile: Optional[Callable[[BreathingProfile], None]] = None,
        configure_logs: bool = True,
    ) -> None:
        self.logger = logger

        self.config_loader = ConfigLoader.create(config_dir)
        self.config = self.config_loader.merge_config(overrides)
        exercises = self.config_loader.load_exercises()

        errors = ConfigValidator.validate_config(self.config)
        errors.extend(ConfigValidator.validate_exercises(exercises))
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            self.logger.error("Configuration validation failed", errors=error_msgs)
            raise DataQualityError("Invalid configuration", context={"errors": error_msgs})

        if configure_logs:
            configure_logging(
                level=self.config["logging"]["level"],
                format_json=self.config["logging"]["format_json"]
            )

        self.catalog = ExerciseCatalog.from_config(exercises)
        cycle_cfg = self.config["cycle_tracking"]
        self.cycle_params = CycleTrackingParams(**{
            f.name: cycle_cfg[f.name] for f in fields(CycleTrackingParams) if f.name in cycle_cfg
        })
        self.tz = ZoneInfo(self.config["time"]["timezone"])
        self.clock = clock or SystemClock(self.tz)
        self.scheduler = scheduler or ThreadingTickScheduler()
        self.persist_profile = persist_profile
        self.streak_tracker = StreakTracker(self.clock, persist_streak, self.tz)

        self.logger.info(
            "Wellness engine initialized",
            exercises=self.catalog.ids(),
            timezone=self.config["time"]["timezone"]
        )

    @property
    def target_cycle_choices(self) -> list[int]:
        return list(self.config["breathing"]["target_cycle_choices"])

    def breathing_session(
        self,
        exercise_id: Optional[str] = None,
        target_cycles: Optional[int] = None,
        on_error: Optional[ErrorHandler] = None
    ) -> TickDriver:
        """
        Create a breathing session driven on the configured cadence.

        Args:
            exercise_id: Catalog id, defaults to the configured default exercise
            target_cycles: Cycles to complete, defaults to the configured value
            on_error: Receives errors raised while ticking on the scheduler

        Returns:
            TickDriver whose ``target`` is the BreathingSequencer

        Raises:
            UnknownExerciseError: the exercise id is not in the catalog
            InvalidProfileConfiguration: target_cycles is not a positive integer
        """
        breathing = self.config["breathing"]
        profile = self.catalog.get(exercise_id or breathing["default_exercise"])
        sequencer = BreathingSequencer(
            profile,
            target_cycles if target_cycles is not None else breathing["target_cycles"]
        )

        if self.persist_profile is not None:
            sequencer.on_profile_change(self.persist_profile)

        return TickDriver(
            sequencer,
            self.scheduler,
            interval_seconds=breathing["tick_interval_seconds"],
            name="breathing",
            on_error=on_error
        )

    def switch_exercise(self, driver: TickDriver, exercise_id: str) -> None:
        """Switch a paused breathing session to another catalog exercise."""
        sequencer: BreathingSequencer = driver.target  # type: ignore[assignment]
        sequencer.switch_profile(self.catalog.get(exercise_id))

    def activity_timer(
        self,
        duration_minutes: Optional[int] = None,
        activity_type: str = "self_care",
        streaks: Optional[Callable[[], UserStreaks]] = None,
        on_streaks_updated: Optional[Callable[[UserStreaks], None]] = None,
        on_error: Optional[ErrorHandler] = None,
    ) -> TickDriver:
        """
        Create a self-care activity timer.

        When ``streaks`` is given, completing the timer records a self-care
        activity against the streak records it returns and hands the
        result to ``on_streaks_updated``. Errors from recording the streak
        (InvalidTemporalOrder, PersistenceError) are handed to ``on_error``;
        without one they propagate out of the tick that completed the timer.
        """
        timer_cfg = self.config["activity_timer"]
        timer = ActivityTimer(
            duration_minutes if duration_minutes is not None else timer_cfg["duration_minutes"],
            activity_type
        )

        if streaks is not None:
            def _record(_: ActivityTimer) -> None:
                updated = self.record_self_care(streaks())
                if on_streaks_updated is not None:
                    on_streaks_updated(updated)

            timer.on_complete(_record)

        return TickDriver(
            timer,
            self.scheduler,
            interval_seconds=timer_cfg["tick_interval_seconds"],
            name="activity_timer",
            on_error=on_error
        )

    def load_streaks(self, data: dict[str, Any]) -> UserStreaks:
        """Parse stored streak fields of a user profile in the configured zone."""
        return self.streak_tracker.load(data)

    def record_journal_entry(self, streaks: UserStreaks) -> UserStreaks:
        return self.streak_tracker.record(streaks, ActivityKind.JOURNAL)

    def record_self_care(self, streaks: UserStreaks) -> UserStreaks:
        return self.streak_tracker.record(streaks, ActivityKind.SELF_CARE)

    def cycle_settings(self, data: Optional[dict[str, Any]] = None) -> CycleSettings:
        """Cycle settings from a stored profile document, with configured default lengths."""
        return CycleSettings.from_dict(data or {}, self.cycle_params, self.tz)

    def cycle_status(self, settings: CycleSettings) -> Optional[CycleStatus]:
        """Estimate today's cycle phase for validated settings."""
        settings.validate(self.cycle_params)
        return estimate_cycle_status(settings, self.clock.now(), self.tz)
