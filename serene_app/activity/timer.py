"""
Self-care activity countdown timer.

Counts a fixed number of minutes down to zero, one ``tick()`` per second,
and notifies completion listeners once when it runs out. Like the
breathing sequencer it owns no timers and is driven by a TickDriver.
"""

from enum import Enum
from typing import Callable

from ..errors import IllegalStateTransition, InvalidProfileConfiguration
from ..logging.config import get_session_logger

session_logger = get_session_logger(__name__)


class TimerStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class ActivityTimer:
    """Countdown timer for a self-care activity."""

    def __init__(self, duration_minutes: int, activity_type: str = "self_care"):
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) \
                or duration_minutes <= 0:
            raise InvalidProfileConfiguration(
                "Activity duration must be a positive number of minutes",
                profile_id=activity_type, field="duration_minutes", value=duration_minutes
            )

        self.duration_minutes = duration_minutes
        self.activity_type = activity_type
        self.remaining_seconds = duration_minutes * 60
        self.status = TimerStatus.IDLE
        self.logger = session_logger.bind(component="activity_timer", activity_type=activity_type)
        self._completion_listeners: list[Callable[["ActivityTimer"], None]] = []

    def on_complete(self, listener: Callable[["ActivityTimer"], None]) -> None:
        self._completion_listeners.append(listener)

    @property
    def is_running(self) -> bool:
        return self.status == TimerStatus.RUNNING

    @property
    def completed(self) -> bool:
        return self.status == TimerStatus.COMPLETED

    def start(self) -> None:
        if self.status == TimerStatus.COMPLETED:
            raise IllegalStateTransition(
                "Cannot start a completed activity timer; reset it first",
                current_state=self.status.value,
                attempted_transition="start"
            )
        self.status = TimerStatus.RUNNING

    def pause(self) -> None:
        if self.status == TimerStatus.RUNNING:
            self.status = TimerStatus.IDLE

    def toggle(self) -> None:
        """Start when idle, pause when running."""
        if self.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self.remaining_seconds = self.duration_minutes * 60
        self.status = TimerStatus.IDLE

    def tick(self) -> None:
        if self.status != TimerStatus.RUNNING:
            return

        self.remaining_seconds -= 1
        if self.remaining_seconds > 0:
            return

        self.remaining_seconds = 0
        self.status = TimerStatus.COMPLETED
        self.logger.info("Activity completed", duration_minutes=self.duration_minutes)

        for listener in self._completion_listeners:
            listener(self)

    def format_time(self) -> str:
        """Remaining time as m:ss."""
        minutes, seconds = divmod(self.remaining_seconds, 60)
        return f"{minutes}:{seconds:02d}"
