"""
Guided breathing phase sequencer.

The sequencer is an explicit state machine advanced one second at a time
by ``tick()``. It owns no timers; a TickDriver (or a test) supplies the
ticks, which keeps sequencing independent of any scheduling primitive.

Cycle order is inhale -> hold -> exhale -> hold2 -> inhale, with hold2
skipped when its duration is 0. Returning to inhale completes a cycle and
is the only point where the target cycle count is checked.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import IllegalStateTransition, InvalidProfileConfiguration
from ..logging.config import get_session_logger, log_phase_transition
from .models import (
    BreathingProfile,
    BreathPhase,
    PhaseChange,
    SessionSnapshot,
    SessionStatus,
)

session_logger = get_session_logger(__name__)

PhaseListener = Callable[[PhaseChange], None]
CompletionListener = Callable[[SessionSnapshot], None]
ProfileListener = Callable[[BreathingProfile], None]


def validate_target_cycles(target_cycles: int, profile_id: Optional[str] = None) -> int:
    """Return ``target_cycles`` if it is a positive integer."""
    if isinstance(target_cycles, bool) or not isinstance(target_cycles, int) or target_cycles <= 0:
        raise InvalidProfileConfiguration(
            "Target cycles must be a positive integer",
            profile_id=profile_id, field="target_cycles", value=target_cycles
        )
    return target_cycles


@dataclass
class BreathingSession:
    """Mutable run-time state of one breathing session."""

    profile: BreathingProfile
    current_phase: BreathPhase
    remaining_seconds: int
    target_cycles: int
    completed_cycles: int = 0
    status: SessionStatus = SessionStatus.IDLE

    @classmethod
    def initial(cls, profile: BreathingProfile, target_cycles: int) -> "BreathingSession":
        return cls(
            profile=profile,
            current_phase=BreathPhase.INHALE,
            remaining_seconds=profile.duration_of(BreathPhase.INHALE),
            target_cycles=target_cycles,
        )


class BreathingSequencer:
    """Advances a breathing session through its phases."""

    def __init__(self, profile: BreathingProfile, target_cycles: int = 3):
        validate_target_cycles(target_cycles, profile.id)
        self.session = BreathingSession.initial(profile, target_cycles)
        self.logger = session_logger.bind(component="breathing")

        self._phase_listeners: list[PhaseListener] = []
        self._completion_listeners: list[CompletionListener] = []
        self._profile_listeners: list[ProfileListener] = []

        self.logger.info(
            "Created breathing session",
            profile_id=profile.id,
            target_cycles=target_cycles,
            cycle_seconds=profile.cycle_seconds()
        )

    # Listener registration

    def on_phase_change(self, listener: PhaseListener) -> None:
        self._phase_listeners.append(listener)

    def on_complete(self, listener: CompletionListener) -> None:
        self._completion_listeners.append(listener)

    def on_profile_change(self, listener: ProfileListener) -> None:
        self._profile_listeners.append(listener)

    # Read access

    @property
    def profile(self) -> BreathingProfile:
        return self.session.profile

    @property
    def current_phase(self) -> BreathPhase:
        return self.session.current_phase

    @property
    def remaining_seconds(self) -> int:
        return self.session.remaining_seconds

    @property
    def completed_cycles(self) -> int:
        return self.session.completed_cycles

    @property
    def target_cycles(self) -> int:
        return self.session.target_cycles

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def is_running(self) -> bool:
        return self.session.status == SessionStatus.RUNNING

    def snapshot(self) -> SessionSnapshot:
        """Immutable view of the current session state."""
        return SessionSnapshot(
            profile_id=self.session.profile.id,
            phase=self.session.current_phase,
            remaining_seconds=self.session.remaining_seconds,
            completed_cycles=self.session.completed_cycles,
            target_cycles=self.session.target_cycles,
            status=self.session.status,
        )

    # Commands

    def start(self) -> None:
        """
        Start or resume the session.

        Does not advance time; the first decrement happens on the next tick.

        Raises:
            IllegalStateTransition: the session has already completed
        """
        if self.session.status == SessionStatus.COMPLETED:
            raise IllegalStateTransition(
                "Cannot start a completed breathing session; reset it first",
                current_state=self.session.status.value,
                attempted_transition="start"
            )
        if self.session.status == SessionStatus.RUNNING:
            return

        self.session.status = SessionStatus.RUNNING
        self.logger.info(
            "Breathing session running",
            profile_id=self.session.profile.id,
            phase=self.session.current_phase.value,
            remaining_seconds=self.session.remaining_seconds,
            completed_cycles=self.session.completed_cycles
        )

    resume = start

    def pause(self) -> None:
        """Stop advancing without touching phase or remaining time."""
        if self.session.status != SessionStatus.RUNNING:
            return

        self.session.status = SessionStatus.IDLE
        self.logger.info(
            "Breathing session paused",
            profile_id=self.session.profile.id,
            phase=self.session.current_phase.value,
            remaining_seconds=self.session.remaining_seconds
        )

    def reset(self) -> None:
        """Return to the initial state for the current profile."""
        self.session = BreathingSession.initial(self.session.profile, self.session.target_cycles)
        self.logger.info("Breathing session reset", profile_id=self.session.profile.id)

    def switch_profile(self, profile: BreathingProfile) -> None:
        """
        Replace the active profile with a fresh session.

        Raises:
            IllegalStateTransition: the session is running
        """
        if self.session.status == SessionStatus.RUNNING:
            raise IllegalStateTransition(
                "Pause the breathing session before switching exercises",
                current_state=self.session.status.value,
                attempted_transition="switch_profile"
            )

        previous_id = self.session.profile.id
        self.session = BreathingSession.initial(profile, self.session.target_cycles)
        self.logger.info(
            "Switched breathing exercise",
            from_profile=previous_id,
            to_profile=profile.id,
            target_cycles=self.session.target_cycles
        )

        for listener in self._profile_listeners:
            listener(profile)

    def set_target_cycles(self, target_cycles: int) -> None:
        """
        Change the number of cycles to complete.

        Only consulted at the next cycle boundary; never completes the
        session on its own.
        """
        validate_target_cycles(target_cycles, self.session.profile.id)
        self.session.target_cycles = target_cycles

    def tick(self) -> Optional[PhaseChange]:
        """
        Advance the session by one second of running time.

        On the boundary that reaches the target the session is marked
        completed before any listener runs, so phase listeners already see
        the final status. Completion listeners fire even when a phase listener
        raises.

        Returns:
            PhaseChange if a new phase was entered, None otherwise
        """
        session = self.session
        if session.status != SessionStatus.RUNNING:
            return None

        session.remaining_seconds -= 1
        if session.remaining_seconds > 0:
            return None

        previous = session.current_phase
        next_phase = session.profile.next_phase(previous)
        cycle_completed = next_phase == BreathPhase.INHALE

        if cycle_completed:
            session.completed_cycles += 1

        session.current_phase = next_phase
        session.remaining_seconds = session.profile.duration_of(next_phase)

        finished = cycle_completed and session.completed_cycles >= session.target_cycles
        if finished:
            session.status = SessionStatus.COMPLETED

        change = PhaseChange(
            from_phase=previous,
            to_phase=next_phase,
            completed_cycles=session.completed_cycles,
            cycle_completed=cycle_completed
        )
        log_phase_transition(
            self.logger,
            profile_id=session.profile.id,
            from_phase=previous.value,
            to_phase=next_phase.value,
            completed_cycles=session.completed_cycles
        )

        try:
            self._notify_phase_change(change)
        finally:
            if finished:
                self._complete()

        return change

    def _notify_phase_change(self, change: PhaseChange) -> None:
        for listener in self._phase_listeners:
            listener(change)

    def _complete(self) -> None:
        """Announce completion; the session is already marked completed."""
        snapshot = self.snapshot()

        self.logger.info(
            "Breathing exercise completed",
            profile_id=snapshot.profile_id,
            completed_cycles=snapshot.completed_cycles,
            target_cycles=snapshot.target_cycles
        )

        for listener in self._completion_listeners:
            listener(snapshot)
