"""
Breathing exercise data models.

This module defines the immutable profile describing an exercise's phase
durations, the phase and status enums used by the sequencer, and the
event and snapshot structures handed to presentation collaborators.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..errors import InvalidProfileConfiguration


class BreathPhase(str, Enum):
    """Named segment of a breathing cycle, in cycle order."""
    INHALE = "inhale"
    HOLD = "hold"
    EXHALE = "exhale"
    HOLD2 = "hold2"

    @property
    def label(self) -> str:
        """Text shown to the user while the phase is active."""
        return _PHASE_LABELS[self]


_PHASE_LABELS = {
    BreathPhase.INHALE: "Inhale",
    BreathPhase.HOLD: "Hold",
    BreathPhase.EXHALE: "Exhale",
    BreathPhase.HOLD2: "Hold",
}

PHASE_ORDER = (BreathPhase.INHALE, BreathPhase.HOLD, BreathPhase.EXHALE, BreathPhase.HOLD2)

# Phases that must last at least one second
REQUIRED_PHASES = (BreathPhase.INHALE, BreathPhase.HOLD, BreathPhase.EXHALE)


class SessionStatus(str, Enum):
    """Session-level status composed with the breath phase."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class BreathingProfile:
    """Immutable breathing exercise configuration."""

    id: str
    phase_durations: Mapping[BreathPhase, int]

    # Display metadata
    name: Optional[str] = None
    description: Optional[str] = None
    benefits: Optional[str] = None

    @classmethod
    def create(
        cls,
        profile_id: str,
        phases: Mapping[Any, Any],
        name: Optional[str] = None,
        description: Optional[str] = None,
        benefits: Optional[str] = None,
    ) -> "BreathingProfile":
        """
        Build a validated profile.

        Args:
            profile_id: Exercise identifier
            phases: Mapping of phase name (or BreathPhase) to whole seconds.
                A missing hold2 is treated as 0 (skipped).
            name: Display name
            description: Display description
            benefits: Display benefits text

        Returns:
            Validated BreathingProfile

        Raises:
            InvalidProfileConfiguration: unknown phase names, non-integer
                durations, inhale/hold/exhale <= 0 or hold2 < 0
        """
        durations: dict[BreathPhase, int] = {}

        for key, value in phases.items():
            try:
                phase = BreathPhase(key)
            except ValueError:
                raise InvalidProfileConfiguration(
                    f"Unknown breathing phase '{key}'",
                    profile_id=profile_id, field=str(key), value=value
                ) from None

            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidProfileConfiguration(
                    f"Duration of '{phase.value}' must be a whole number of seconds",
                    profile_id=profile_id, field=phase.value, value=value
                )
            durations[phase] = value

        durations.setdefault(BreathPhase.HOLD2, 0)

        for phase in REQUIRED_PHASES:
            if phase not in durations:
                raise InvalidProfileConfiguration(
                    f"Missing duration for '{phase.value}'",
                    profile_id=profile_id, field=phase.value, value=None
                )
            if durations[phase] <= 0:
                raise InvalidProfileConfiguration(
                    f"Duration of '{phase.value}' must be greater than 0",
                    profile_id=profile_id, field=phase.value, value=durations[phase]
                )

        if durations[BreathPhase.HOLD2] < 0:
            raise InvalidProfileConfiguration(
                "Duration of 'hold2' must not be negative",
                profile_id=profile_id, field=BreathPhase.HOLD2.value,
                value=durations[BreathPhase.HOLD2]
            )

        ordered = {phase: durations[phase] for phase in PHASE_ORDER}
        return cls(
            id=profile_id,
            phase_durations=MappingProxyType(ordered),
            name=name,
            description=description,
            benefits=benefits,
        )

    def duration_of(self, phase: BreathPhase) -> int:
        """Configured seconds for a phase."""
        return self.phase_durations[phase]

    def active_phases(self) -> tuple[BreathPhase, ...]:
        """Phases entered during a cycle, hold2 excluded when it lasts 0 seconds."""
        return tuple(p for p in PHASE_ORDER if self.phase_durations[p] > 0)

    def cycle_seconds(self) -> int:
        """Total seconds in one full cycle."""
        return sum(self.phase_durations[p] for p in self.active_phases())

    def next_phase(self, phase: BreathPhase) -> BreathPhase:
        """Phase that follows ``phase``, wrapping back to inhale."""
        active = self.active_phases()
        return active[(active.index(phase) + 1) % len(active)]

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for the persistence collaborator."""
        return {
            "id": self.id,
            "name": self.name,
            "phases": {p.value: d for p, d in self.phase_durations.items()},
        }


@dataclass(frozen=True)
class PhaseChange:
    """Emitted when the sequencer moves to another phase."""

    from_phase: BreathPhase
    to_phase: BreathPhase
    completed_cycles: int
    cycle_completed: bool = False


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a breathing session for presentation."""

    profile_id: str
    phase: BreathPhase
    remaining_seconds: int
    completed_cycles: int
    target_cycles: int
    status: SessionStatus

    @property
    def phase_label(self) -> str:
        return self.phase.label

    @property
    def display_cycle(self) -> int:
        """1-based index of the cycle in progress, capped at the target."""
        return min(self.completed_cycles + 1, self.target_cycles)
