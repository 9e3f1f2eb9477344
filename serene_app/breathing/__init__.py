"""
Guided breathing module.

Exercise profiles, the built-in catalog and the phase sequencer that
drives a session through inhale, hold, exhale and the optional second hold.
"""

from .catalog import BUILTIN_EXERCISES, ExerciseCatalog
from .models import BreathingProfile, BreathPhase, PhaseChange, SessionSnapshot, SessionStatus
from .sequencer import BreathingSequencer, BreathingSession

__all__ = [
    "BUILTIN_EXERCISES",
    "ExerciseCatalog",
    "BreathingProfile",
    "BreathPhase",
    "PhaseChange",
    "SessionSnapshot",
    "SessionStatus",
    "BreathingSequencer",
    "BreathingSession",
]
