"""
Built-in breathing exercises and the lookup catalog.

Exercises declared in configuration are merged over the built-ins, so a
deployment can retune a built-in exercise or add its own.
"""

from typing import Any, Iterable, Iterator, Mapping, Optional

from ..errors import UnknownExerciseError
from ..logging.config import get_logger
from .models import BreathingProfile

logger = get_logger(__name__)


BUILTIN_EXERCISES: tuple[BreathingProfile, ...] = (
    BreathingProfile.create(
        "box",
        {"inhale": 4, "hold": 4, "exhale": 4, "hold2": 4},
        name="Box Breathing",
        description="Inhale, hold, exhale, and hold for equal counts of 4 seconds each",
        benefits="Reduces stress and improves concentration",
    ),
    BreathingProfile.create(
        "478",
        {"inhale": 4, "hold": 7, "exhale": 8, "hold2": 0},
        name="4-7-8 Breathing",
        description="Inhale for 4 seconds, hold for 7 seconds, exhale for 8 seconds",
        benefits="Helps with anxiety, sleep, and stress management",
    ),
    BreathingProfile.create(
        "calm",
        {"inhale": 5, "hold": 2, "exhale": 6, "hold2": 0},
        name="Calming Breath",
        description="Slow, deep breathing with a longer exhale to calm the nervous system",
        benefits="Reduces anxiety and promotes relaxation",
    ),
)


class ExerciseCatalog:
    """Ordered collection of breathing profiles keyed by id."""

    def __init__(self, profiles: Optional[Iterable[BreathingProfile]] = None):
        self._profiles: dict[str, BreathingProfile] = {}
        for profile in (BUILTIN_EXERCISES if profiles is None else profiles):
            self._profiles[profile.id] = profile

    @classmethod
    def from_config(cls, exercises: Mapping[str, Mapping[str, Any]]) -> "ExerciseCatalog":
        """
        Build a catalog from the built-ins plus configured exercises.

        Args:
            exercises: Mapping of exercise id to a definition with a
                ``phases`` mapping and optional display fields, as loaded
                from exercises.yaml

        Returns:
            Catalog with configured exercises replacing built-ins of the same id

        Raises:
            InvalidProfileConfiguration: a configured exercise is invalid
        """
        catalog = cls()

        for exercise_id, definition in exercises.items():
            profile = BreathingProfile.create(
                str(exercise_id),
                definition.get("phases", {}),
                name=definition.get("name"),
                description=definition.get("description"),
                benefits=definition.get("benefits"),
            )
            if profile.id in catalog._profiles:
                logger.info("Overriding built-in exercise", exercise_id=profile.id)
            catalog._profiles[profile.id] = profile

        return catalog

    def get(self, exercise_id: str) -> BreathingProfile:
        """Look up an exercise, raising UnknownExerciseError if absent."""
        try:
            return self._profiles[exercise_id]
        except KeyError:
            raise UnknownExerciseError(
                f"Unknown breathing exercise '{exercise_id}'",
                exercise_id=exercise_id
            ) from None

    def ids(self) -> list[str]:
        return list(self._profiles)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._profiles

    def __iter__(self) -> Iterator[BreathingProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)
