"""Tests for breathing profile models and the exercise catalog."""

import pytest

from serene_app.breathing.catalog import BUILTIN_EXERCISES, ExerciseCatalog
from serene_app.breathing.models import (
    BreathingProfile, BreathPhase, SessionSnapshot, SessionStatus
)
from serene_app.errors import InvalidProfileConfiguration, UnknownExerciseError


class TestBreathingProfile:
    """Test BreathingProfile construction and derived values."""

    def test_create_orders_phases(self):
        """Phase durations are stored in cycle order regardless of input order."""
        profile = BreathingProfile.create("x", {"exhale": 6, "hold": 2, "inhale": 5})

        assert list(profile.phase_durations) == [
            BreathPhase.INHALE, BreathPhase.HOLD, BreathPhase.EXHALE, BreathPhase.HOLD2
        ]

    def test_missing_hold2_means_skipped(self):
        """A profile without hold2 behaves like hold2 = 0."""
        profile = BreathingProfile.create("x", {"inhale": 5, "hold": 2, "exhale": 6})

        assert profile.duration_of(BreathPhase.HOLD2) == 0
        assert BreathPhase.HOLD2 not in profile.active_phases()

    def test_accepts_enum_keys(self):
        profile = BreathingProfile.create("x", {
            BreathPhase.INHALE: 1, BreathPhase.HOLD: 1, BreathPhase.EXHALE: 1
        })
        assert profile.cycle_seconds() == 3

    @pytest.mark.parametrize("phase", ["inhale", "hold", "exhale"])
    def test_required_phase_must_be_positive(self, phase):
        """inhale, hold and exhale must each last at least a second."""
        phases = {"inhale": 4, "hold": 4, "exhale": 4, "hold2": 0}
        phases[phase] = 0

        with pytest.raises(InvalidProfileConfiguration) as exc_info:
            BreathingProfile.create("bad", phases)

        assert exc_info.value.profile_id == "bad"
        assert exc_info.value.field == phase
        assert exc_info.value.value == 0

    def test_negative_hold2_rejected(self):
        with pytest.raises(InvalidProfileConfiguration) as exc_info:
            BreathingProfile.create("bad", {"inhale": 4, "hold": 4, "exhale": 4, "hold2": -1})
        assert exc_info.value.field == "hold2"

    def test_missing_required_phase_rejected(self):
        with pytest.raises(InvalidProfileConfiguration) as exc_info:
            BreathingProfile.create("bad", {"inhale": 4, "exhale": 4})
        assert exc_info.value.field == "hold"

    def test_unknown_phase_rejected(self):
        with pytest.raises(InvalidProfileConfiguration) as exc_info:
            BreathingProfile.create("bad", {"inhale": 4, "hold": 4, "exhale": 4, "pause": 2})
        assert exc_info.value.field == "pause"

    @pytest.mark.parametrize("value", [2.5, "4", True, None])
    def test_non_integer_duration_rejected(self, value):
        with pytest.raises(InvalidProfileConfiguration):
            BreathingProfile.create("bad", {"inhale": value, "hold": 4, "exhale": 4})

    def test_cycle_seconds_box(self, box_profile):
        assert box_profile.cycle_seconds() == 16

    def test_cycle_seconds_excludes_zero_hold2(self, four_seven_eight_profile):
        assert four_seven_eight_profile.cycle_seconds() == 19

    def test_next_phase_wraps(self, box_profile, four_seven_eight_profile):
        assert box_profile.next_phase(BreathPhase.EXHALE) == BreathPhase.HOLD2
        assert box_profile.next_phase(BreathPhase.HOLD2) == BreathPhase.INHALE
        assert four_seven_eight_profile.next_phase(BreathPhase.EXHALE) == BreathPhase.INHALE

    def test_profile_is_immutable(self, box_profile):
        with pytest.raises(TypeError):
            box_profile.phase_durations[BreathPhase.INHALE] = 10  # type: ignore[index]

    def test_to_dict(self, four_seven_eight_profile):
        data = four_seven_eight_profile.to_dict()
        assert data["id"] == "478"
        assert data["phases"] == {"inhale": 4, "hold": 7, "exhale": 8, "hold2": 0}


class TestSessionSnapshot:
    """Test presentation helpers on snapshots."""

    def test_phase_labels(self):
        assert BreathPhase.INHALE.label == "Inhale"
        assert BreathPhase.HOLD.label == "Hold"
        assert BreathPhase.EXHALE.label == "Exhale"
        assert BreathPhase.HOLD2.label == "Hold"

    def test_display_cycle_capped_at_target(self):
        snapshot = SessionSnapshot(
            profile_id="box", phase=BreathPhase.INHALE, remaining_seconds=4,
            completed_cycles=3, target_cycles=3, status=SessionStatus.COMPLETED
        )
        assert snapshot.display_cycle == 3
        assert snapshot.phase_label == "Inhale"

    def test_display_cycle_is_one_based(self):
        snapshot = SessionSnapshot(
            profile_id="box", phase=BreathPhase.HOLD, remaining_seconds=2,
            completed_cycles=0, target_cycles=5, status=SessionStatus.RUNNING
        )
        assert snapshot.display_cycle == 1


class TestExerciseCatalog:
    """Test the built-in catalog and configured exercises."""

    def test_builtin_exercises(self, catalog):
        assert catalog.ids() == ["box", "478", "calm"]
        assert len(catalog) == len(BUILTIN_EXERCISES)

        calm = catalog.get("calm")
        assert calm.name == "Calming Breath"
        assert calm.cycle_seconds() == 13

    def test_unknown_exercise(self, catalog):
        with pytest.raises(UnknownExerciseError) as exc_info:
            catalog.get("missing")

        assert exc_info.value.exercise_id == "missing"
        assert isinstance(exc_info.value, KeyError)

    def test_from_config_adds_and_overrides(self):
        catalog = ExerciseCatalog.from_config({
            "box": {"name": "Slow Box", "phases": {"inhale": 6, "hold": 6, "exhale": 6, "hold2": 6}},
            "extended_exhale": {"phases": {"inhale": 4, "hold": 1, "exhale": 8}},
        })

        assert catalog.ids() == ["box", "478", "calm", "extended_exhale"]
        assert catalog.get("box").name == "Slow Box"
        assert catalog.get("box").cycle_seconds() == 24
        assert "extended_exhale" in catalog

    def test_from_config_rejects_invalid_exercise(self):
        with pytest.raises(InvalidProfileConfiguration):
            ExerciseCatalog.from_config({"bad": {"phases": {"inhale": 0, "hold": 1, "exhale": 1}}})
