"""Pytest configuration and shared fixtures."""

import logging

import pytest
import structlog
from datetime import date, datetime, timezone

from serene_app.breathing.catalog import ExerciseCatalog
from serene_app.breathing.models import BreathingProfile
from serene_app.scheduling.scheduler import ManualTickScheduler
from serene_app.utils.time import FixedClock


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo global logging configuration made by a test."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.setLevel(level)


@pytest.fixture
def box_profile() -> BreathingProfile:
    """Box breathing: 4 seconds for every phase."""
    return BreathingProfile.create("box", {"inhale": 4, "hold": 4, "exhale": 4, "hold2": 4})


@pytest.fixture
def four_seven_eight_profile() -> BreathingProfile:
    """4-7-8 breathing without a second hold."""
    return BreathingProfile.create("478", {"inhale": 4, "hold": 7, "exhale": 8, "hold2": 0})


@pytest.fixture
def catalog() -> ExerciseCatalog:
    return ExerciseCatalog()


@pytest.fixture
def manual_scheduler() -> ManualTickScheduler:
    return ManualTickScheduler()


@pytest.fixture
def today() -> date:
    return date(2024, 3, 15)


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock frozen at 2024-03-15 09:30 UTC."""
    return FixedClock(datetime(2024, 3, 15, 9, 30, 0, tzinfo=timezone.utc))
