"""
Input error classifications for the wellness core.

These exceptions describe caller-supplied values that violate a contract:
out-of-order dates, invalid breathing or timer configuration and invalid
cycle tracking settings.
"""

from datetime import date
from typing import Any, Dict, Optional


class DataQualityError(Exception):
    """Base class for invalid input that the caller can correct."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InvalidTemporalOrder(DataQualityError):
    """The supplied date precedes the last recorded date."""

    def __init__(self, message: str, today: Optional[date] = None,
                 last_activity_date: Optional[date] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.today = today
        self.last_activity_date = last_activity_date


class InvalidProfileConfiguration(DataQualityError):
    """Breathing profile or timer settings outside their allowed range."""

    def __init__(self, message: str, profile_id: Optional[str] = None,
                 field: Optional[str] = None, value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.profile_id = profile_id
        self.field = field
        self.value = value


class InvalidCycleSettings(DataQualityError):
    """Menstrual cycle tracking settings outside their allowed range."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class UnknownExerciseError(DataQualityError, KeyError):
    """Requested exercise id is not in the catalog."""

    def __init__(self, message: str, exercise_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.exercise_id = exercise_id
