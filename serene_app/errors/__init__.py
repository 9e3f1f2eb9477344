"""
Error classification for the wellness core.

This module provides the exception hierarchy raised by the breathing,
activity, streak and cycle components. Errors are propagated to the
caller and never corrected silently.
"""

from .data_quality import (
    DataQualityError,
    InvalidTemporalOrder,
    InvalidProfileConfiguration,
    InvalidCycleSettings,
    UnknownExerciseError,
)
from .system_failures import (
    SystemFailureError,
    IllegalStateTransition,
    PersistenceError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "InvalidTemporalOrder",
    "InvalidProfileConfiguration",
    "InvalidCycleSettings",
    "UnknownExerciseError",
    # System Failures
    "SystemFailureError",
    "IllegalStateTransition",
    "PersistenceError",
]
