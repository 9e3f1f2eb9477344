"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..breathing.models import BreathingProfile
from ..errors import InvalidProfileConfiguration


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_breathing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate breathing session parameters."""
        errors = []

        if "target_cycles" in params:
            value = params["target_cycles"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="target_cycles",
                    message="Must be a positive integer",
                    value=value
                ))

        if "target_cycle_choices" in params:
            value = params["target_cycle_choices"]
            if not isinstance(value, (list, tuple)) or not value \
                    or not all(_is_positive_int(v) for v in value):
                errors.append(ValidationError(
                    field="target_cycle_choices",
                    message="Must be a non-empty list of positive integers",
                    value=value
                ))

        if "tick_interval_seconds" in params:
            value = params["tick_interval_seconds"]
            if not _is_positive_number(value):
                errors.append(ValidationError(
                    field="tick_interval_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "default_exercise" in params:
            value = params["default_exercise"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="default_exercise",
                    message="Must be a non-empty exercise id",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_activity_timer_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate activity timer parameters."""
        errors = []

        if "duration_minutes" in params:
            value = params["duration_minutes"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="duration_minutes",
                    message="Must be a positive integer",
                    value=value
                ))

        if "tick_interval_seconds" in params:
            value = params["tick_interval_seconds"]
            if not _is_positive_number(value):
                errors.append(ValidationError(
                    field="tick_interval_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_cycle_tracking_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate cycle tracking defaults against their own limits."""
        errors = []

        for name in ("cycle_length", "period_length", "min_cycle_length",
                     "max_cycle_length", "min_period_length", "max_period_length"):
            if name in params and not _is_positive_int(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=params[name]
                ))

        if errors:
            return errors

        for name, low, high in (("cycle_length", "min_cycle_length", "max_cycle_length"),
                                ("period_length", "min_period_length", "max_period_length")):
            if name in params and low in params and high in params:
                if not params[low] <= params[name] <= params[high]:
                    errors.append(ValidationError(
                        field=name,
                        message=f"Must be between {params[low]} and {params[high]}",
                        value=params[name]
                    ))

        return errors

    @staticmethod
    def validate_time_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate time zone settings."""
        errors = []

        if "timezone" in params:
            value = params["timezone"]
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError, TypeError, OSError):
                errors.append(ValidationError(
                    field="timezone",
                    message="Must be an IANA time zone name",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging settings."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in \
                    ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                errors.append(ValidationError(
                    field="level",
                    message="Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_exercises(exercises: Mapping[str, Any]) -> list[ValidationError]:
        """Validate exercise definitions loaded from exercises.yaml."""
        errors = []

        for exercise_id, definition in exercises.items():
            if not isinstance(definition, Mapping) or not isinstance(definition.get("phases"), Mapping):
                errors.append(ValidationError(
                    field=f"exercises.{exercise_id}.phases",
                    message="Must define a phases mapping",
                    value=definition
                ))
                continue

            try:
                BreathingProfile.create(str(exercise_id), definition["phases"])
            except InvalidProfileConfiguration as e:
                errors.append(ValidationError(
                    field=f"exercises.{exercise_id}.{e.field}",
                    message=str(e),
                    value=e.value
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        sections = (
            ("breathing", cls.validate_breathing_params),
            ("activity_timer", cls.validate_activity_timer_params),
            ("cycle_tracking", cls.validate_cycle_tracking_params),
            ("time", cls.validate_time_params),
            ("logging", cls.validate_logging_params),
        )

        for section, validator in sections:
            if section in config:
                for error in validator(config[section]):
                    errors.append(ValidationError(
                        field=f"{section}.{error.field}",
                        message=error.message,
                        value=error.value
                    ))

        return errors
