"""
Centralized logging configuration for the wellness core.

This module provides standardized logging configuration using structlog
for all components. Breathing sessions, activity timers and streak updates
log through the helpers defined here so every event carries the same
structured fields.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    # Level names arrive from settings.yaml as strings
    log_level = getattr(logging, level.upper())

    # Route structlog output through stdlib logging on stdout
    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )
    # basicConfig is a no-op once handlers exist; every engine applies its level
    logging.getLogger().setLevel(log_level)

    # Shared processor chain, renderer appended last
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # Timestamps for session and streak events
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    # Caller location, useful when tracing listener callbacks
    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    # Caller-supplied processors run before rendering
    if extra_processors:
        processors.extend(extra_processors)

    # JSON for collected logs, colored console output otherwise
    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    # Install the configuration globally
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_session_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for timed session state machines.

    Used by the breathing sequencer, the activity timer and the tick
    driver so their events can be filtered together.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for session events
    """
    logger = get_logger(name)

    return logger.bind(subsystem="session")


def get_streak_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for streak bookkeeping.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for streak updates
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="streaks",
        audit_trail=True
    )


def log_phase_transition(
    logger: FilteringBoundLogger,
    profile_id: str,
    from_phase: str,
    to_phase: str,
    completed_cycles: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a breathing phase transition with standardized format.

    Args:
        logger: Structlog logger instance
        profile_id: ID of the active breathing profile
        from_phase: Phase being left
        to_phase: Phase being entered
        completed_cycles: Cycle count after the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        profile_id=profile_id,
        from_phase=from_phase,
        to_phase=to_phase,
        completed_cycles=completed_cycles,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Phase transition")


def log_streak_update(
    logger: FilteringBoundLogger,
    kind: str,
    previous_count: int,
    new_count: int,
    gap_days: Optional[int],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a streak update with standardized format.

    Args:
        logger: Structlog logger instance
        kind: Activity kind the streak belongs to
        previous_count: Streak count before the update
        new_count: Streak count after the update
        gap_days: Days since the previous activity, None on first activity
        context: Additional context data
    """
    if gap_days is None:
        outcome = "first_activity"
    elif gap_days == 0:
        outcome = "same_day"
    elif gap_days == 1:
        outcome = "extended"
    else:
        outcome = "reset"

    bound_logger = logger.bind(
        kind=kind,
        previous_count=previous_count,
        new_count=new_count,
        gap_days=gap_days,
        outcome=outcome,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if outcome == "reset":
        bound_logger.info("Streak broken")
    else:
        bound_logger.info("Streak updated")
