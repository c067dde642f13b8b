"""
Centralized logging configuration for the toy robot service.

configure_logging sets up the structlog processor chain once for the
process (console or JSON lines). On top of that the robot audit trail is
built here: get_state_logger binds subsystem="state_engine" and
audit_trail=True, and every accepted or rejected command is logged through
log_state_transition or log_command_rejected with the robot state as a
plain dict.
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
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

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


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for robot state transitions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound with the state engine audit context
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="state_engine",
        audit_trail=True
    )


def log_state_transition(
    logger: FilteringBoundLogger,
    command: str,
    from_state: dict[str, Any],
    to_state: dict[str, Any],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an accepted command with standardized format.

    Args:
        logger: Structlog logger instance
        command: Command that produced the transition
        from_state: Robot state before the command
        to_state: Robot state after the command
        context: Additional context data
    """
    bound_logger = logger.bind(
        command=command,
        from_state=from_state,
        to_state=to_state,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("State transition")


def log_command_rejected(
    logger: FilteringBoundLogger,
    command: str,
    reason: str,
    state: dict[str, Any],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a rejected command with standardized format.

    Args:
        logger: Structlog logger instance
        command: Command that was rejected
        reason: Error message explaining the rejection
        state: Robot state the command was evaluated against
        context: Additional context data
    """
    bound_logger = logger.bind(
        command=command,
        reason=reason,
        state=state,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.warning("Command rejected")
