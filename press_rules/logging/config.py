"""
Centralized logging configuration for the press rules engine.

This module provides standardized logging configuration using structlog
for all components. Contest evaluation and settlement code should obtain
loggers from here so that audit events share one structured format.
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


def get_settlement_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for contest outcome and settlement events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger carrying the settlement audit context
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="settlement",
        audit_trail=True
    )


def log_contest_outcome(
    logger: FilteringBoundLogger,
    contest_id: str,
    contest_type: str,
    status: str,
    thru_hole: Optional[int],
    ledger_entries: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a computed contest result with standardized format.

    Args:
        logger: Structlog logger instance
        contest_id: ID of the contest that was computed
        contest_type: Contest type tag
        status: Resulting status (live, final or invalid)
        thru_hole: Highest completed hole, if any
        ledger_entries: Number of ledger entries produced
        context: Additional context data
    """
    bound_logger = logger.bind(
        contest_id=contest_id,
        contest_type=contest_type,
        contest_status=status,
        thru_hole=thru_hole,
        ledger_entries=ledger_entries,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Contest computed")


def log_validation_failure(
    logger: FilteringBoundLogger,
    contest_id: str,
    contest_type: str,
    errors: list[str],
) -> None:
    """
    Log a contest configuration that failed validation.

    Args:
        logger: Structlog logger instance
        contest_id: ID of the rejected contest
        contest_type: Contest type tag
        errors: Validation error messages
    """
    logger.bind(
        contest_id=contest_id,
        contest_type=contest_type,
        errors=errors,
        error_count=len(errors),
    ).warning("Contest config rejected")
