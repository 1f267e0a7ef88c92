"""
Centralized logging configuration for the firm rules engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
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
    # basicConfig leaves the level alone once handlers exist
    logging.getLogger().setLevel(log_level)

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


def get_validation_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for rule-check outcomes.

    Every check the validator runs is recorded through this logger so a
    compliance report can be reconstructed from the audit trail.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger bound to the validation subsystem
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="validation",
        audit_trail=True
    )


def log_check_result(
    logger: FilteringBoundLogger,
    check_name: str,
    emitted: bool,
    firm_slug: str,
    severity: Optional[str] = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of a single rule check with standardized format.

    Args:
        logger: Structlog logger instance
        check_name: Name of the check that ran
        emitted: Whether the check produced a warning
        firm_slug: Firm the check ran against
        severity: Severity of the emitted warning, if any
        context: Additional context data (limits, requested values)
    """
    bound_logger = logger.bind(
        check_name=check_name,
        check_result="EMITTED" if emitted else "CLEAR",
        firm=firm_slug,
        severity=severity,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if emitted and severity == "error":
        bound_logger.warning("Rule check failed")
    else:
        bound_logger.debug("Rule check evaluated")
