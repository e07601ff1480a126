"""Structured logging for tagstream."""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger, Processor

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog logger bound to the current configuration
    """
    return structlog.get_logger(name)


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure process-wide logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ('json' or 'console')

    Raises:
        ValueError: If log_level or log_format is not recognized
    """
    level = log_level.upper()
    if level not in _LEVELS:
        raise ValueError(f"Invalid log_level '{log_level}'. Must be one of: {', '.join(sorted(_LEVELS))}")
    if log_format not in {"json", "console"}:
        raise ValueError(f"Invalid log_format '{log_format}'. Must be 'json' or 'console'")

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
