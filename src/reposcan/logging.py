"""Structured logging configuration for reposcan."""

import logging
from typing import Any, Optional

import structlog
from structlog.contextvars import bind_contextvars, merge_contextvars, reset_contextvars

from .config.settings import get_settings


def configure_logging(log_level: Optional[str] = None) -> None:
    """Configure structured logging with JSON output and bound context.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the ``log_level`` setting.
    """
    if log_level is None:
        log_level = get_settings().log_level

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level)

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return structlog.get_logger(name)


class LogContext:
    """Context manager binding key/value pairs to every log line in a block."""

    def __init__(self, **values: Any):
        self.values = values
        self.tokens = None

    def __enter__(self):
        self.tokens = bind_contextvars(**self.values)
        return self.values

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.tokens:
            reset_contextvars(**self.tokens)
