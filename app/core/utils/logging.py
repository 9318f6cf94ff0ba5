"""
Logging Utility Module.

This module provides logging utilities for the application. Every handler
created here carries a filter that redacts personal identifiers, since
free-text mood descriptions and transcripts can end up in log messages.
"""

import logging
import re
import sys
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime
from functools import wraps
from re import Pattern
from typing import Any, TypeVar

from app.core.config.settings import get_settings
from app.core.constants import LOG_DATE_FORMAT, LOG_FORMAT, LogLevel

# Type variables for function signatures
F = TypeVar("F", bound=Callable[..., Any])

# id of the HTTP request being served, "-" outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

# (kind, pattern) pairs applied in order
REDACTION_PATTERNS: list[tuple[str, Pattern[str]]] = [
    ("EMAIL", re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")),
    ("SSN", re.compile(r"\b\d{3}[-\s]\d{2}[-\s]\d{4}\b")),
    ("PHONE", re.compile(r"(?<!\w)(?:\+?\d{1,2}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b")),
]


def redact(text: str) -> str:
    """Replace personal identifiers in ``text`` with ``[REDACTED:<kind>]``."""
    for name, pattern in REDACTION_PATTERNS:
        text = pattern.sub(f"[REDACTED:{name}]", text)
    return text


class PHISanitizingFilter(logging.Filter):
    """Custom logging filter to sanitize PHI from log records."""

    def __init__(self, name: str = "PHISanitizer"):
        super().__init__(name)

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the log record message in place."""
        # Ensure message is formatted correctly before sanitization
        original_message = record.getMessage()
        sanitized_message = redact(original_message)

        if sanitized_message != original_message:
            # Need to update both msg and message for compatibility with different formatters
            record.msg = sanitized_message
            record.message = sanitized_message
            record.args = ()  # Clear args as they are now baked into the formatted msg

        return True  # Always process the record after potential sanitization


class RequestContextFilter(logging.Filter):
    """Adds the current request id to every record as ``request_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance for the specified name.

    Loggers configured through ``setup_logging`` are returned untouched;
    otherwise a console handler with the sanitizing filter is attached.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if it hasn't been done yet
    if not logger.handlers and not logging.getLogger("app").handlers:
        log_level = LogLevel(get_settings().LOG_LEVEL).numeric
        logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        console_handler.addFilter(PHISanitizingFilter())
        console_handler.addFilter(RequestContextFilter())
        logger.addHandler(console_handler)

        # Prevent propagation to root logger to avoid duplicate logs
        logger.propagate = False

    return logger


def log_execution_time(func=None, *, logger=None, level=LogLevel.DEBUG):
    """
    Decorator to log the execution time of a function.
    Can be used with or without arguments:

    @log_execution_time
    def my_func(): pass

    OR

    @log_execution_time(logger=my_logger, level=LogLevel.INFO)
    def my_func(): pass

    Args:
        func: Function to decorate
        logger: Logger to use, if None a new logger is created using function's module name
        level: Log level to use

    Returns:
        Decorated function or decorator function depending on usage
    """

    def actual_decorator(fn):
        log = logger or logging.getLogger(fn.__module__)
        log_level_int = level.numeric if isinstance(level, LogLevel) else int(level)

        @wraps(fn)
        def wrapper(*args, **kwargs):
            start_time = datetime.now()
            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                duration_ms = (datetime.now() - start_time).total_seconds() * 1000
                log.error(f"Exception in '{fn.__name__}' after {duration_ms:.2f} ms: {e!s}")
                raise

            duration_ms = (datetime.now() - start_time).total_seconds() * 1000
            log.log(log_level_int, f"Function '{fn.__name__}' executed in {duration_ms:.2f} ms")
            return result

        return wrapper

    # Handle being called directly as @log_execution_time or with args
    if func is not None:
        return actual_decorator(func)
    return actual_decorator
