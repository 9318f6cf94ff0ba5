"""
Logging Constants Module

This module defines constants and enumerations related to logging
to ensure consistent log levels and formats across the application.
"""

import logging
from enum import Enum


class LogLevel(str, Enum):
    """
    Standard log levels for application logging.

    These levels align with standard Python logging levels
    but are provided as an enum for type safety and consistency.
    """

    CRITICAL = "CRITICAL"  # Critical errors requiring immediate attention
    ERROR = "ERROR"  # Error conditions
    WARNING = "WARNING"  # Warning conditions
    INFO = "INFO"  # Informational messages
    DEBUG = "DEBUG"  # Debug-level messages

    @property
    def numeric(self) -> int:
        """The matching stdlib ``logging`` level."""
        return logging.getLevelName(self.value)


LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"
DETAILED_LOG_FORMAT = (
    "[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] [%(request_id)s] - %(message)s"
)
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
