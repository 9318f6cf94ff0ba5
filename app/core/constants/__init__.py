"""
Core Constants Package

This package contains constants used throughout the application core.
"""

from app.core.constants.logging import (
    DETAILED_LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LogLevel,
)

__all__ = [
    "DETAILED_LOG_FORMAT",
    "LOG_DATE_FORMAT",
    "LOG_FORMAT",
    "LogLevel",
]
