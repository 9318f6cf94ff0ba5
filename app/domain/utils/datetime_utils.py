"""
Datetime utilities for consistent timezone handling.

Report and session timestamps are always timezone-aware UTC.
"""

import datetime

# Standard timezone for all application operations
UTC = datetime.timezone.utc


def now_utc() -> datetime.datetime:
    """
    Get current datetime in UTC.

    Returns:
        datetime.datetime: Current time in UTC timezone
    """
    return datetime.datetime.now(UTC)


def to_utc(dt: datetime.datetime) -> datetime.datetime:
    """
    Convert a datetime to UTC timezone.

    Args:
        dt: Datetime to convert

    Returns:
        datetime.datetime: Datetime in UTC timezone
    """
    if dt.tzinfo is None:
        # Assume naive datetimes are already UTC
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)
