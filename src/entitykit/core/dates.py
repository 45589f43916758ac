"""
RFC3339 timestamp helpers.

Timestamps travel as RFC3339 strings (2024-05-01T12:30:00+02:00). Parsing also
accepts fractional seconds (2024-05-01T12:30:00.250000+02:00); formatting keeps
fractional seconds only when the value has them.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from ..config import get_settings

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
RFC3339_FRACTIONAL_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def now() -> datetime:
    """Get the current time as an aware datetime in the configured default zone."""
    if get_settings().default_timezone == "UTC":
        return datetime.now(timezone.utc)
    return datetime.now().astimezone()


def string_to_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an RFC3339 string.

    Args:
        value: String to parse

    Returns:
        The parsed aware datetime, or None if the value is empty, not a string
        or not RFC3339
    """
    if not value or not isinstance(value, str):
        return None
    for fmt in (RFC3339_FORMAT, RFC3339_FRACTIONAL_FORMAT):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def date_to_string(value: Any) -> Optional[str]:
    """
    Format a datetime as RFC3339.

    Naive datetimes are taken to be in local time.

    Args:
        value: Datetime to format

    Returns:
        The formatted string, or None if value is not a datetime
    """
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        value = value.astimezone()
    timespec = "microseconds" if value.microsecond else "seconds"
    return value.isoformat(timespec=timespec)
