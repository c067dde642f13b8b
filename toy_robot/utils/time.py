"""
Time handling utilities for snapshot and history timestamps.

Every timestamp written by the service is timezone-aware UTC so that
ISO8601 strings sort lexicographically in the same order as time.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current wall-clock time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(ts: Optional[datetime] = None) -> str:
    """
    Format a timestamp for storage and API responses.

    Args:
        ts: Timestamp to format, defaults to now

    Returns:
        ISO8601 formatted string in UTC
    """
    if ts is None:
        ts = utc_now()
    return ensure_utc(ts).isoformat()


def parse_timestamp(value: str) -> datetime:
    """
    Parse a stored ISO8601 timestamp.

    Args:
        value: ISO8601 string, with or without offset

    Returns:
        Timezone-aware UTC datetime

    Raises:
        ValueError: If the string is not a valid ISO8601 timestamp
    """
    # fromisoformat only accepts the "Z" suffix from Python 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(value))


def ensure_utc(ts: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)
