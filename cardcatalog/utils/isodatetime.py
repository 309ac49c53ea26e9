"""ISO 8601 datetime and duration helpers.

All conversions between datetime objects, ISO 8601 strings, Unix
timestamps and configured durations go through this module so the
representation stays consistent across the store, tokens and responses.
"""

import re
from datetime import UTC, datetime, timedelta

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    """Convert ISO 8601 UTC timestamp string to datetime."""
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(datetime.now(UTC))


def now_unix() -> int:
    """Get current UTC time as whole seconds since the epoch."""
    return int(datetime.now(UTC).timestamp())


def parse_duration(value: str) -> timedelta:
    """
    Parse a short duration string into a timedelta.

    Accepted forms are a positive integer followed by an optional unit:
    "s" (seconds), "m" (minutes), "h" (hours) or "d" (days). A bare
    number is read as seconds.

    Args:
        value: Duration string such as "24h", "30m", "7d" or "3600"

    Returns:
        The equivalent timedelta

    Raises:
        ValueError: If the string is not a positive duration
    """
    match = _DURATION_PATTERN.match(value or "")
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")

    amount = int(match.group(1))
    if amount <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")

    return timedelta(**{_DURATION_UNITS[match.group(2)]: amount})
