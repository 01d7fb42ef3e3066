"""Timestamp helpers for record bookkeeping and display."""

from datetime import datetime
from typing import Union


def now() -> datetime:
    """Current local time."""
    return datetime.now()


def now_exact() -> str:
    """Current local time as an ISO 8601 string with microseconds."""
    return datetime.now().isoformat()


def parse_timestamp(value: Union[str, datetime, None]) -> datetime:
    """
    Coerce a stored timestamp into a datetime.

    Snapshot files carry ISO 8601 strings; in-memory records carry datetimes.
    Missing values resolve to the current time.

    Raises:
        ValueError: If a string is not valid ISO 8601
    """
    if value is None:
        return now()
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def format_timestamp(value: Union[str, datetime], relative: bool = False) -> str:
    """
    Format a timestamp for reports.

    Args:
        value: ISO 8601 string or datetime
        relative: If True, show relative time (e.g., "2h ago")
                  If False, show a short date (e.g., "Jan 14, 2026")

    Returns:
        Human-readable timestamp, or the original value if it cannot be parsed
    """
    try:
        dt = parse_timestamp(value)
    except (ValueError, TypeError):
        return str(value)

    if relative:
        return _format_relative_time(dt)
    return dt.strftime("%b %d, %Y")


def _format_relative_time(dt: datetime) -> str:
    """
    Format datetime as relative time in compact format.

    - Seconds: "30s ago"
    - Minutes: "15m ago"
    - Hours: "2h ago"
    - Days: "5d ago"
    """
    diff = datetime.now() - dt

    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
