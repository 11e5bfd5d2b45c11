# File: src/lessonbook/utils/datetime.py
"""UTC datetime helpers. Timestamps are stored as naive UTC."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get current UTC datetime as NAIVE for database storage."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC (aware values are converted first)."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def hours_between(start: datetime, end: datetime) -> float:
    """Signed number of hours from start to end."""
    return (end - start).total_seconds() / 3600
