"""Time utilities shared by models and services."""

from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def to_millis(moment: datetime) -> int:
    """Return ``moment`` as milliseconds since the Unix epoch."""
    return int(moment.timestamp() * 1000)


def from_millis(millis: int) -> datetime:
    """Return a UTC datetime for an epoch-milliseconds value."""
    return datetime.fromtimestamp(millis / 1000, tz=UTC)


def within_window(timestamp_ms: int, now: datetime, window: timedelta) -> bool:
    """Return True if ``timestamp_ms`` lies within ``window`` of ``now`` in either direction."""
    return abs(to_millis(now) - int(timestamp_ms)) <= window.total_seconds() * 1000
