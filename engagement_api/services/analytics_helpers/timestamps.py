# /engagement_api/services/analytics_helpers/timestamps.py

from datetime import datetime, timezone


def utcnow() -> datetime:
    """The current UTC time as a naive datetime, matching how rows are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Converts an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_iso_string(value: datetime) -> str:
    """
    Formats a timestamp as UTC ISO-8601 with millisecond precision and a
    trailing 'Z', e.g. 2025-03-01T08:30:00.000Z.
    """
    value = as_naive_utc(value)
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{value.microsecond // 1000:03d}Z"
