"""Timestamp parsing and formatting utilities"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(text: str) -> datetime:
    """
    Parse an RFC 3339 / ISO-8601 timestamp.

    A trailing "Z" is accepted; values without an offset are read as UTC.

    Raises:
        ValueError: If the text is not a valid timestamp
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Empty timestamp")
    return ensure_utc(datetime.fromisoformat(text.strip()))


def format_timestamp(value: datetime) -> str:
    """Format a datetime so that parse_timestamp returns an equal value"""
    return ensure_utc(value).isoformat()
