"""Timezone helpers. Every timestamp the services compare is aware UTC."""

from datetime import date, datetime, time, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive values coming back from the store are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored or submitted date value into aware UTC, or None.

    Accepts ``datetime``/``date`` objects and ISO-8601 strings (a trailing ``Z``
    is allowed, a bare ``YYYY-MM-DD`` means UTC midnight).
    """
    if isinstance(value, datetime):
        try:
            return as_utc(value)
        except OverflowError:
            return None
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        return None


def utc_day_bounds(value: datetime) -> tuple[datetime, datetime]:
    """UTC midnight and the last millisecond of the same UTC day."""
    start = as_utc(value).replace(hour=0, minute=0, second=0, microsecond=0)
    end = start.replace(hour=23, minute=59, second=59, microsecond=999000)
    return start, end


def to_naive_utc(value: datetime) -> datetime:
    return as_utc(value).replace(tzinfo=None)
