"""Date and time formatting for the Indonesian (id-ID) locale."""

import math
from datetime import datetime, timezone
from typing import Optional, Union

DateLike = Union[str, datetime]

SHORT_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
)


def _to_datetime(value: DateLike) -> datetime:
    """Accept a datetime or an ISO-8601 string (``Z`` suffix allowed)."""
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _to_local(value: DateLike) -> datetime:
    dt = _to_datetime(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt


def format_date(value: DateLike) -> str:
    """Format as ``19 Okt 2026``."""
    dt = _to_local(value)
    return f"{dt.day} {SHORT_MONTHS[dt.month - 1]} {dt.year}"


def format_time(value: DateLike) -> str:
    """Format as ``09.05`` (24-hour clock, period separator)."""
    dt = _to_local(value)
    return f"{dt.hour:02d}.{dt.minute:02d}"


def format_relative_time(value: DateLike, now: Optional[datetime] = None) -> str:
    """Describe how long ago *value* was.

    Elapsed time is floored to whole seconds, minutes, hours and days.
    Anything a week or older falls back to :func:`format_date`. When only
    one of *value* and *now* is timezone-aware, the naive one is taken as
    local time.
    """
    then = _to_datetime(value)
    if now is None:
        now = datetime.now(timezone.utc) if then.tzinfo is not None else datetime.now()
    elif (now.tzinfo is None) != (then.tzinfo is None):
        now = now.astimezone()
        then = then.astimezone()

    seconds = math.floor((now - then).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 60:
        return "Baru saja"
    if minutes < 60:
        return f"{minutes} menit lalu"
    if hours < 24:
        return f"{hours} jam lalu"
    if days < 7:
        return f"{days} hari lalu"
    return format_date(value)
