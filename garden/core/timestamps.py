from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from garden.core.errors import InvalidTimestamp

TIME_SEPARATOR = "T"


@dataclass(frozen=True)
class TimestampKey:
    """Result of normalizing a caller-supplied timestamp.

    ``key`` is either a full instant (``2015-09-01T16:00:00.000Z``) or a bare
    date (``2015-09-01``). ``instant`` is always a UTC datetime; date-only keys
    resolve to midnight.
    """

    key: str
    is_instant: bool
    instant: datetime


def is_time(value: str) -> bool:
    return TIME_SEPARATOR in value


def to_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_instant(dt: datetime) -> str:
    dt = to_utc(dt)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_instant(value: Any) -> datetime | None:
    """Parse an ISO-8601 date or date-time into a UTC datetime, or ``None``."""
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    try:
        if is_time(value):
            return to_utc(datetime.fromisoformat(value))
        day = date.fromisoformat(value)
    except (ValueError, OverflowError):
        return None
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def normalize_timestamp(value: Any) -> TimestampKey:
    instant = parse_instant(value)
    if instant is None:
        raise InvalidTimestamp()
    if is_time(value):
        return TimestampKey(key=format_instant(instant), is_instant=True, instant=instant)
    return TimestampKey(key=instant.date().isoformat(), is_instant=False, instant=instant)
