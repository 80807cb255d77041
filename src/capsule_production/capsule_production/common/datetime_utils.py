from __future__ import annotations

from datetime import date, datetime, time, timezone
from functools import lru_cache
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..core.constants import BUSINESS_TIMEZONE

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DateLike = Union[date, datetime, str, None]


@lru_cache(maxsize=None)
def business_tz(name: str = BUSINESS_TIMEZONE) -> ZoneInfo:
    """Fixed business time zone (Hong Kong, UTC+8, no daylight saving)."""
    return ZoneInfo(name)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock_time(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value, "%H:%M").time()


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def now_local() -> datetime:
    """Current time in the business time zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(business_tz())


def to_business_datetime(value: DateLike) -> Optional[datetime]:
    """Interpret a stored date/timestamp as an aware business-zone datetime.

    Naive datetimes and plain dates are taken as business-local. ISO strings
    are parsed; anything unparsable or out of range yields None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(raw)
        except (ValueError, OverflowError):
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=business_tz())
        # Offsets near year 1 or 9999 can shift the instant out of range.
        try:
            return value.astimezone(business_tz())
        except (ValueError, OverflowError):
            return None
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=business_tz())
    return None


def to_business_date(value: DateLike) -> Optional[date]:
    dt = to_business_datetime(value)
    return dt.date() if dt else None


def format_work_date(value: date) -> str:
    """Display form used by list screens, e.g. ``2025/01/06 (Mon)``."""
    return value.strftime("%Y/%m/%d (%a)")
