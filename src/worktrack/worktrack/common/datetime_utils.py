from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as dateutil_parser

from ..core.constants import CYCLE_FORMAT, DATE_KEY_FORMAT
from ..core.enums import DayLock

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, CYCLE_FORMAT).date()


def get_timezone(name: Optional[str]) -> tzinfo:
    """Resolve an IANA timezone name, UTC when empty or unknown."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", name)
        return timezone.utc


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an API timestamp (ISO 8601 string or datetime).

    Returns None for missing or unparseable values instead of raising.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    try:
        return dateutil_parser.isoparse(str(value).strip())
    except (ValueError, OverflowError):
        return None


def to_zone(value: datetime, tz: tzinfo) -> datetime:
    """Express an instant in ``tz``. Naive values are taken as already local to ``tz``."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def days_between(start: date, end: date) -> list[date]:
    """Every calendar day from start to end, both inclusive."""
    if end < start:
        return []
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def system_clock(tz: tzinfo) -> Clock:
    """Clock returning the current time in ``tz``.

    Note: services take a clock instead of calling datetime.now() so tests can pin "today".
    """

    def _now() -> datetime:
        return datetime.now(tz)

    return _now


def day_lock(day: date, today: date) -> DayLock:
    """Past days are view only, today is open, future days are not open yet."""
    if day < today:
        return DayLock.LOCKED
    if day == today:
        return DayLock.OPEN
    return DayLock.FUTURE
