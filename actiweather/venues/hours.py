from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone

from .models import BusinessStatus, OpeningHours, OpeningPeriod

logger = logging.getLogger(__name__)

_CLOSED_STATUSES = (BusinessStatus.CLOSED_PERMANENTLY, BusinessStatus.CLOSED_TEMPORARILY)

_DAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

_HOURS_RE = re.compile(
    r"(\d{1,2}):(\d{2})\s*(AM|PM)\s*[–—-]\s*(\d{1,2}):(\d{2})\s*(AM|PM)",
    re.IGNORECASE,
)


def _local_time(at: datetime | None, timezone_offset: int) -> tuple[int, int]:
    """Return (weekday with 0 = Sunday, minute of day) at the venue."""
    now = at or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(timezone.utc) + timedelta(seconds=timezone_offset)
    return (local.weekday() + 1) % 7, local.hour * 60 + local.minute


def _within(current: int, open_minutes: int, close_minutes: int) -> bool:
    if open_minutes < close_minutes:
        return open_minutes <= current < close_minutes
    # overnight
    return current >= open_minutes or current < close_minutes


def open_from_periods(
    periods: tuple[OpeningPeriod, ...] | list[OpeningPeriod],
    day: int,
    minute: int,
) -> bool | None:
    if not periods:
        return None

    if len(periods) == 1 and periods[0].open is not None and periods[0].close is None:
        return True

    for period in periods:
        if period.open is None:
            continue

        open_day = period.open.day
        open_minutes = period.open.minutes

        if period.close is None:
            if open_day == day:
                return True
            continue

        close_day = period.close.day
        close_minutes = period.close.minutes

        if open_day == close_day:
            if open_day == day and open_minutes <= minute < close_minutes:
                return True
        else:
            if day == open_day and minute >= open_minutes:
                return True
            if day == close_day and minute < close_minutes:
                return True

    return False


def _to_24h(hour: int, meridiem: str) -> int:
    meridiem = meridiem.upper()
    if meridiem == "PM" and hour != 12:
        return hour + 12
    if meridiem == "AM" and hour == 12:
        return 0
    return hour


def _todays_description(descriptions: tuple[str, ...] | list[str], day: int) -> str | None:
    name = _DAY_NAMES[day]
    for line in descriptions:
        if line.strip().lower().startswith(name):
            return line
    # Provider lists run Monday first
    if len(descriptions) == 7:
        return descriptions[(day + 6) % 7]
    return None


def open_from_description(
    descriptions: tuple[str, ...] | list[str],
    day: int,
    minute: int,
) -> bool | None:
    """
    Parse lines such as ``"Monday: 9:00 AM – 5:00 PM"``.

    Returns None when today's line is missing or cannot be parsed.
    """
    if not descriptions:
        return None

    today = _todays_description(descriptions, day)
    if not today:
        return None

    lowered = today.lower()
    if "closed" in lowered:
        return False
    if "24 hours" in lowered:
        return True

    match = _HOURS_RE.search(today)
    if not match:
        return None

    open_h, open_m, open_mer, close_h, close_m, close_mer = match.groups()
    open_minutes = _to_24h(int(open_h), open_mer) * 60 + int(open_m)
    close_minutes = _to_24h(int(close_h), close_mer) * 60 + int(close_m)
    return _within(minute, open_minutes, close_minutes)


def resolve_open_status(
    hours: OpeningHours | None,
    business_status: BusinessStatus | None = None,
    timezone_offset: int | None = None,
    at: datetime | None = None,
) -> bool | None:
    """
    Decide whether a venue is open right now.

    Returns True / False, or None when there is not enough data to tell.
    Computed values always win over the provider's own open-now flag; a
    bare provider "open" is never trusted on its own.
    """
    if business_status in _CLOSED_STATUSES:
        return False

    hours = hours or OpeningHours()

    periods = hours.periods
    if len(periods) == 1 and periods[0].open is not None and periods[0].close is None:
        return True

    if timezone_offset is not None:
        day, minute = _local_time(at, timezone_offset)

        if periods:
            computed = open_from_periods(periods, day, minute)
            if computed is not None:
                if hours.open_now is not None and hours.open_now != computed:
                    logger.warning(
                        "Provider says %s but periods say %s",
                        "open" if hours.open_now else "closed",
                        "open" if computed else "closed",
                    )
                return computed

        if hours.weekday_descriptions:
            parsed = open_from_description(hours.weekday_descriptions, day, minute)
            if parsed is not None:
                return parsed

    if hours.open_now is False:
        return False

    return None
