"""
Date and time helpers for appointment scheduling.

Appointments store the wall-clock date ("YYYY-MM-DD") and a 12-hour time
("hh:mm AM|PM") as entered at the hospital. These helpers convert them to
24-hour form, to timezone-aware instants and to the UTC ISO string the
conferencing provider expects.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

TIME_12H_PATTERN = re.compile(r"^(0?[1-9]|1[0-2]):([0-5]\d)\s?(AM|PM)$", re.IGNORECASE)
DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

TzLike = Union[str, ZoneInfo, timezone, None]


def _resolve_tz(tz: TzLike):
    if tz is None:
        return timezone.utc
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def convert_to_24_hour(time12h: str) -> str:
    """
    Convert "hh:mm AM|PM" to "HH:MM:00".

    12 AM becomes 00, 12 PM stays 12, other PM hours get +12.

    Raises:
        ValueError: If the value is not a 12-hour clock time
    """
    match = TIME_12H_PATTERN.match(time12h.strip()) if time12h else None
    if not match:
        raise ValueError(f"Invalid 12-hour time: {time12h!r}")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = match.group(3).upper()

    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    return f"{hours:02d}:{minutes:02d}:00"


def is_calendar_date_valid(year: int, month: int, day: int) -> bool:
    """Month-length and leap-year aware check of a Gregorian calendar date"""
    if month < 1 or month > 12:
        return False
    if day < 1 or day > 31:
        return False
    if month in (4, 6, 9, 11):
        return day != 31
    if month == 2:
        if (year % 4 == 0 and year % 100 != 0) or year % 400 == 0:
            return day <= 29
        return day <= 28
    return True


def parse_date_string(value: str) -> date:
    """
    Parse a "YYYY-MM-DD" string into a date.

    Raises:
        ValueError: If the format is wrong or the day does not exist
    """
    match = DATE_PATTERN.match(value.strip()) if value else None
    if not match:
        raise ValueError(f"Invalid date format: {value!r}, expected YYYY-MM-DD")

    year, month, day = (int(part) for part in match.groups())
    if not is_calendar_date_valid(year, month, day):
        raise ValueError(f"Invalid calendar date: {value!r}")
    return date(year, month, day)


def to_local_datetime(date_str: str, time12h: str, tz: TzLike = None) -> datetime:
    """Combine a stored date and 12-hour time into an aware datetime in ``tz``"""
    hours, minutes, seconds = (int(part) for part in convert_to_24_hour(time12h).split(":"))
    return datetime.combine(
        parse_date_string(date_str), time(hours, minutes, seconds), tzinfo=_resolve_tz(tz)
    )


def is_future_date_time(
    date_str: str,
    time12h: str,
    now: Optional[datetime] = None,
    tz: TzLike = None,
) -> bool:
    """True iff the scheduled moment is strictly after ``now`` (defaults to the current time)"""
    scheduled = to_local_datetime(date_str, time12h, tz)
    current = now if now is not None else datetime.now(timezone.utc)
    return scheduled > current


def to_utc_iso(date_str: str, time24h: str, tz: TzLike = None) -> str:
    """
    Convert a local date and 24-hour "HH:MM[:SS]" time to an ISO-8601 UTC
    instant with millisecond precision, e.g. 2025-03-01T04:30:00.000Z
    """
    parts = [int(part) for part in time24h.split(":")]
    if len(parts) == 2:
        parts.append(0)
    local = datetime.combine(parse_date_string(date_str), time(*parts), tzinfo=_resolve_tz(tz))
    scheduled = local.astimezone(timezone.utc)
    return scheduled.strftime("%Y-%m-%dT%H:%M:%S.") + f"{scheduled.microsecond // 1000:03d}Z"
