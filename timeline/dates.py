# timeline/dates.py
from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateError(ValueError):
    """Raised when a value is not a canonical ``YYYY-MM-DD`` date."""


def parse_date(value: str | date) -> date:
    """
    Parse a canonical ``YYYY-MM-DD`` string.
    - ``date`` objects pass through untouched.
    - ``datetime`` objects are rejected; callers normalise at the boundary.
    - Anything else that is not zero-padded ``YYYY-MM-DD`` raises InvalidDateError.
    """
    if isinstance(value, datetime):
        raise InvalidDateError(f"expected a calendar date, got datetime {value!r}")
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidDateError(f"expected YYYY-MM-DD, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError(f"invalid calendar date {value!r}: {exc}") from exc


def format_date(value: date | datetime) -> str:
    """Canonical ``YYYY-MM-DD`` form; time of day is dropped."""
    if isinstance(value, datetime):
        value = value.date()
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def to_datetime(value: str | date) -> datetime:
    """Midnight of the given calendar date."""
    d = parse_date(value)
    return datetime(d.year, d.month, d.day)


# ----- calendar helpers (timezone-naive) -----

def floor_hour(dt: datetime) -> datetime:
    return dt.replace(minute=0, second=0, microsecond=0)


def floor_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def floor_week(dt: datetime) -> datetime:
    """Monday 00:00 of the week containing dt."""
    day = floor_day(dt)
    return day - timedelta(days=day.weekday())


def floor_month(dt: datetime) -> datetime:
    return floor_day(dt).replace(day=1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(dt: datetime, months: int) -> datetime:
    """Shift by whole calendar months, clamping the day to the target month's length."""
    index = dt.year * 12 + (dt.month - 1) + months
    year, month0 = divmod(index, 12)
    day = min(dt.day, days_in_month(year, month0 + 1))
    return dt.replace(year=year, month=month0 + 1, day=day)


def months_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar months from start's month to end's month (may be negative)."""
    return (end.year - start.year) * 12 + (end.month - start.month)
