# timeline/coords.py
"""
Date <-> pixel mapping for the schedule grid.

All functions are pure: the result depends only on (zoom, range) and, for
column markers, on the explicitly supplied ``now``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Iterable

import numpy as np

from timeline.dates import (
    add_months,
    days_in_month,
    floor_day,
    floor_hour,
    floor_month,
    floor_week,
    months_between,
    parse_date,
    to_datetime,
)
from timeline.zoom import ZoomLevel, zoom_spec

MIN_BAR_WIDTH = 20.0

# Tolerance when turning a fractional pixel position back into a whole day.
_EPS = 1e-9


@dataclass(frozen=True)
class TimeRange:
    """Half-open ``[start, end)`` window of the time axis."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise ValueError(f"range start {self.start} must be before end {self.end}")

    @property
    def span(self) -> timedelta:
        return self.end - self.start

    def contains(self, when: datetime) -> bool:
        return self.start <= when < self.end


@dataclass(frozen=True)
class TimelineColumn:
    label: str
    date: datetime
    is_today: bool
    is_current_month: bool


def column_starts(zoom: ZoomLevel | str, rng: TimeRange) -> list[datetime]:
    """Start instant of every column intersecting ``rng``, ascending."""
    spec = zoom_spec(zoom)
    starts = []
    cursor = spec.floor(rng.start)
    while cursor < rng.end:
        starts.append(cursor)
        cursor = spec.advance(cursor, 1)
    return starts


def columns(zoom: ZoomLevel | str, rng: TimeRange, now: datetime) -> list[TimelineColumn]:
    """
    Column descriptors for ``rng``.
    The column containing ``now`` is flagged ``is_today`` for hour/day/week;
    month zoom flags ``is_current_month`` instead.
    """
    spec = zoom_spec(zoom)
    marker = spec.floor(now)
    is_month = spec.level is ZoomLevel.MONTH
    return [
        TimelineColumn(
            label=spec.label(start),
            date=start,
            is_today=(not is_month) and start == marker,
            is_current_month=is_month and start == marker,
        )
        for start in column_starts(spec.level, rng)
    ]


def total_width(zoom: ZoomLevel | str, rng: TimeRange) -> float:
    spec = zoom_spec(zoom)
    return float(len(column_starts(spec.level, rng)) * spec.column_width)


def column_edges(zoom: ZoomLevel | str, rng: TimeRange) -> np.ndarray:
    """Pixel x of every column boundary; ``n_columns + 1`` values starting at 0."""
    spec = zoom_spec(zoom)
    n = len(column_starts(spec.level, rng))
    return np.arange(n + 1, dtype=float) * spec.column_width


# ----- date -> offset -----

# Offsets are measured from the first column's start, not from rng.start, so
# bars line up with the column grid even when the range is not unit-aligned.

def _hour_offset(d: date, rng: TimeRange, width: int) -> float:
    hours = (to_datetime(d) - floor_hour(rng.start)) // timedelta(hours=1)
    return float(hours * width)


def _day_offset(d: date, rng: TimeRange, width: int) -> float:
    return float((d - rng.start.date()).days * width)


def _week_offset(d: date, rng: TimeRange, width: int) -> float:
    return ((d - floor_week(rng.start).date()).days / 7) * width


def _month_offset(d: date, rng: TimeRange, width: int) -> float:
    # Every month is one full column; the position inside the target month is
    # proportional to its own length.
    whole = months_between(rng.start, d)
    days_into = d.day - 1
    return whole * width + (days_into / days_in_month(d.year, d.month)) * width


_TO_OFFSET: dict[ZoomLevel, Callable[[date, TimeRange, int], float]] = {
    ZoomLevel.HOUR: _hour_offset,
    ZoomLevel.DAY: _day_offset,
    ZoomLevel.WEEK: _week_offset,
    ZoomLevel.MONTH: _month_offset,
}


def date_to_offset(date_str: str | date, zoom: ZoomLevel | str, rng: TimeRange) -> float:
    """
    Left pixel offset of a calendar date relative to the first column of ``rng``.
    Dates outside the range are not clamped; earlier dates give negative offsets.
    """
    spec = zoom_spec(zoom)
    d = parse_date(date_str)
    return _TO_OFFSET[spec.level](d, rng, spec.column_width)


def date_offsets(dates: Iterable[str | date], zoom: ZoomLevel | str, rng: TimeRange) -> np.ndarray:
    """Vectorised ``date_to_offset`` for laying out many bars at once."""
    spec = zoom_spec(zoom)
    width = float(spec.column_width)
    days = np.array([parse_date(d) for d in dates], dtype="datetime64[D]")
    if days.size == 0:
        return np.zeros(0, dtype=float)

    if spec.level is ZoomLevel.HOUR:
        origin = np.datetime64(floor_hour(rng.start), "us")
        delta_us = (days.astype("datetime64[us]") - origin).astype(np.int64)
        return np.floor_divide(delta_us, 3_600_000_000).astype(float) * width

    start_day = np.datetime64(rng.start.date(), "D")
    if spec.level is ZoomLevel.DAY:
        return (days - start_day).astype(np.int64).astype(float) * width
    if spec.level is ZoomLevel.WEEK:
        week_start = np.datetime64(floor_week(rng.start).date(), "D")
        return ((days - week_start).astype(np.int64) / 7) * width

    months = days.astype("datetime64[M]")
    first = months.astype("datetime64[D]")
    first_column = start_day.astype("datetime64[M]")
    whole = (months - first_column).astype(np.int64)
    days_into = (days - first).astype(np.int64)
    month_len = ((months + 1).astype("datetime64[D]") - first).astype(np.int64)
    return whole * width + (days_into / month_len) * width


# ----- offset -> date -----

def _hour_date(offset: float, rng: TimeRange, width: int) -> datetime:
    return floor_hour(rng.start) + timedelta(hours=math.floor(offset / width))


def _day_date(offset: float, rng: TimeRange, width: int) -> datetime:
    return floor_day(rng.start) + timedelta(days=math.floor(offset / width))


def _week_date(offset: float, rng: TimeRange, width: int) -> datetime:
    # Resolved to whole days so positions inside a week survive the round trip.
    return floor_week(rng.start) + timedelta(days=math.floor(offset * 7 / width + _EPS))


def _month_date(offset: float, rng: TimeRange, width: int) -> datetime:
    edges = column_edges(ZoomLevel.MONTH, rng)
    idx = int(np.searchsorted(edges, offset, side="right")) - 1
    month_start = add_months(floor_month(rng.start), idx)
    n_days = days_in_month(month_start.year, month_start.month)
    fraction = (offset - edges[idx]) / width
    day_index = min(math.floor(fraction * n_days + _EPS), n_days - 1)
    return month_start + timedelta(days=day_index)


_TO_DATE: dict[ZoomLevel, Callable[[float, TimeRange, int], datetime]] = {
    ZoomLevel.HOUR: _hour_date,
    ZoomLevel.DAY: _day_date,
    ZoomLevel.WEEK: _week_date,
    ZoomLevel.MONTH: _month_date,
}


def offset_to_date(offset_px: float, zoom: ZoomLevel | str, rng: TimeRange) -> datetime:
    """
    Inverse of ``date_to_offset``, used for click-to-create.
    Offsets past the total width clamp to ``rng.end``; negative offsets clamp to ``rng.start``.
    """
    spec = zoom_spec(zoom)
    offset = float(offset_px)
    if not math.isfinite(offset):
        raise ValueError(f"offset must be finite, got {offset_px!r}")
    if offset >= total_width(spec.level, rng):
        return rng.end
    if offset < 0:
        return rng.start
    return _TO_DATE[spec.level](offset, rng, spec.column_width)


def bar_width(
    start_date: str | date,
    end_date: str | date,
    zoom: ZoomLevel | str,
    rng: TimeRange,
    *,
    min_width: float = MIN_BAR_WIDTH,
) -> float:
    """Pixel width of a bar, floored at ``min_width`` so short items stay clickable."""
    start = date_to_offset(start_date, zoom, rng)
    end = date_to_offset(end_date, zoom, rng)
    return float(widths_from_offsets(start, end, min_width=min_width))


def widths_from_offsets(
    starts: float | np.ndarray,
    ends: float | np.ndarray,
    *,
    min_width: float = MIN_BAR_WIDTH,
) -> float | np.ndarray:
    """Bar widths for precomputed offsets (scalar or array), floored at ``min_width``."""
    return np.maximum(np.asarray(ends, dtype=float) - np.asarray(starts, dtype=float), float(min_width))


def today_offset(zoom: ZoomLevel | str, rng: TimeRange, today: date | datetime) -> float:
    if isinstance(today, datetime):
        today = today.date()
    return date_to_offset(today, zoom, rng)
