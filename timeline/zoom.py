"""Zoom levels and the per-level column geometry table."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from timeline.dates import add_months, floor_day, floor_hour, floor_month, floor_week


class ZoomLevel(str, Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class ZoomSpec:
    """
    Geometry of one zoom level.
    - floor: start of the column containing a datetime.
    - advance: move a datetime by n columns.
    - anchor: alignment of the default window around "now".
    - anchor_span: columns covered by one anchor unit (24 for hour zoom, else 1).
    - padding / extension: column counts for the default window and for each extension step.
    """

    level: ZoomLevel
    column_width: int
    floor: Callable[[datetime], datetime]
    advance: Callable[[datetime, int], datetime]
    anchor: Callable[[datetime], datetime]
    anchor_span: int
    padding: int
    extension: int
    label: Callable[[datetime], str]


def _hour_label(dt: datetime) -> str:
    h12 = dt.hour % 12 or 12
    return f"{h12}{'AM' if dt.hour < 12 else 'PM'}"


def _day_label(dt: datetime) -> str:
    return f"{dt.day} {dt:%b}"


def _week_label(dt: datetime) -> str:
    return f"W{dt.isocalendar()[1]}, {dt:%b} {dt.day}"


def _month_label(dt: datetime) -> str:
    return f"{dt:%b %Y}"


ZOOM_SPECS: dict[ZoomLevel, ZoomSpec] = {
    ZoomLevel.HOUR: ZoomSpec(
        level=ZoomLevel.HOUR,
        column_width=60,
        floor=floor_hour,
        advance=lambda dt, n: dt + timedelta(hours=n),
        anchor=floor_day,
        anchor_span=24,
        padding=14 * 24,
        extension=14 * 24,
        label=_hour_label,
    ),
    ZoomLevel.DAY: ZoomSpec(
        level=ZoomLevel.DAY,
        column_width=44,
        floor=floor_day,
        advance=lambda dt, n: dt + timedelta(days=n),
        anchor=floor_day,
        anchor_span=1,
        padding=90,
        extension=60,
        label=_day_label,
    ),
    ZoomLevel.WEEK: ZoomSpec(
        level=ZoomLevel.WEEK,
        column_width=100,
        floor=floor_week,
        advance=lambda dt, n: dt + timedelta(weeks=n),
        anchor=floor_week,
        anchor_span=1,
        padding=52,
        extension=26,
        label=_week_label,
    ),
    ZoomLevel.MONTH: ZoomSpec(
        level=ZoomLevel.MONTH,
        column_width=130,
        floor=floor_month,
        advance=add_months,
        anchor=floor_month,
        anchor_span=1,
        padding=48,
        extension=24,
        label=_month_label,
    ),
}


def coerce_zoom(value: ZoomLevel | str) -> ZoomLevel:
    if isinstance(value, ZoomLevel):
        return value
    try:
        return ZoomLevel(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"unknown zoom level {value!r}") from None


def zoom_spec(zoom: ZoomLevel | str) -> ZoomSpec:
    return ZOOM_SPECS[coerce_zoom(zoom)]


def column_width(zoom: ZoomLevel | str) -> int:
    return zoom_spec(zoom).column_width
