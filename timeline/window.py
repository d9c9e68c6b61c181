"""Visible-window management: default ranges, edge extension and scroll anchoring."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from timeline.coords import TimeRange, TimelineColumn, columns, today_offset, total_width
from timeline.zoom import ZoomLevel, coerce_zoom, zoom_spec

LOG = logging.getLogger(__name__)

EDGE_THRESHOLD_PX = 300.0


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"


def default_range(zoom: ZoomLevel | str, now: datetime) -> TimeRange:
    """Window padded symmetrically around ``now``; always satisfies start < now < end."""
    spec = zoom_spec(zoom)
    anchor = spec.anchor(now)
    return TimeRange(
        start=spec.advance(anchor, -spec.padding),
        end=spec.advance(anchor, spec.padding + spec.anchor_span),
    )


def extend_range(zoom: ZoomLevel | str, rng: TimeRange, direction: Direction | str) -> TimeRange:
    """New range with only the requested boundary pushed outwards by one extension step."""
    spec = zoom_spec(zoom)
    if Direction(direction) is Direction.LEFT:
        return TimeRange(start=spec.advance(rng.start, -spec.extension), end=rng.end)
    return TimeRange(start=rng.start, end=spec.advance(rng.end, spec.extension))


def edge_direction(
    scroll_left: float,
    viewport_width: float,
    total: float,
    *,
    threshold: float = EDGE_THRESHOLD_PX,
) -> Direction | None:
    if scroll_left < threshold:
        return Direction.LEFT
    scroll_right = total - scroll_left - viewport_width
    if scroll_right < threshold:
        return Direction.RIGHT
    return None


@dataclass(frozen=True)
class TimelineLayout:
    """Everything the renderer reads for one (zoom, range); replaced as a whole."""

    zoom: ZoomLevel
    range: TimeRange
    columns: tuple[TimelineColumn, ...]
    column_width: int
    total_width: float
    today_offset: float


def build_layout(zoom: ZoomLevel | str, rng: TimeRange, now: datetime) -> TimelineLayout:
    spec = zoom_spec(zoom)
    return TimelineLayout(
        zoom=spec.level,
        range=rng,
        columns=tuple(columns(spec.level, rng, now)),
        column_width=spec.column_width,
        total_width=total_width(spec.level, rng),
        today_offset=today_offset(spec.level, rng, now),
    )


@dataclass(frozen=True)
class Extension:
    direction: Direction
    previous: TimelineLayout
    layout: TimelineLayout
    added_width: float
    scroll_left: float  # scroll position the caller must apply to keep the view still


class RangeWindow:
    """
    Owns the visible range of one timeline.

    Extensions follow an ``idle -> extending -> idle`` cycle: ``extend`` (or
    ``on_scroll``) moves to ``extending`` and the caller returns to ``idle``
    with ``settle`` once its compensating scroll has been applied. Scroll events
    seen while extending are ignored.
    """

    def __init__(
        self,
        zoom: ZoomLevel | str = ZoomLevel.MONTH,
        *,
        clock: Callable[[], datetime] = datetime.now,
        edge_threshold: float = EDGE_THRESHOLD_PX,
    ) -> None:
        self._clock = clock
        self._edge_threshold = float(edge_threshold)
        self._extending = False
        self._subscribers: list[Callable[[TimelineLayout], None]] = []
        zoom = coerce_zoom(zoom)
        now = clock()
        self._layout = build_layout(zoom, default_range(zoom, now), now)

    @property
    def layout(self) -> TimelineLayout:
        return self._layout

    @property
    def zoom(self) -> ZoomLevel:
        return self._layout.zoom

    @property
    def is_extending(self) -> bool:
        return self._extending

    @property
    def edge_threshold(self) -> float:
        return self._edge_threshold

    def subscribe(self, callback: Callable[[TimelineLayout], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def set_zoom(self, zoom: ZoomLevel | str, now: datetime | None = None) -> TimelineLayout:
        zoom = coerce_zoom(zoom)
        now = now or self._clock()
        self._publish(build_layout(zoom, default_range(zoom, now), now))
        return self._layout

    def on_scroll(self, scroll_left: float, viewport_width: float) -> Extension | None:
        if self._extending:
            LOG.debug("Scroll at %.1f ignored; extension in progress", scroll_left)
            return None
        direction = edge_direction(
            scroll_left,
            viewport_width,
            self._layout.total_width,
            threshold=self._edge_threshold,
        )
        if direction is None:
            return None
        return self.extend(direction, scroll_left)

    def extend(self, direction: Direction | str, scroll_left: float = 0.0) -> Extension | None:
        if self._extending:
            return None
        direction = Direction(direction)
        self._extending = True
        try:
            previous = self._layout
            rng = extend_range(previous.zoom, previous.range, direction)
            layout = build_layout(previous.zoom, rng, self._clock())
            added = layout.total_width - previous.total_width
            new_scroll = scroll_left + added if direction is Direction.LEFT else scroll_left
            LOG.debug(
                "Extended %s timeline %s by %.0fpx (%s -> %s)",
                previous.zoom.value,
                direction.value,
                added,
                rng.start,
                rng.end,
            )
            self._publish(layout)
        except Exception:
            # A failed cycle never reaches settle(); reopen the guard here.
            self._extending = False
            raise
        return Extension(
            direction=direction,
            previous=previous,
            layout=layout,
            added_width=added,
            scroll_left=new_scroll,
        )

    def settle(self) -> None:
        self._extending = False

    def today_scroll_target(self, viewport_width: float) -> float:
        """Scroll position that centres the "now" marker in the viewport."""
        return max(0.0, self._layout.today_offset - viewport_width / 2)

    def _publish(self, layout: TimelineLayout) -> None:
        self._layout = layout
        for callback in list(self._subscribers):
            callback(layout)
