from datetime import datetime, timedelta

import pytest

from timeline.coords import TimeRange, date_to_offset
from timeline.window import (
    Direction,
    RangeWindow,
    build_layout,
    default_range,
    edge_direction,
    extend_range,
)
from timeline.zoom import ZoomLevel


NOW = datetime(2026, 3, 15, 10, 30)


def _clock():
    return NOW


@pytest.mark.parametrize("zoom", list(ZoomLevel))
def test_default_range_contains_now(zoom):
    rng = default_range(zoom, NOW)
    assert rng.start < NOW < rng.end


def test_default_range_magnitudes():
    assert default_range(ZoomLevel.HOUR, NOW) == TimeRange(datetime(2026, 3, 1), datetime(2026, 3, 30))
    assert default_range(ZoomLevel.DAY, NOW) == TimeRange(
        datetime(2026, 3, 15) - timedelta(days=90), datetime(2026, 3, 16) + timedelta(days=90)
    )
    assert default_range(ZoomLevel.WEEK, NOW) == TimeRange(
        datetime(2026, 3, 9) - timedelta(weeks=52), datetime(2026, 3, 16) + timedelta(weeks=52)
    )
    assert default_range(ZoomLevel.MONTH, NOW) == TimeRange(datetime(2022, 3, 1), datetime(2030, 4, 1))


@pytest.mark.parametrize("zoom", list(ZoomLevel))
def test_extend_moves_only_requested_boundary(zoom):
    rng = default_range(zoom, NOW)
    left = extend_range(zoom, rng, "left")
    right = extend_range(zoom, rng, Direction.RIGHT)
    assert left.end == rng.end
    assert left.start < rng.start
    assert right.start == rng.start
    assert right.end > rng.end
    assert left.span > rng.span
    assert right.span > rng.span


def test_extend_increments():
    rng = default_range(ZoomLevel.MONTH, NOW)
    assert extend_range(ZoomLevel.MONTH, rng, "left").start == datetime(2020, 3, 1)
    assert extend_range(ZoomLevel.MONTH, rng, "right").end == datetime(2032, 4, 1)
    day = default_range(ZoomLevel.DAY, NOW)
    assert extend_range(ZoomLevel.DAY, day, "left").start == day.start - timedelta(days=60)


def test_extend_rejects_unknown_direction():
    with pytest.raises(ValueError):
        extend_range(ZoomLevel.DAY, default_range(ZoomLevel.DAY, NOW), "up")


def test_edge_direction():
    assert edge_direction(100.0, 800.0, 5000.0) is Direction.LEFT
    assert edge_direction(4000.0, 800.0, 5000.0) is Direction.RIGHT
    assert edge_direction(2000.0, 800.0, 5000.0) is None
    assert edge_direction(2000.0, 800.0, 5000.0, threshold=2500.0) is Direction.LEFT


def test_layout_today_offset():
    layout = build_layout(ZoomLevel.MONTH, default_range(ZoomLevel.MONTH, NOW), NOW)
    assert layout.today_offset == pytest.approx(48 * 130 + (14 / 31) * 130)
    assert layout.total_width == len(layout.columns) * layout.column_width == 97 * 130


def test_left_extension_compensates_scroll():
    window = RangeWindow(ZoomLevel.MONTH, clock=_clock)
    before = window.layout
    ext = window.on_scroll(100.0, 800.0)
    assert ext is not None
    assert ext.direction is Direction.LEFT
    assert ext.previous is before
    assert ext.added_width == 24 * 130
    assert ext.scroll_left == 100.0 + 24 * 130
    assert ext.layout.range.end == before.range.end
    assert window.layout is ext.layout
    # The same calendar date keeps its screen position after compensation.
    old = date_to_offset("2024-01-01", ZoomLevel.MONTH, before.range) - 100.0
    new = date_to_offset("2024-01-01", ZoomLevel.MONTH, ext.layout.range) - ext.scroll_left
    assert new == pytest.approx(old)


def test_right_extension_keeps_scroll():
    window = RangeWindow(ZoomLevel.DAY, clock=_clock)
    total = window.layout.total_width
    ext = window.on_scroll(total - 900.0, 800.0)
    assert ext is not None
    assert ext.direction is Direction.RIGHT
    assert ext.scroll_left == total - 900.0
    assert ext.added_width == 60 * 44
    assert ext.layout.range.start == ext.previous.range.start


def test_scroll_ignored_while_extending():
    window = RangeWindow(ZoomLevel.WEEK, clock=_clock)
    first = window.on_scroll(0.0, 800.0)
    assert first is not None
    assert window.is_extending
    assert window.on_scroll(0.0, 800.0) is None
    assert window.extend("right") is None
    assert window.layout is first.layout

    window.settle()
    assert not window.is_extending
    assert window.on_scroll(0.0, 800.0) is not None


def test_failing_subscriber_does_not_leave_window_extending():
    window = RangeWindow(ZoomLevel.DAY, clock=_clock)

    def broken(layout):
        raise RuntimeError("redraw failed")

    unsubscribe = window.subscribe(broken)
    with pytest.raises(RuntimeError):
        window.on_scroll(0.0, 800.0)
    assert not window.is_extending

    unsubscribe()
    ext = window.on_scroll(0.0, 800.0)
    assert ext is not None
    assert ext.direction is Direction.LEFT


def test_scroll_away_from_edges_is_noop():
    window = RangeWindow(ZoomLevel.MONTH, clock=_clock)
    layout = window.layout
    assert window.on_scroll(layout.total_width / 2, 800.0) is None
    assert window.layout is layout
    assert not window.is_extending


def test_subscribers_receive_whole_layouts():
    window = RangeWindow(ZoomLevel.MONTH, clock=_clock)
    seen = []
    unsubscribe = window.subscribe(seen.append)
    window.set_zoom("day")
    assert len(seen) == 1
    assert seen[0].zoom is ZoomLevel.DAY
    assert seen[0].column_width == 44
    assert seen[0].range == default_range(ZoomLevel.DAY, NOW)

    unsubscribe()
    window.set_zoom(ZoomLevel.HOUR)
    assert len(seen) == 1
    assert window.zoom is ZoomLevel.HOUR


def test_today_scroll_target():
    window = RangeWindow(ZoomLevel.DAY, clock=_clock)
    assert window.layout.today_offset == 90 * 44
    assert window.today_scroll_target(800.0) == 90 * 44 - 400.0
    assert window.today_scroll_target(1e6) == 0.0


def test_custom_edge_threshold():
    window = RangeWindow(ZoomLevel.MONTH, clock=_clock, edge_threshold=50.0)
    assert window.edge_threshold == 50.0
    assert window.on_scroll(100.0, 800.0) is None
