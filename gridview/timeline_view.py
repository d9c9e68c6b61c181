# gridview/timeline_view.py
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Mapping, Optional

import numpy as np
import pyqtgraph as pg
from PySide6 import QtCore, QtWidgets

from config import TimelineConfig
from gridview.time_axis import ColumnAxis
from timeline.coords import bar_width, date_offsets, date_to_offset, offset_to_date, widths_from_offsets
from timeline.dates import format_date, parse_date
from timeline.overlap import ScheduledInterval
from timeline.store import IntervalRejected, IntervalStore
from timeline.window import RangeWindow, TimelineLayout
from timeline.zoom import ZoomLevel

LOG = logging.getLogger(__name__)

STATUS_COLORS: dict[str, str] = {
    "open": "#4c6ef5",
    "in-progress": "#7950f2",
    "complete": "#37b24d",
    "blocked": "#f08c00",
}
BAR_MARGIN = 6.0


class TimelineView(QtWidgets.QWidget):
    """Scrollable schedule grid: one row per resource, one bar per scheduled item."""

    createRequested = QtCore.Signal(str, str)  # resource_id, YYYY-MM-DD
    editRequested = QtCore.Signal(str)  # interval id
    saveRejected = QtCore.Signal(str, str)  # verdict, message
    layoutChanged = QtCore.Signal(object)

    def __init__(
        self,
        store: IntervalStore,
        resources: Mapping[str, str],
        *,
        config: TimelineConfig | None = None,
        window: RangeWindow | None = None,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        cfg = config or TimelineConfig()
        self._store = store
        self._resources = dict(resources)
        self._intervals: tuple[ScheduledInterval, ...] = ()
        self._row_height = float(cfg.row_height)
        self._min_bar_width = float(cfg.min_bar_width_px)
        self._window = window or RangeWindow(cfg.zoom, edge_threshold=cfg.edge_threshold_px)
        self._bars: pg.BarGraphItem | None = None

        self.zoomCombo = QtWidgets.QComboBox()
        for level in ZoomLevel:
            self.zoomCombo.addItem(level.value.title(), level.value)
        self.zoomCombo.setCurrentIndex(self.zoomCombo.findData(self._window.zoom.value))

        self._axis = ColumnAxis(orientation="bottom")
        self.plot = pg.PlotWidget(axisItems={"bottom": self._axis})
        self.plot.setMouseEnabled(x=False, y=False)
        self.plot.setMenuEnabled(False)
        self.plot.hideButtons()
        self.plot.invertY(True)
        self.plot.showGrid(x=True, y=False, alpha=0.2)
        left_axis = self.plot.getAxis("left")
        left_axis.setWidth(cfg.label_width)
        left_axis.setTicks([[
            ((row + 0.5) * self._row_height, name)
            for row, name in enumerate(self._resources.values())
        ]])
        self.plot.setYRange(0, max(1, len(self._resources)) * self._row_height, padding=0)

        self._today_line = pg.InfiniteLine(angle=90, movable=False, pen=pg.mkPen("#e03131", width=2))
        self.plot.addItem(self._today_line)

        self.scrollBar = QtWidgets.QScrollBar(QtCore.Qt.Horizontal)

        top = QtWidgets.QHBoxLayout()
        top.addWidget(QtWidgets.QLabel("Timescale"))
        top.addWidget(self.zoomCombo)
        top.addStretch(1)
        layout = QtWidgets.QVBoxLayout(self)
        layout.addLayout(top)
        layout.addWidget(self.plot, 1)
        layout.addWidget(self.scrollBar)

        self.zoomCombo.currentIndexChanged.connect(self._on_zoom_changed)
        self.scrollBar.valueChanged.connect(self._on_scroll)
        self.plot.scene().sigMouseClicked.connect(self._on_click)

        self._unsubscribe_layout = self._window.subscribe(self._apply_layout)
        self._unsubscribe_store = self._store.subscribe(self._on_intervals)
        self._apply_layout(self._window.layout)
        self.scroll_to_today()

    # ----- public -----

    @property
    def window(self) -> RangeWindow:
        return self._window

    def viewport_width(self) -> float:
        return max(1.0, float(self.plot.getViewBox().width()))

    def scroll_to_today(self) -> None:
        target = self._window.today_scroll_target(self.viewport_width())
        self.scrollBar.setValue(int(round(target)))
        self._update_view()

    def submit(
        self,
        resource_id: str,
        start_date: str,
        end_date: str,
        *,
        name: str = "",
        status: str = "open",
        interval_id: Optional[str] = None,
    ) -> ScheduledInterval | None:
        """Create or update an item; validation failures are reported via ``saveRejected``."""
        try:
            if interval_id is None:
                return self._store.create(
                    resource_id=resource_id,
                    start_date=start_date,
                    end_date=end_date,
                    name=name,
                    status=status,
                )
            return self._store.update(
                interval_id,
                resource_id=resource_id,
                start_date=start_date,
                end_date=end_date,
                name=name,
                status=status,
            )
        except IntervalRejected as exc:
            LOG.warning("Save rejected: %s", exc)
            self.saveRejected.emit(exc.verdict.value, str(exc))
            return None

    def closeEvent(self, event):  # pragma: no cover - GUI teardown
        self._unsubscribe_layout()
        self._unsubscribe_store()
        super().closeEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._sync_scrollbar(self._window.layout)
        self._update_view()

    # ----- layout / data -----

    def _apply_layout(self, layout: TimelineLayout) -> None:
        self._axis.set_layout(layout)
        self._today_line.setValue(layout.today_offset)
        self._sync_scrollbar(layout)
        self._redraw_bars()
        self.layoutChanged.emit(layout)

    def _sync_scrollbar(self, layout: TimelineLayout) -> None:
        viewport = self.viewport_width()
        maximum = max(0, int(layout.total_width - viewport))
        blocked = self.scrollBar.blockSignals(True)
        try:
            self.scrollBar.setRange(0, maximum)
            self.scrollBar.setPageStep(int(viewport))
            self.scrollBar.setSingleStep(layout.column_width)
        finally:
            self.scrollBar.blockSignals(blocked)

    def _on_intervals(self, intervals: tuple[ScheduledInterval, ...]) -> None:
        self._intervals = intervals
        self._redraw_bars()

    def _rows(self) -> dict[str, int]:
        return {resource_id: row for row, resource_id in enumerate(self._resources)}

    def _redraw_bars(self) -> None:
        if self._bars is not None:
            self.plot.removeItem(self._bars)
            self._bars = None
        rows = self._rows()
        items = [item for item in self._intervals if item.resource_id in rows]
        if not items:
            return
        layout = self._window.layout
        starts = date_offsets([item.start_date for item in items], layout.zoom, layout.range)
        ends = date_offsets([item.end_date for item in items], layout.zoom, layout.range)
        widths = widths_from_offsets(starts, ends, min_width=self._min_bar_width)
        y0 = np.array([rows[item.resource_id] * self._row_height + BAR_MARGIN for item in items])
        brushes = [pg.mkBrush(STATUS_COLORS.get(item.status, "#868e96")) for item in items]
        self._bars = pg.BarGraphItem(
            x0=starts,
            y0=y0,
            width=widths,
            height=self._row_height - 2 * BAR_MARGIN,
            brushes=brushes,
            pen=None,
        )
        self.plot.addItem(self._bars)

    # ----- interaction -----

    def _on_zoom_changed(self, index: int) -> None:
        zoom = self.zoomCombo.itemData(index)
        if zoom is None or zoom == self._window.zoom.value:
            return
        self._window.set_zoom(zoom)
        self.scroll_to_today()

    def _on_scroll(self, value: int) -> None:
        self._update_view()
        extension = self._window.on_scroll(float(value), self.viewport_width())
        if extension is None:
            return
        try:
            # Columns were prepended; shift by their width so the view does not jump.
            self.scrollBar.setValue(int(round(extension.scroll_left)))
            self._update_view()
        finally:
            self._window.settle()

    def _update_view(self) -> None:
        x0 = float(self.scrollBar.value())
        self.plot.setXRange(x0, x0 + self.viewport_width(), padding=0)

    def _interval_at(self, resource_id: str, x: float) -> ScheduledInterval | None:
        layout = self._window.layout
        for item in self._intervals:
            if item.resource_id != resource_id:
                continue
            left = date_to_offset(item.start_date, layout.zoom, layout.range)
            width = bar_width(
                item.start_date,
                item.end_date,
                layout.zoom,
                layout.range,
                min_width=self._min_bar_width,
            )
            if left <= x < left + width:
                return item
        return None

    def _on_click(self, event) -> None:
        if event.button() != QtCore.Qt.LeftButton:
            return
        pos = self.plot.getViewBox().mapSceneToView(event.scenePos())
        row = int(pos.y() // self._row_height)
        resource_ids = list(self._resources)
        if not 0 <= row < len(resource_ids):
            return
        resource_id = resource_ids[row]
        hit = self._interval_at(resource_id, pos.x())
        if hit is not None:
            self.editRequested.emit(hit.id)
            return
        layout = self._window.layout
        when = offset_to_date(pos.x(), layout.zoom, layout.range)
        self.createRequested.emit(resource_id, format_date(when))


def default_end_date(start_date: str, days: int = 7) -> str:
    """End date proposed for a new item created by clicking on empty space."""
    start: date = parse_date(start_date)
    return format_date(start + timedelta(days=days))
