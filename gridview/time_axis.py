# gridview/time_axis.py
import pyqtgraph as pg

from gridview.axis_formatter import ColumnTickFormatter


class ColumnAxis(pg.AxisItem):
    """Bottom axis with one tick per timeline column, labelled by zoom level."""

    def __init__(self, *, layout=None, **kwargs):
        super().__init__(**kwargs)
        self._formatter = ColumnTickFormatter(layout)

    def set_layout(self, layout):
        self._formatter.set_layout(layout)
        self._refresh()

    def _refresh(self):
        view = self.linkedView()
        if view is not None:
            self.linkedViewChanged(view, None)
        else:
            self.update()

    def tickValues(self, minVal, maxVal, size):
        ticks = self._formatter.visible_ticks(minVal, maxVal)
        if not ticks:
            return []
        return [(self._formatter.column_width, ticks)]

    def tickStrings(self, values, scale, spacing):
        return self._formatter.format_ticks(values)
