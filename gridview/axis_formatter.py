"""Column tick placement and labels, kept free of Qt imports for testing."""

from __future__ import annotations

from math import isfinite
from typing import Iterable

import numpy as np

from timeline.coords import column_edges
from timeline.window import TimelineLayout


class ColumnTickFormatter:
    """Map pixel x positions to the label of the column they fall in."""

    __slots__ = ("_edges", "_labels", "_column_width")

    def __init__(self, layout: TimelineLayout | None = None) -> None:
        self._edges = np.zeros(1, dtype=float)
        self._labels: list[str] = []
        self._column_width = 0.0
        if layout is not None:
            self.set_layout(layout)

    @property
    def column_width(self) -> float:
        return self._column_width

    def set_layout(self, layout: TimelineLayout) -> None:
        self._edges = column_edges(layout.zoom, layout.range)
        self._labels = [column.label for column in layout.columns]
        self._column_width = float(layout.column_width)

    def visible_ticks(self, x0: float, x1: float) -> list[float]:
        """Left edges of the columns that start inside ``[x0, x1]``."""
        if not self._labels or x1 < x0:
            return []
        left = int(np.searchsorted(self._edges, x0, side="left"))
        right = int(np.searchsorted(self._edges, x1, side="right"))
        right = min(right, len(self._labels))
        return [float(v) for v in self._edges[left:right]]

    def label_at(self, x: float) -> str:
        idx = int(np.searchsorted(self._edges, x, side="right")) - 1
        if 0 <= idx < len(self._labels):
            return self._labels[idx]
        return ""

    def format_ticks(self, values: Iterable[float]) -> list[str]:
        out = []
        for value in values:
            if value is None:
                out.append("")
                continue
            numeric = float(value)
            out.append(self.label_at(numeric) if isfinite(numeric) else "")
        return out
