# app.py
import logging
import sys

from PySide6 import QtWidgets

from config import TimelineConfig
from gridview.timeline_view import TimelineView, default_end_date
from timeline.sample_data import INTERVALS, RESOURCES
from timeline.store import IntervalStore
from timeline.zoom import coerce_zoom


def main(
    *,
    config_path: str | None = None,
    zoom: str | None = None,
    edge_threshold: float | None = None,
):
    cfg = TimelineConfig.load(config_path)
    if zoom is not None:
        cfg.zoom = coerce_zoom(zoom)
    if edge_threshold is not None and edge_threshold >= 0:
        cfg.edge_threshold_px = edge_threshold
    app = QtWidgets.QApplication(sys.argv)

    store = IntervalStore(INTERVALS)
    view = TimelineView(store, RESOURCES, config=cfg)
    view.setWindowTitle("Work Order Schedule")

    def _create(resource_id: str, start_date: str):
        view.submit(resource_id, start_date, default_end_date(start_date), name="New order")

    def _rejected(verdict: str, message: str):
        QtWidgets.QMessageBox.warning(view, "Cannot save", message)

    view.createRequested.connect(_create)
    view.saveRejected.connect(_rejected)
    view.resize(1200, 500)
    view.show()
    app.exec()

if __name__ == "__main__":
    import argparse
    p = argparse.ArgumentParser()
    p.add_argument("--config")
    p.add_argument("--zoom", choices=["hour", "day", "week", "month"])
    p.add_argument("--edge-threshold", type=float)
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    main(
        config_path=args.config,
        zoom=args.zoom,
        edge_threshold=args.edge_threshold,
    )
