from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from timeline.zoom import ZoomLevel, coerce_zoom


@dataclass
class TimelineConfig:
    zoom: ZoomLevel = ZoomLevel.MONTH
    edge_threshold_px: float = 300.0
    min_bar_width_px: float = 20.0
    row_height: int = 48
    label_width: int = 300
    ini_path: Path | None = None

    @classmethod
    def load(cls, ini_path: str | Path | None = None) -> "TimelineConfig":
        cfg = cls()
        path = Path(ini_path or "config.ini")
        if path.exists():
            import configparser

            parser = configparser.ConfigParser()
            parser.read(path)
            section = parser["timeline"] if "timeline" in parser else None
            if section:
                zoom_raw = section.get("zoom", fallback="")
                if zoom_raw:
                    try:
                        cfg.zoom = coerce_zoom(zoom_raw)
                    except ValueError:
                        pass
                threshold = section.getfloat("edge_threshold_px", fallback=cfg.edge_threshold_px)
                if threshold >= 0:
                    cfg.edge_threshold_px = threshold
                min_width = section.getfloat("min_bar_width_px", fallback=cfg.min_bar_width_px)
                if min_width > 0:
                    cfg.min_bar_width_px = min_width

            ui_section = parser["ui"] if "ui" in parser else None
            if ui_section:
                row_height = ui_section.getint("row_height", fallback=cfg.row_height)
                if row_height > 0:
                    cfg.row_height = row_height
                label_width = ui_section.getint("label_width", fallback=cfg.label_width)
                if label_width >= 0:
                    cfg.label_width = label_width
        cfg.ini_path = path
        return cfg

    def save(self) -> None:
        if self.ini_path is None:
            return
        import configparser

        parser = configparser.ConfigParser()
        parser["timeline"] = {
            "zoom": self.zoom.value,
            "edge_threshold_px": f"{self.edge_threshold_px:.1f}",
            "min_bar_width_px": f"{self.min_bar_width_px:.1f}",
        }
        parser["ui"] = {
            "row_height": str(self.row_height),
            "label_width": str(self.label_width),
        }
        with self.ini_path.open("w") as fh:
            parser.write(fh)
