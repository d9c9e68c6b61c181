from pathlib import Path

from config import TimelineConfig
from timeline.zoom import ZoomLevel


def test_timeline_config_defaults(tmp_path: Path):
    ini_path = tmp_path / "missing.ini"
    cfg = TimelineConfig.load(ini_path)
    assert cfg.zoom is ZoomLevel.MONTH
    assert cfg.edge_threshold_px == 300.0
    assert cfg.min_bar_width_px == 20.0
    assert cfg.ini_path == ini_path


def test_timeline_config_parse(tmp_path: Path):
    ini_path = tmp_path / "config.ini"
    ini_path.write_text(
        """
[timeline]
zoom = Week
edge_threshold_px = 150

[ui]
row_height = 40
""".strip()
    )

    cfg = TimelineConfig.load(ini_path)
    assert cfg.zoom is ZoomLevel.WEEK
    assert cfg.edge_threshold_px == 150.0
    assert cfg.row_height == 40
    assert cfg.label_width == 300


def test_timeline_config_ignores_unknown_zoom_and_bad_sizes(tmp_path: Path):
    ini_path = tmp_path / "config.ini"
    ini_path.write_text(
        """
[timeline]
zoom = fortnight
min_bar_width_px = 0

[ui]
row_height = -5
""".strip()
    )

    cfg = TimelineConfig.load(ini_path)
    assert cfg.zoom is ZoomLevel.MONTH
    assert cfg.min_bar_width_px == 20.0
    assert cfg.row_height == 48


def test_timeline_config_save(tmp_path: Path):
    ini_path = tmp_path / "config.ini"
    cfg = TimelineConfig.load(ini_path)
    cfg.zoom = ZoomLevel.DAY
    cfg.row_height = 36
    cfg.save()

    written = ini_path.read_text()
    assert "zoom = day" in written
    reloaded = TimelineConfig.load(ini_path)
    assert reloaded.zoom is ZoomLevel.DAY
    assert reloaded.row_height == 36
