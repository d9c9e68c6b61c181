"""Demo resources and work items; no two items on a resource overlap."""
from __future__ import annotations

from timeline.overlap import ScheduledInterval

RESOURCES: dict[str, str] = {
    "wc-001": "Genesis Hardware",
    "wc-002": "Rodriques Electrics",
    "wc-003": "Konsulting Inc",
    "wc-004": "McMarrow Distribution",
    "wc-005": "Spartan Manufacturing",
}

INTERVALS: tuple[ScheduledInterval, ...] = (
    ScheduledInterval("wo-001", "wc-001", "2025-10-01", "2025-12-15", "Centrix Ltd", "complete"),
    ScheduledInterval("wo-002", "wc-001", "2026-01-05", "2026-03-10", "Sensor Calibration", "open"),
    ScheduledInterval("wo-003", "wc-001", "2026-04-01", "2026-05-20", "Circuit Board Run", "in-progress"),
    ScheduledInterval("wo-004", "wc-002", "2025-09-15", "2025-11-10", "Capacitor Bank Install", "complete"),
    ScheduledInterval("wo-005", "wc-002", "2025-12-01", "2026-02-05", "Voltage Regulators", "open"),
    ScheduledInterval("wo-006", "wc-002", "2026-03-01", "2026-05-15", "Transformer Assembly", "in-progress"),
    ScheduledInterval("wo-007", "wc-003", "2025-11-03", "2025-12-19", "Vendor Audit Phase 1", "complete"),
    ScheduledInterval("wo-008", "wc-003", "2026-01-12", "2026-04-30", "Process Redesign", "blocked"),
    ScheduledInterval("wo-009", "wc-004", "2026-02-02", "2026-03-20", "Regional Restock", "in-progress"),
    ScheduledInterval("wo-010", "wc-004", "2026-03-20", "2026-06-30", "Warehouse Migration", "open"),
    ScheduledInterval("wo-011", "wc-005", "2025-12-08", "2026-02-27", "Chassis Welding", "in-progress"),
    ScheduledInterval("wo-012", "wc-005", "2026-10-01", "2026-12-18", "Frame Assembly", "open"),
)
