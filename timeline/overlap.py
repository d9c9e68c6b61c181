# timeline/overlap.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from timeline.dates import parse_date

STATUSES = ("open", "in-progress", "complete", "blocked")


@dataclass(frozen=True)
class ScheduledInterval:
    """A work item booked on one resource; dates are canonical YYYY-MM-DD strings."""

    id: str
    resource_id: str
    start_date: str
    end_date: str
    name: str = ""
    status: str = "open"

    def __post_init__(self) -> None:
        parse_date(self.start_date)
        parse_date(self.end_date)
        if self.status not in STATUSES:
            raise ValueError(f"unknown status {self.status!r}")


class Verdict(Enum):
    OK = "ok"
    END_NOT_AFTER_START = "end_not_after_start"
    OVERLAP = "overlap"


def has_overlap(
    resource_id: str,
    proposed_start: str | date,
    proposed_end: str | date,
    intervals: Iterable[ScheduledInterval],
    exclude_id: Optional[str] = None,
) -> bool:
    """
    True if ``[proposed_start, proposed_end)`` overlaps any interval on the resource.

    Overlap condition: start < existing_end and existing_start < end.
    Touching intervals (one ends on the day the other starts) do not overlap.
    ``exclude_id`` skips the interval being edited.
    """
    start = parse_date(proposed_start)
    end = parse_date(proposed_end)
    for item in intervals:
        if item.resource_id != resource_id or (exclude_id is not None and item.id == exclude_id):
            continue
        if start < parse_date(item.end_date) and parse_date(item.start_date) < end:
            return True
    return False


def validate_interval(
    resource_id: str,
    proposed_start: str | date,
    proposed_end: str | date,
    intervals: Iterable[ScheduledInterval],
    exclude_id: Optional[str] = None,
) -> Verdict:
    """End-after-start is checked first; the overlap scan only runs for a valid range."""
    if parse_date(proposed_end) <= parse_date(proposed_start):
        return Verdict.END_NOT_AFTER_START
    if has_overlap(resource_id, proposed_start, proposed_end, intervals, exclude_id):
        return Verdict.OVERLAP
    return Verdict.OK
