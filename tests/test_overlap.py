from datetime import date

import pytest

from timeline.dates import InvalidDateError
from timeline.overlap import ScheduledInterval, Verdict, has_overlap, validate_interval


EXISTING = [
    ScheduledInterval("wo-1", "wc-1", "2026-02-01", "2026-03-01"),
    ScheduledInterval("wo-2", "wc-1", "2026-03-15", "2026-04-15"),
    ScheduledInterval("wo-3", "wc-2", "2026-03-01", "2026-03-31"),
]


def test_touching_intervals_do_not_overlap():
    only_feb = EXISTING[:1]
    assert not has_overlap("wc-1", "2026-03-01", "2026-03-31", only_feb)
    # Proposed interval ending exactly when the existing one starts.
    assert not has_overlap("wc-1", "2026-01-01", "2026-02-01", only_feb)


def test_partial_overlap_detected():
    assert has_overlap("wc-1", "2026-03-01", "2026-03-31", EXISTING[1:2])
    assert has_overlap("wc-1", "2026-04-14", "2026-05-01", EXISTING)


def test_containment_overlaps_both_ways():
    assert has_overlap("wc-1", "2026-03-20", "2026-03-21", EXISTING)
    assert has_overlap("wc-1", "2026-01-01", "2026-06-01", EXISTING)


def test_other_resources_are_ignored():
    assert not has_overlap("wc-3", "2026-03-01", "2026-03-31", EXISTING)
    assert not has_overlap("wc-2", "2026-02-01", "2026-03-01", EXISTING)
    assert not has_overlap("wc-1", "2026-03-01", "2026-03-31", [])


def test_exclude_id_skips_item_being_edited():
    item = EXISTING[1]
    assert has_overlap(item.resource_id, item.start_date, item.end_date, EXISTING)
    assert not has_overlap(item.resource_id, item.start_date, item.end_date, EXISTING, exclude_id=item.id)
    # Excluding one item still reports conflicts with the others.
    assert has_overlap("wc-1", "2026-02-15", "2026-03-20", EXISTING, exclude_id="wo-2")


def test_short_circuits_on_first_match():
    seen = []

    def intervals():
        for item in EXISTING:
            seen.append(item.id)
            yield item

    assert has_overlap("wc-1", "2026-02-10", "2026-02-11", intervals())
    assert seen == ["wo-1"]


def test_accepts_date_objects():
    assert has_overlap("wc-1", date(2026, 2, 10), date(2026, 2, 11), EXISTING)


def test_validate_interval_verdicts():
    assert validate_interval("wc-1", "2026-03-01", "2026-03-15", EXISTING) is Verdict.OK
    assert validate_interval("wc-1", "2026-03-01", "2026-03-16", EXISTING) is Verdict.OVERLAP
    assert validate_interval("wc-1", "2026-03-10", "2026-03-10", EXISTING) is Verdict.END_NOT_AFTER_START
    assert validate_interval("wc-1", "2026-03-10", "2026-03-01", EXISTING) is Verdict.END_NOT_AFTER_START


def test_bad_range_reported_before_overlap():
    # Inverted range inside an occupied period is a range error, not a conflict.
    assert validate_interval("wc-1", "2026-02-20", "2026-02-10", EXISTING) is Verdict.END_NOT_AFTER_START


def test_malformed_dates_raise():
    with pytest.raises(InvalidDateError):
        has_overlap("wc-1", "2026-3-01", "2026-03-31", EXISTING)
    with pytest.raises(InvalidDateError):
        validate_interval("wc-1", "2026-03-01", "31/03/2026", EXISTING)
    with pytest.raises(InvalidDateError):
        ScheduledInterval("wo-9", "wc-1", "2026-03-01", "2026-13-01")


def test_unknown_status_rejected():
    with pytest.raises(ValueError):
        ScheduledInterval("wo-9", "wc-1", "2026-03-01", "2026-03-02", status="paused")
