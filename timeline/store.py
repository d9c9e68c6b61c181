"""In-memory interval list with change broadcast to subscribers."""
from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import replace
from typing import Callable, Iterable, Optional

from timeline.overlap import ScheduledInterval, Verdict, has_overlap, validate_interval

LOG = logging.getLogger(__name__)

Snapshot = tuple[ScheduledInterval, ...]


class IntervalRejected(ValueError):
    """A create/update failed validation; the store was left untouched."""

    def __init__(self, verdict: Verdict, message: str):
        super().__init__(message)
        self.verdict = verdict


class IntervalStore:
    """
    Single-writer owner of the scheduled intervals.

    Subscribers get the current snapshot on subscription and again after every
    mutation. Validation runs against a snapshot before anything is changed.
    """

    def __init__(self, intervals: Iterable[ScheduledInterval] = ()):
        self._intervals: Snapshot = tuple(intervals)
        self._lock = threading.RLock()
        self._subscribers: list[Callable[[Snapshot], None]] = []
        self._ids = itertools.count(len(self._intervals) + 1)

    def all(self) -> Snapshot:
        with self._lock:
            return self._intervals

    def for_resource(self, resource_id: str) -> Snapshot:
        return tuple(item for item in self.all() if item.resource_id == resource_id)

    def get(self, interval_id: str) -> ScheduledInterval:
        for item in self.all():
            if item.id == interval_id:
                return item
        raise KeyError(interval_id)

    def subscribe(self, callback: Callable[[Snapshot], None]) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)
            snapshot = self._intervals
        callback(snapshot)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

    def check_overlap(
        self,
        resource_id: str,
        start_date: str,
        end_date: str,
        exclude_id: Optional[str] = None,
    ) -> bool:
        return has_overlap(resource_id, start_date, end_date, self.all(), exclude_id)

    def create(
        self,
        *,
        resource_id: str,
        start_date: str,
        end_date: str,
        name: str = "",
        status: str = "open",
    ) -> ScheduledInterval:
        with self._lock:
            self._ensure_valid(resource_id, start_date, end_date, None)
            item = ScheduledInterval(
                id=self._new_id(),
                resource_id=resource_id,
                start_date=start_date,
                end_date=end_date,
                name=name,
                status=status,
            )
            self._intervals = self._intervals + (item,)
        self._emit()
        return item

    def update(self, interval_id: str, **changes) -> ScheduledInterval:
        with self._lock:
            current = self.get(interval_id)
            updated = replace(current, **changes)
            if updated.id != interval_id:
                raise ValueError("interval id cannot be changed")
            self._ensure_valid(updated.resource_id, updated.start_date, updated.end_date, interval_id)
            self._intervals = tuple(
                updated if item.id == interval_id else item for item in self._intervals
            )
        self._emit()
        return updated

    def delete(self, interval_id: str) -> None:
        with self._lock:
            remaining = tuple(item for item in self._intervals if item.id != interval_id)
            if len(remaining) == len(self._intervals):
                raise KeyError(interval_id)
            self._intervals = remaining
        self._emit()

    def reset(self, intervals: Iterable[ScheduledInterval]) -> None:
        with self._lock:
            self._intervals = tuple(intervals)
        self._emit()

    def _ensure_valid(
        self, resource_id: str, start_date: str, end_date: str, exclude_id: Optional[str]
    ) -> None:
        verdict = validate_interval(resource_id, start_date, end_date, self._intervals, exclude_id)
        if verdict is Verdict.END_NOT_AFTER_START:
            LOG.info("Rejected %s..%s on %s: end not after start", start_date, end_date, resource_id)
            raise IntervalRejected(verdict, "end date must be after start date")
        if verdict is Verdict.OVERLAP:
            LOG.info("Rejected %s..%s on %s: overlaps existing item", start_date, end_date, resource_id)
            raise IntervalRejected(verdict, "interval overlaps an existing item on this resource")

    def _new_id(self) -> str:
        taken = {item.id for item in self._intervals}
        while True:
            candidate = f"wo-{next(self._ids):03d}"
            if candidate not in taken:
                return candidate

    def _emit(self) -> None:
        with self._lock:
            snapshot = self._intervals
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(snapshot)
