"""Fold sparse attendance events into metrics over expected practice dates.

Every expected date lands in exactly one bucket: present, late, absent,
left_early, or unmarked (no event). Unmarked dates count toward
total_scheduled but not toward absences. Late arrivals and early departures
count as attended.

Consecutive-absence streak: walk the expected dates newest first. present
and late end the walk; absent adds one; unmarked and left_early are stepped
over without ending the walk and without adding to it.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..common.math_utils import percent
from ..core.enums import AttendanceStatus
from .model import AttendanceEvent, AttendanceMetrics

_STREAK_BREAKERS = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


def _ordering_key(event: AttendanceEvent) -> tuple[datetime, int]:
    return (event.marked_at or datetime.min, event.record_id or 0)


def latest_per_date(events: Iterable[AttendanceEvent]) -> list[AttendanceEvent]:
    """Keep one event per (individual, date): the latest by (marked_at, record_id).

    Ties go to the event that comes later in the input.
    """

    chosen: dict[tuple[int, date], AttendanceEvent] = {}
    for ev in events:
        key = (ev.individual_id, ev.event_date)
        current = chosen.get(key)
        if current is None or _ordering_key(ev) >= _ordering_key(current):
            chosen[key] = ev
    return sorted(chosen.values(), key=lambda e: (e.individual_id, e.event_date))


def consecutive_absences(
    expected: Sequence[date],
    status_by_date: Mapping[date, AttendanceStatus],
) -> tuple[int, Optional[date]]:
    streak = 0
    most_recent: Optional[date] = None

    for day in sorted(expected, reverse=True):
        status = status_by_date.get(day)
        if status in _STREAK_BREAKERS:
            break
        if status is AttendanceStatus.ABSENT:
            streak += 1
            if most_recent is None:
                most_recent = day
        # unmarked / left_early: keep walking

    return streak, most_recent


def reconcile(expected: Sequence[date], events: Iterable[AttendanceEvent]) -> AttendanceMetrics:
    """Metrics for one individual.

    events are assumed to be at most one per date (see latest_per_date);
    events on dates that are not expected are ignored.
    """

    status_by_date = {ev.event_date: AttendanceStatus(ev.status) for ev in events}
    expected_days = sorted(set(expected))

    counts: Counter = Counter()
    unmarked = 0
    for day in expected_days:
        status = status_by_date.get(day)
        if status is None:
            unmarked += 1
        else:
            counts[status] += 1

    total = len(expected_days)
    attended = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE] + counts[AttendanceStatus.LEFT_EARLY]
    streak, most_recent = consecutive_absences(expected_days, status_by_date)

    return AttendanceMetrics(
        total_scheduled=total,
        present=counts[AttendanceStatus.PRESENT],
        late=counts[AttendanceStatus.LATE],
        absent=counts[AttendanceStatus.ABSENT],
        left_early=counts[AttendanceStatus.LEFT_EARLY],
        unmarked=unmarked,
        percentage=percent(attended, total) if total > 0 else None,
        streak_length=streak,
        most_recent_absence_date=most_recent,
    )
