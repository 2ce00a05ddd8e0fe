from __future__ import annotations

from datetime import date, datetime, time

import pytest

from practice_tracker.attendance.model import AttendanceEvent
from practice_tracker.core.enums import AttendanceStatus
from practice_tracker.core.exceptions import InvalidRangeError, ValidationError
from practice_tracker.reports import service as report_module
from practice_tracker.reports.service import AttendanceReportService
from practice_tracker.roster.model import Individual
from practice_tracker.schedules.model import RecurringBlock

MONDAY = 1
WEDNESDAY = 3


class FakeRoster:
    def __init__(self, people):
        self._people = people

    def list_all(self):
        return list(self._people)


class FakeSchedules:
    def __init__(self, blocks):
        self._blocks = blocks

    def list_all(self):
        return list(self._blocks)


class FakeAttendance:
    def __init__(self, events):
        self._events = events
        self.last_args = None

    def list_range(self, *, start, end, individual_id=None):
        self.last_args = {"start": start, "end": end, "individual_id": individual_id}
        return [
            e
            for e in self._events
            if start <= e.event_date <= end and (individual_id is None or e.individual_id == individual_id)
        ]


def block(block_id, weekday, cohort="Level 4", group="A"):
    return RecurringBlock(block_id, cohort, group, weekday, time(16, 0), time(19, 0))


def ev(individual_id, day, status):
    return AttendanceEvent(individual_id=individual_id, event_date=day, status=status)


def service(people, blocks, events, **kwargs):
    attendance = FakeAttendance(events)
    return AttendanceReportService(FakeRoster(people), FakeSchedules(blocks), attendance, **kwargs), attendance


def test_single_week_scenario():
    # 2026-02-01 is a Sunday: one Monday (Feb 2) and one Wednesday (Feb 4) in the week.
    svc, _ = service(
        [Individual(1, "Level 4", "A")],
        [block(1, MONDAY), block(2, WEDNESDAY)],
        [ev(1, date(2026, 2, 2), AttendanceStatus.PRESENT)],
    )

    report = svc.build_report(start=date(2026, 2, 1), end=date(2026, 2, 7))

    (row,) = report.individuals
    m = row.metrics
    assert m.total_scheduled == 2
    assert m.present == 1
    assert m.attended_count == 1
    assert m.percentage == 50
    assert m.streak_length == 0
    assert m.unmarked == 1


def test_people_without_practices_are_left_out(monkeypatch):
    seen = []
    real_aggregate = report_module.aggregate

    def spy(items, order):
        items = list(items)
        seen.extend(items)
        return real_aggregate(items, order)

    monkeypatch.setattr(report_module, "aggregate", spy)

    svc, _ = service(
        [Individual(1, "Level 4"), Individual(2, None), Individual(3, "Level 9")],
        [block(1, MONDAY)],
        [],
    )

    report = svc.build_report(start=date(2026, 2, 1), end=date(2026, 2, 7))

    assert [i.individual.individual_id for i in report.individuals] == [1]
    assert report.overall.individual_count == 1
    assert seen and all(i.metrics.total_scheduled > 0 for i in seen)


def test_cohorts_follow_configured_order_and_count_warnings():
    feb = [date(2026, 2, d) for d in (2, 9, 16)]
    people = [
        Individual(1, "Level 4", "A", "Ava"),
        Individual(2, "Level 4", "A", "Mia"),
        Individual(3, "Level 3", "A", "Zoe"),
        Individual(4, "Boys", "A", "Sam"),
    ]
    blocks = [block(1, MONDAY), block(2, MONDAY, cohort="Level 3"), block(3, MONDAY, cohort="Boys")]
    events = [ev(1, d, AttendanceStatus.ABSENT) for d in feb] + [ev(2, d, AttendanceStatus.PRESENT) for d in feb]
    svc, _ = service(people, blocks, events, cohort_order=["Level 3", "Level 4"])

    report = svc.build_report(start=date(2026, 2, 1), end=date(2026, 2, 20))

    assert [c.cohort_key for c in report.cohorts] == ["Level 3", "Level 4", "Boys"]
    level4 = report.cohorts[1]
    assert level4.average_percentage == 50
    assert level4.warning_count == 1
    assert report.overall.warning_count == 1
    assert [i.individual.display_name for i in report.individuals] == ["Zoe", "Ava", "Mia", "Sam"]

    warnings = svc.build_report(start=date(2026, 2, 1), end=date(2026, 2, 20), warnings_only=True)
    assert [i.individual.individual_id for i in warnings.individuals] == [1]
    assert warnings.cohorts == report.cohorts


def test_explicit_order_overrides_configured_one():
    people = [Individual(1, "Level 4"), Individual(2, "Level 3")]
    blocks = [block(1, MONDAY), block(2, MONDAY, cohort="Level 3")]
    svc, _ = service(people, blocks, [], cohort_order=["Level 3", "Level 4"])

    report = svc.build_report(start=date(2026, 2, 1), end=date(2026, 2, 7), cohort_order=["Level 4"])

    assert [c.cohort_key for c in report.cohorts] == ["Level 4", "Level 3"]


def test_duplicate_marks_resolve_to_latest():
    events = [
        AttendanceEvent(1, date(2026, 2, 2), AttendanceStatus.ABSENT, record_id=1, marked_at=datetime(2026, 2, 2, 16)),
        AttendanceEvent(1, date(2026, 2, 2), AttendanceStatus.PRESENT, record_id=2, marked_at=datetime(2026, 2, 2, 17)),
    ]
    svc, _ = service([Individual(1, "Level 4")], [block(1, MONDAY)], events)

    report = svc.build_report(start=date(2026, 2, 1), end=date(2026, 2, 7))

    m = report.individuals[0].metrics
    assert (m.present, m.absent, m.percentage) == (1, 0, 100)


def test_reversed_range_is_rejected():
    svc, _ = service([Individual(1, "Level 4")], [block(1, MONDAY)], [])

    with pytest.raises(InvalidRangeError):
        svc.build_report(start=date(2026, 2, 7), end=date(2026, 2, 1))


def test_monthly_history_counts_current_month_up_to_today():
    people = [Individual(1, "Level 4")]
    blocks = [block(1, MONDAY), block(2, WEDNESDAY)]
    events = [
        ev(1, date(2026, 1, 5), AttendanceStatus.PRESENT),
        ev(1, date(2026, 2, 2), AttendanceStatus.LATE),
        ev(1, date(2026, 2, 23), AttendanceStatus.PRESENT),
    ]
    svc, attendance = service(people, blocks, events)

    history = svc.monthly_history(individual_id=1, months=2, today=date(2026, 2, 18))

    assert [(m.year, m.month, m.label) for m in history] == [(2026, 2, "February"), (2026, 1, "January")]
    assert history[0].metrics.total_scheduled == 6
    assert history[0].metrics.late == 1
    assert history[0].metrics.percentage == 17
    assert history[1].metrics.total_scheduled == 8
    assert history[1].metrics.present == 1
    assert attendance.last_args == {"start": date(2026, 1, 1), "end": date(2026, 2, 18), "individual_id": 1}


def test_monthly_history_for_unknown_member_fails():
    svc, _ = service([Individual(1, "Level 4")], [block(1, MONDAY)], [])

    with pytest.raises(ValidationError):
        svc.monthly_history(individual_id=2, today=date(2026, 2, 18))


def test_csv_rows():
    svc, _ = service(
        [Individual(1, "Level 4", None, "Ava Nguyen")],
        [block(1, MONDAY)],
        [ev(1, date(2026, 2, 2), AttendanceStatus.ABSENT)],
    )

    rows = AttendanceReportService.to_csv_rows(svc.build_report(start=date(2026, 2, 1), end=date(2026, 2, 7)))

    assert rows == [
        {
            "individual_id": 1,
            "name": "Ava Nguyen",
            "cohort": "Level 4",
            "sub_group": "A",
            "total_scheduled": 1,
            "present": 0,
            "late": 0,
            "absent": 1,
            "left_early": 0,
            "unmarked": 0,
            "percentage": 0,
            "band": "poor",
            "streak_length": 1,
            "most_recent_absence_date": "2026-02-02",
        }
    ]


def test_lowest_attendance_listed_first_within_cohort():
    mondays = [date(2026, 2, d) for d in (2, 9, 16)]
    people = [Individual(1, "Level 4", "A", "Ava"), Individual(2, "Level 4", "A", "Zoe"), Individual(3, "Level 4 ", "A", "Mia")]
    events = (
        [ev(1, d, AttendanceStatus.PRESENT) for d in mondays]
        + [ev(2, d, AttendanceStatus.ABSENT) for d in mondays]
        + [ev(3, mondays[0], AttendanceStatus.PRESENT)]
    )
    svc, _ = service(people, [block(1, MONDAY)], events)

    report = svc.build_report(start=date(2026, 2, 1), end=date(2026, 2, 20))

    assert [i.individual.display_name for i in report.individuals] == ["Zoe", "Mia", "Ava"]
    assert [c.cohort_key for c in report.cohorts] == ["Level 4"]


def test_monthly_history_rejects_out_of_range_month_counts():
    svc, attendance = service([Individual(1, "Level 4")], [block(1, MONDAY)], [])

    for months in (0, 25, 30000):
        with pytest.raises(ValidationError):
            svc.monthly_history(individual_id=1, months=months, today=date(2026, 10, 18))
    assert attendance.last_args is None


def test_monthly_history_accepts_two_years():
    svc, _ = service([Individual(1, "Level 4")], [block(1, MONDAY)], [])

    history = svc.monthly_history(individual_id=1, months=24, today=date(2026, 10, 18))

    assert len(history) == 24
    assert (history[-1].year, history[-1].month) == (2024, 11)
