from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.aggregator import aggregate, attendance_band, cohort_of, overall, sort_cohorts
from ..attendance.model import (
    AttendanceEvent,
    CohortMetrics,
    IndividualAttendance,
    MonthlyAttendance,
    OverallMetrics,
)
from ..attendance.reconciler import latest_per_date, reconcile
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, require_range, shift_month, today_local
from ..core.constants import DEFAULT_HISTORY_MONTHS, MAX_HISTORY_MONTHS
from ..core.exceptions import ValidationError
from ..roster.repository import RosterRepository
from ..schedules.expander import expand
from ..schedules.repository import ScheduleRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceReport:
    start: date
    end: date
    individuals: list[IndividualAttendance]
    cohorts: list[CohortMetrics]
    overall: OverallMetrics


CSV_FIELDS = [
    "individual_id",
    "name",
    "cohort",
    "sub_group",
    "total_scheduled",
    "present",
    "late",
    "absent",
    "left_early",
    "unmarked",
    "percentage",
    "band",
    "streak_length",
    "most_recent_absence_date",
]


class AttendanceReportService:
    """Composes the engine: expand -> reconcile per individual -> aggregate."""

    def __init__(
        self,
        roster: RosterRepository,
        schedules: ScheduleRepository,
        attendance: AttendanceRepository,
        *,
        cohort_order: Optional[Sequence[str]] = None,
        max_workers: int = 3,
    ):
        self._roster = roster
        self._schedules = schedules
        self._attendance = attendance
        self._cohort_order = list(cohort_order or [])
        self._max_workers = int(max_workers)

    def _fetch(self, *, start: date, end: date, individual_id: Optional[int] = None):
        # All three inputs must be fully loaded before anything is computed.
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            roster_f = pool.submit(self._roster.list_all)
            blocks_f = pool.submit(self._schedules.list_all)
            events_f = pool.submit(self._attendance.list_range, start=start, end=end, individual_id=individual_id)
            return list(roster_f.result()), list(blocks_f.result()), list(events_f.result())

    def build_report(
        self,
        *,
        start: date,
        end: date,
        cohort_order: Optional[Sequence[str]] = None,
        warnings_only: bool = False,
    ) -> AttendanceReport:
        require_range(start, end)
        order = list(cohort_order) if cohort_order is not None else self._cohort_order

        roster, blocks, events = self._fetch(start=start, end=end)

        events_by_individual: dict[int, list[AttendanceEvent]] = {}
        for ev in latest_per_date(events):
            events_by_individual.setdefault(ev.individual_id, []).append(ev)

        individuals: list[IndividualAttendance] = []
        for person in roster:
            expected = expand(person, blocks, start, end)
            if not expected:
                # No practices scheduled: not applicable, never reported as 0%.
                continue
            metrics = reconcile(expected, events_by_individual.get(person.individual_id, []))
            individuals.append(IndividualAttendance(individual=person, metrics=metrics))

        cohorts = aggregate(individuals, order)
        summary = overall(individuals)

        rank = {key: i for i, key in enumerate(sort_cohorts((cohort_of(i) for i in individuals), order))}
        # Lowest attendance first within each cohort.
        individuals.sort(
            key=lambda i: (
                rank[cohort_of(i)],
                i.metrics.percentage,
                i.individual.display_name or "",
                i.individual.individual_id,
            )
        )
        if warnings_only:
            individuals = [i for i in individuals if i.metrics.in_warning]

        log.info(
            "attendance report %s..%s: %d individuals, %d cohorts, %d warnings",
            start, end, summary.individual_count, len(cohorts), summary.warning_count,
        )
        return AttendanceReport(start=start, end=end, individuals=individuals, cohorts=cohorts, overall=summary)

    def monthly_history(
        self,
        *,
        individual_id: int,
        months: int = DEFAULT_HISTORY_MONTHS,
        today: Optional[date] = None,
    ) -> list[MonthlyAttendance]:
        """Per-month metrics for one individual, newest month first.

        The current month only counts practices up to ``today``.
        """

        if months < 1 or months > MAX_HISTORY_MONTHS:
            raise ValidationError(f"months must be between 1 and {MAX_HISTORY_MONTHS}")

        today = today or today_local()
        first_year, first_month = shift_month(today.year, today.month, -(months - 1))
        window_start = date(first_year, first_month, 1)

        roster, blocks, events = self._fetch(start=window_start, end=today, individual_id=individual_id)
        person = next((p for p in roster if p.individual_id == int(individual_id)), None)
        if person is None:
            raise ValidationError("Roster member not found")

        mine = [e for e in latest_per_date(events) if e.individual_id == person.individual_id]

        out: list[MonthlyAttendance] = []
        for offset in range(months):
            year, month = shift_month(today.year, today.month, -offset)
            month_start, month_end = month_bounds(year, month)
            if offset == 0:
                month_end = today
            expected = expand(person, blocks, month_start, month_end)
            in_month = [e for e in mine if month_start <= e.event_date <= month_end]
            out.append(
                MonthlyAttendance(
                    year=year,
                    month=month,
                    label=month_start.strftime("%B"),
                    metrics=reconcile(expected, in_month),
                )
            )
        return out

    @staticmethod
    def to_csv_rows(report: AttendanceReport) -> list[dict]:
        rows: list[dict] = []
        for item in report.individuals:
            m = item.metrics
            rows.append(
                {
                    "individual_id": item.individual.individual_id,
                    "name": item.individual.display_name or "",
                    "cohort": cohort_of(item),
                    "sub_group": item.individual.effective_sub_group,
                    "total_scheduled": m.total_scheduled,
                    "present": m.present,
                    "late": m.late,
                    "absent": m.absent,
                    "left_early": m.left_early,
                    "unmarked": m.unmarked,
                    "percentage": m.percentage,
                    "band": attendance_band(m.percentage).value,
                    "streak_length": m.streak_length,
                    "most_recent_absence_date": (
                        m.most_recent_absence_date.strftime("%Y-%m-%d") if m.most_recent_absence_date else ""
                    ),
                }
            )
        return rows
