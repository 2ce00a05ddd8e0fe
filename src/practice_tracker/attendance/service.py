from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.constants import UNKNOWN_COHORT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..roster.repository import RosterRepository
from ..schedules.expander import ExpectedAttendee, expected_on
from ..schedules.repository import ScheduleRepository
from .aggregator import sort_cohorts
from .model import AttendanceEvent
from .reconciler import latest_per_date
from .repository import AttendanceRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailySheetRow:
    attendee: ExpectedAttendee
    event: Optional[AttendanceEvent]


@dataclass(frozen=True)
class DailyCohortSheet:
    cohort_key: str
    rows: list[DailySheetRow]


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        roster: RosterRepository,
        schedules: ScheduleRepository,
        *,
        clock=datetime.now,
    ):
        self._attendance = attendance
        self._roster = roster
        self._schedules = schedules
        self._clock = clock

    def mark(
        self,
        *,
        current_role: Role,
        individual_id: int,
        event_date: date,
        status: AttendanceStatus | str,
        notes: Optional[str] = None,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
    ) -> int:
        """Create or correct the attendance mark for one individual and date."""

        if not Role(current_role).can_manage:
            raise AuthorizationError("You do not have permission to mark attendance")

        try:
            status = AttendanceStatus(status)
        except ValueError as e:
            raise ValidationError(f"Unknown attendance status: {status!r}") from e

        if not self._roster.get_by_id(int(individual_id)):
            raise ValidationError("Roster member not found")
        if any(t is not None and t.tzinfo is not None for t in (check_in_time, check_out_time)):
            raise ValidationError("Check-in and check-out must be local times")
        if check_in_time and check_out_time and check_out_time < check_in_time:
            raise ValidationError("Check-out must be after check-in")

        notes = notes.strip() if notes and notes.strip() else None
        record_id = self._attendance.upsert(
            individual_id=int(individual_id),
            event_date=event_date,
            status=status,
            marked_at=self._clock(),
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            notes=notes,
        )
        log.debug("marked %s %s as %s (record %s)", individual_id, event_date, status.value, record_id)
        return record_id

    def daily_sheet(self, day: date, *, cohort_order: Optional[Sequence[str]] = None) -> list[DailyCohortSheet]:
        """Who is expected at practice on ``day``, grouped by cohort."""

        attendees = expected_on(day, self._roster.list_all(), self._schedules.list_all())
        events = latest_per_date(self._attendance.list_range(start=day, end=day))
        by_individual = {e.individual_id: e for e in events}

        grouped: dict[str, list[DailySheetRow]] = {}
        for attendee in attendees:
            key = attendee.individual.effective_cohort or UNKNOWN_COHORT
            grouped.setdefault(key, []).append(
                DailySheetRow(attendee=attendee, event=by_individual.get(attendee.individual.individual_id))
            )

        return [DailyCohortSheet(cohort_key=k, rows=grouped[k]) for k in sort_cohorts(grouped, cohort_order)]
