from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import AttendanceReportService
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterRepository
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService


@dataclass(frozen=True)
class Container:
    roster_repo: RosterRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository

    schedule_service: ScheduleService
    attendance_service: AttendanceService
    report_service: AttendanceReportService

    cohort_order: tuple[str, ...] = ()


def build_services(
    *,
    roster_repo: RosterRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    cohort_order: Optional[Sequence[str]] = None,
) -> Container:
    order = tuple(cohort_order or ())
    return Container(
        roster_repo=roster_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        schedule_service=ScheduleService(schedules_repo),
        attendance_service=AttendanceService(attendance_repo, roster_repo, schedules_repo),
        report_service=AttendanceReportService(roster_repo, schedules_repo, attendance_repo, cohort_order=order),
        cohort_order=order,
    )


def build_container(*, db_config: dict, cohort_order: Optional[Sequence[str]] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        roster_repo=MySQLRosterRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        cohort_order=cohort_order,
    )
