from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import WARNING_STREAK_THRESHOLD
from ..core.enums import AttendanceStatus
from ..roster.model import Individual


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one attendance mark for an individual on a date.

    record_id and marked_at order corrections of the same (individual, date);
    the latest one wins.
    """

    individual_id: int
    event_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    notes: Optional[str] = None
    record_id: Optional[int] = None
    marked_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceMetrics:
    total_scheduled: int
    present: int
    late: int
    absent: int
    left_early: int
    unmarked: int
    percentage: Optional[int]
    streak_length: int
    most_recent_absence_date: Optional[date] = None

    @property
    def attended_count(self) -> int:
        return self.present + self.late + self.left_early

    @property
    def applicable(self) -> bool:
        return self.total_scheduled > 0

    @property
    def in_warning(self) -> bool:
        return self.streak_length >= WARNING_STREAK_THRESHOLD


@dataclass(frozen=True)
class IndividualAttendance:
    individual: Individual
    metrics: AttendanceMetrics


@dataclass(frozen=True)
class CohortMetrics:
    cohort_key: str
    individual_count: int
    average_percentage: int
    warning_count: int


@dataclass(frozen=True)
class OverallMetrics:
    individual_count: int
    average_percentage: int
    warning_count: int


@dataclass(frozen=True)
class MonthlyAttendance:
    year: int
    month: int
    label: str
    metrics: AttendanceMetrics
