from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for authorization of mutating operations."""

    ADMIN = "admin"
    COACH = "coach"
    MEMBER = "member"

    @property
    def can_manage(self) -> bool:
        return self in (Role.ADMIN, Role.COACH)


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    LEFT_EARLY = "left_early"

    @property
    def attended(self) -> bool:
        return self is not AttendanceStatus.ABSENT


class AttendanceBand(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class RangePreset(str, Enum):
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"
