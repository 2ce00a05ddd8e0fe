from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def list_range(
        self,
        *,
        start: date,
        end: date,
        individual_id: Optional[int] = None,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        individual_id: int,
        event_date: date,
        status: AttendanceStatus,
        marked_at: datetime,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create or correct the mark for (individual, date).

        Returns record_id.
        """

        raise NotImplementedError
