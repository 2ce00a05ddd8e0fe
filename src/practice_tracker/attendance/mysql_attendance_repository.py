from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import AttendanceEvent
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(
        self,
        *,
        start: date,
        end: date,
        individual_id: Optional[int] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses = ["attendance_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if individual_id is not None:
            clauses.append("member_id=%s")
            params.append(int(individual_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_id, member_id, attendance_date, status,
                       check_in_time, check_out_time, notes, marked_at
                FROM attendance_records
                WHERE {where}
                ORDER BY attendance_date ASC, member_id ASC, record_id ASC
                """,
                tuple(params),
            )
            return [
                AttendanceEvent(
                    individual_id=int(r["member_id"]),
                    event_date=normalize_mysql_date(r["attendance_date"]),
                    status=AttendanceStatus(r["status"]),
                    check_in_time=r.get("check_in_time"),
                    check_out_time=r.get("check_out_time"),
                    notes=r.get("notes"),
                    record_id=int(r["record_id"]),
                    marked_at=r.get("marked_at"),
                )
                for r in fetchall(cur)
            ]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records
                    (member_id, attendance_date, status, check_in_time, check_out_time, notes, marked_at)
                VALUES (%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time),
                    notes=VALUES(notes),
                    marked_at=VALUES(marked_at)
                """,
                (int(individual_id), event_date, status.value, check_in_time, check_out_time, notes, marked_at),
            )

            # If it was an update, lastrowid can be 0; fetch record_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT record_id FROM attendance_records WHERE member_id=%s AND attendance_date=%s",
                (int(individual_id), event_date),
            )
            r = fetchone(cur)
            return int(r["record_id"]) if r else 0
