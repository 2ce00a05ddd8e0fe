from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import BlockDraft, RecurringBlock
from .repository import ScheduleRepository

_COLUMNS = "schedule_id, level, schedule_group, group_label, day_of_week, start_time, end_time, is_external_group"


def _to_block(r: dict) -> RecurringBlock:
    return RecurringBlock(
        block_id=int(r["schedule_id"]),
        cohort_key=r["level"],
        sub_group_key=r["schedule_group"],
        weekday=int(r["day_of_week"]),
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        group_label=r.get("group_label"),
        is_external=bool(r.get("is_external_group")),
    )


def _params(draft: BlockDraft) -> tuple:
    return (
        draft.cohort_key,
        draft.sub_group_key,
        draft.group_label,
        int(draft.weekday),
        draft.start_time,
        draft.end_time,
        1 if draft.is_external else 0,
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[RecurringBlock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM practice_schedules
                ORDER BY day_of_week, start_time, level, schedule_group
                """
            )
            return [_to_block(r) for r in fetchall(cur)]

    def get_by_id(self, block_id: int) -> Optional[RecurringBlock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM practice_schedules WHERE schedule_id=%s", (int(block_id),))
            r = fetchone(cur)
            return _to_block(r) if r else None

    def insert_many(self, drafts: Sequence[BlockDraft]) -> list[int]:
        ids: list[int] = []
        # One connection/transaction: either every weekday is stored or none.
        with db_cursor(self._conn_factory) as (_, cur):
            for draft in drafts:
                cur.execute(
                    """
                    INSERT INTO practice_schedules
                        (level, schedule_group, group_label, day_of_week, start_time, end_time, is_external_group)
                    VALUES (%s,%s,%s,%s,%s,%s,%s)
                    """,
                    _params(draft),
                )
                ids.append(int(cur.lastrowid))
        return ids

    def update(self, *, block_id: int, draft: BlockDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE practice_schedules
                SET level=%s, schedule_group=%s, group_label=%s, day_of_week=%s,
                    start_time=%s, end_time=%s, is_external_group=%s
                WHERE schedule_id=%s
                """,
                _params(draft) + (int(block_id),),
            )
            return cur.rowcount > 0

    def delete(self, *, block_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM practice_schedules WHERE schedule_id=%s", (int(block_id),))
            return cur.rowcount > 0
