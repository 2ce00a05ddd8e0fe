from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Individual
from .repository import RosterRepository

_COLUMNS = "member_id, level, schedule_group, first_name, last_name"


def _to_individual(r: dict) -> Individual:
    name = " ".join(p for p in (r.get("first_name"), r.get("last_name")) if p) or None
    return Individual(
        individual_id=int(r["member_id"]),
        cohort_key=r.get("level") or None,
        sub_group_key=r.get("schedule_group") or None,
        display_name=name,
    )


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Individual]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM roster_members ORDER BY last_name, first_name")
            return [_to_individual(r) for r in fetchall(cur)]

    def get_by_id(self, individual_id: int) -> Optional[Individual]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM roster_members WHERE member_id=%s", (int(individual_id),))
            r = fetchone(cur)
            return _to_individual(r) if r else None
