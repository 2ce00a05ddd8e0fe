from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class RecurringBlock:
    """Weekly recurring practice time for one cohort/sub-group.

    weekday uses Sunday=0 ... Saturday=6. External blocks belong to groups
    that are not on the roster and only take part in rotations.
    """

    block_id: int
    cohort_key: str
    sub_group_key: str
    weekday: int
    start_time: time
    end_time: time
    group_label: Optional[str] = None
    is_external: bool = False

    @property
    def slot(self) -> tuple[str, str, int]:
        return (self.cohort_key, self.sub_group_key, int(self.weekday))


@dataclass(frozen=True)
class BlockDraft:
    """A block that has not been stored yet (no id)."""

    cohort_key: str
    sub_group_key: str
    weekday: int
    start_time: time
    end_time: time
    group_label: Optional[str] = None
    is_external: bool = False

    @property
    def slot(self) -> tuple[str, str, int]:
        return (self.cohort_key, self.sub_group_key, int(self.weekday))
