from __future__ import annotations

import logging
from datetime import time
from typing import Iterable, Optional, Sequence

from ..common.validators import require_non_empty, require_time_order, require_weekdays
from ..core.constants import DEFAULT_SUB_GROUP
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import BlockDraft, RecurringBlock
from .repository import ScheduleRepository
from .validator import validate, validate_batch

log = logging.getLogger(__name__)


def _require_manager(current_role: Role) -> None:
    if not Role(current_role).can_manage:
        raise AuthorizationError("You do not have permission to manage schedules")


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def list_blocks(self) -> list[RecurringBlock]:
        return sorted(
            self._schedules.list_all(),
            key=lambda b: (b.weekday, b.start_time, b.cohort_key, b.sub_group_key),
        )

    def _drafts(
        self,
        *,
        cohort_key: str,
        sub_group_key: Optional[str],
        weekdays: Iterable[int],
        start_time: time,
        end_time: time,
        group_label: Optional[str],
        is_external: bool,
    ) -> list[BlockDraft]:
        cohort_key = require_non_empty(
            cohort_key, "Group name" if is_external else "Level"
        )
        sub_group_key = (sub_group_key or "").strip() or DEFAULT_SUB_GROUP
        days = require_weekdays(weekdays)
        require_time_order(start_time, end_time)
        label = group_label.strip() if group_label and group_label.strip() else None

        return [
            BlockDraft(
                cohort_key=cohort_key,
                sub_group_key=sub_group_key,
                weekday=d,
                start_time=start_time,
                end_time=end_time,
                group_label=label,
                is_external=bool(is_external),
            )
            for d in days
        ]

    def add_blocks(
        self,
        *,
        current_role: Role,
        cohort_key: str,
        sub_group_key: Optional[str],
        weekdays: Sequence[int],
        start_time: time,
        end_time: time,
        group_label: Optional[str] = None,
        is_external: bool = False,
    ) -> list[int]:
        """Add one block per weekday; all of them or none.

        Raises ConflictError listing every weekday that is already taken.
        """

        _require_manager(current_role)
        drafts = self._drafts(
            cohort_key=cohort_key,
            sub_group_key=sub_group_key,
            weekdays=weekdays,
            start_time=start_time,
            end_time=end_time,
            group_label=group_label,
            is_external=is_external,
        )

        conflict = validate_batch(drafts, self._schedules.list_all())
        if conflict:
            log.info("rejected blocks for %s/%s: %s", conflict.cohort_key, conflict.sub_group_key, conflict.weekday_names)
            raise conflict

        ids = self._schedules.insert_many(drafts)
        log.info("added %d block(s) for %s/%s", len(ids), drafts[0].cohort_key, drafts[0].sub_group_key)
        return ids

    def edit_block(
        self,
        *,
        current_role: Role,
        block_id: int,
        cohort_key: str,
        sub_group_key: Optional[str],
        weekday: int,
        start_time: time,
        end_time: time,
        group_label: Optional[str] = None,
        is_external: bool = False,
    ) -> None:
        _require_manager(current_role)
        if not self._schedules.get_by_id(int(block_id)):
            raise ValidationError("Schedule not found")

        (draft,) = self._drafts(
            cohort_key=cohort_key,
            sub_group_key=sub_group_key,
            weekdays=[weekday],
            start_time=start_time,
            end_time=end_time,
            group_label=group_label,
            is_external=is_external,
        )

        conflict = validate(draft, self._schedules.list_all(), exclude_id=int(block_id))
        if conflict:
            raise conflict

        self._schedules.update(block_id=int(block_id), draft=draft)
        log.info("updated block %s", block_id)

    def delete(self, *, current_role: Role, block_id: int) -> None:
        _require_manager(current_role)

        if not self._schedules.delete(block_id=int(block_id)):
            raise ValidationError("Schedule not found")
        log.info("deleted block %s", block_id)
