"""Conflict checks for recurring practice blocks.

A cohort/sub-group may hold at most one block per weekday. Times are not
compared: two blocks on different weekdays may overlap freely, and blocks of
different cohorts never conflict with each other.

Conflicts are returned as values (``ConflictError`` or ``None``) so a batch
insert can report every clashing weekday at once; the service layer decides
whether to raise.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Union

from ..core.exceptions import ConflictError
from .model import BlockDraft, RecurringBlock

BlockLike = Union[RecurringBlock, BlockDraft]


def _conflicting_weekdays(
    candidates: Sequence[BlockLike],
    existing: Iterable[RecurringBlock],
    exclude_id: Optional[int],
) -> list[int]:
    taken = {b.slot for b in existing if exclude_id is None or b.block_id != exclude_id}
    return [int(c.weekday) for c in candidates if c.slot in taken]


def validate(
    candidate: BlockLike,
    existing: Iterable[RecurringBlock],
    exclude_id: Optional[int] = None,
) -> Optional[ConflictError]:
    """Check one block against the stored ones.

    exclude_id skips the block being edited in place.
    """

    days = _conflicting_weekdays([candidate], existing, exclude_id)
    if not days:
        return None
    return ConflictError(
        cohort_key=candidate.cohort_key,
        sub_group_key=candidate.sub_group_key,
        weekdays=days,
    )


def validate_batch(
    candidates: Sequence[BlockLike],
    existing: Iterable[RecurringBlock],
    exclude_id: Optional[int] = None,
) -> Optional[ConflictError]:
    """Check several blocks (same cohort/sub-group, several weekdays).

    Every conflicting weekday is collected into a single error. Nothing
    should be stored unless this returns None.
    """

    if not candidates:
        return None

    days = _conflicting_weekdays(candidates, list(existing), exclude_id)
    if not days:
        return None

    first = candidates[0]
    return ConflictError(
        cohort_key=first.cohort_key,
        sub_group_key=first.sub_group_key,
        weekdays=days,
    )
