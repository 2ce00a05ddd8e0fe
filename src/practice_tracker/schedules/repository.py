from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BlockDraft, RecurringBlock


class ScheduleRepository(Protocol):
    def list_all(self) -> Sequence[RecurringBlock]:
        raise NotImplementedError

    def get_by_id(self, block_id: int) -> Optional[RecurringBlock]:
        raise NotImplementedError

    def insert_many(self, drafts: Sequence[BlockDraft]) -> list[int]:
        """Insert all drafts in one transaction.

        Returns the new block ids in draft order.
        """

        raise NotImplementedError

    def update(self, *, block_id: int, draft: BlockDraft) -> bool:
        raise NotImplementedError

    def delete(self, *, block_id: int) -> bool:
        raise NotImplementedError
