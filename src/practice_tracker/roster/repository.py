from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Individual


class RosterRepository(Protocol):
    def list_all(self) -> Sequence[Individual]:
        raise NotImplementedError

    def get_by_id(self, individual_id: int) -> Optional[Individual]:
        raise NotImplementedError
