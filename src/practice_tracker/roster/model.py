from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_SUB_GROUP


@dataclass(frozen=True)
class Individual:
    """Roster member as seen by the schedule engine.

    Created and removed by roster management; the engine only reads it.
    """

    individual_id: int
    cohort_key: Optional[str]
    sub_group_key: Optional[str] = None
    display_name: Optional[str] = None

    @property
    def effective_cohort(self) -> Optional[str]:
        if self.cohort_key and self.cohort_key.strip():
            return self.cohort_key.strip()
        return None

    @property
    def effective_sub_group(self) -> str:
        if self.sub_group_key and self.sub_group_key.strip():
            return self.sub_group_key.strip()
        return DEFAULT_SUB_GROUP
