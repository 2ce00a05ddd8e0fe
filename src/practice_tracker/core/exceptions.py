from __future__ import annotations

from typing import Iterable

from .constants import DAYS_OF_WEEK


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConflictError(ValidationError):
    """One or more weekdays already hold a block for a cohort/sub-group.

    Carries every conflicting weekday so the caller can show all of them at
    once instead of the first one only.
    """

    def __init__(self, *, cohort_key: str, sub_group_key: str, weekdays: Iterable[int]):
        self.cohort_key = cohort_key
        self.sub_group_key = sub_group_key
        self.weekdays = sorted(set(int(d) for d in weekdays))
        super().__init__(
            f"A schedule already exists for {cohort_key} Group {sub_group_key} "
            f"on {', '.join(self.weekday_names)}"
        )

    @property
    def weekday_names(self) -> list[str]:
        return [DAYS_OF_WEEK[d] for d in self.weekdays]


class InvalidRangeError(ValidationError):
    """Raised when a date range ends before it starts."""
