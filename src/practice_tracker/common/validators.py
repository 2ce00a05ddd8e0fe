from __future__ import annotations

from datetime import time
from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_weekdays(values: Iterable[int]) -> list[int]:
    days: list[int] = []
    for v in values:
        try:
            d = int(v)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid weekday: {v!r}") from e
        if d < 0 or d > 6:
            raise ValidationError(f"Weekday must be between 0 and 6, got {d}")
        if d not in days:
            days.append(d)
    if not days:
        raise ValidationError("Please select at least one day")
    return days


def require_time_order(start: time, end: time) -> None:
    if start >= end:
        raise ValidationError("End time must be after start time")
