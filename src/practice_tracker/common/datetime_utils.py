from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.constants import DEFAULT_WEEK_RANGE_DAYS
from ..core.enums import RangePreset
from ..core.exceptions import InvalidRangeError, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str) -> time:
    """Parse 'HH:MM' or 'HH:MM:SS' into a time."""
    parts = (value or "").strip().split(":")
    if len(parts) < 2:
        raise ValidationError(f"Invalid time: {value!r}")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)
    except ValueError as e:
        raise ValidationError(f"Invalid time: {value!r}") from e


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()


def sunday_weekday(day: date) -> int:
    """Weekday index with Sunday=0 ... Saturday=6."""
    return day.isoweekday() % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date in [start, end]; nothing when end < start."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def require_range(start: date, end: date) -> None:
    if end < start:
        raise InvalidRangeError(
            f"Range end {end.isoformat()} is before range start {start.isoformat()}"
        )


def resolve_range(
    preset: RangePreset | str,
    *,
    today: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> tuple[date, date]:
    """Turn a report range preset into concrete dates.

    - week: the last 7 days through today
    - month: first day of the current month through today (days after today
      are not counted as scheduled yet)
    - custom: explicit start/end, both required
    """

    today = today or today_local()
    try:
        preset = RangePreset(preset)
    except ValueError as e:
        raise ValidationError(f"Unknown range: {preset!r}") from e

    if preset is RangePreset.WEEK:
        return today - timedelta(days=DEFAULT_WEEK_RANGE_DAYS), today
    if preset is RangePreset.MONTH:
        return today.replace(day=1), today

    if start is None or end is None:
        raise ValidationError("Custom range needs both start and end")
    require_range(start, end)
    return start, end
