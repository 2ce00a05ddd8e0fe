from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import iter_days, sunday_weekday
from ..roster.model import Individual
from .model import RecurringBlock


@dataclass(frozen=True)
class ExpectedAttendee:
    individual: Individual
    block: RecurringBlock

    @property
    def expected_start(self) -> time:
        return self.block.start_time

    @property
    def expected_end(self) -> time:
        return self.block.end_time


def blocks_for(individual: Individual, blocks: Iterable[RecurringBlock]) -> list[RecurringBlock]:
    """Blocks whose cohort and sub-group match the individual."""
    cohort = individual.effective_cohort
    if not cohort:
        return []

    group = individual.effective_sub_group
    return [b for b in blocks if b.cohort_key.strip() == cohort and b.sub_group_key.strip() == group]


def expand(
    individual: Individual,
    blocks: Iterable[RecurringBlock],
    range_start: date,
    range_end: date,
) -> list[date]:
    """Concrete practice dates for one individual in [range_start, range_end].

    Ascending and without duplicates. Empty when nothing matches or the range
    is reversed.
    """

    weekdays = {int(b.weekday) for b in blocks_for(individual, blocks)}
    if not weekdays or range_start > range_end:
        return []

    return [d for d in iter_days(range_start, range_end) if sunday_weekday(d) in weekdays]


def expected_on(
    day: date,
    roster: Iterable[Individual],
    blocks: Sequence[RecurringBlock],
) -> list[ExpectedAttendee]:
    """Individuals who have practice on ``day``, with the matching block."""

    weekday = sunday_weekday(day)
    todays = [b for b in blocks if int(b.weekday) == weekday]

    out: list[ExpectedAttendee] = []
    for individual in roster:
        matching: Optional[RecurringBlock] = next(iter(blocks_for(individual, todays)), None)
        if matching:
            out.append(ExpectedAttendee(individual=individual, block=matching))
    return out
