from __future__ import annotations

from datetime import date, time, timedelta

from practice_tracker.roster.model import Individual
from practice_tracker.schedules.expander import blocks_for, expand, expected_on
from practice_tracker.schedules.model import RecurringBlock

MONDAY = 1
WEDNESDAY = 3


def block(block_id: int, weekday: int, cohort: str = "Level 4", group: str = "A"):
    return RecurringBlock(
        block_id=block_id,
        cohort_key=cohort,
        sub_group_key=group,
        weekday=weekday,
        start_time=time(16, 0),
        end_time=time(19, 0),
    )


BLOCKS = [
    block(1, MONDAY),
    block(2, WEDNESDAY),
    block(3, 2, group="B"),
    block(4, 5, cohort="Level 3"),
]


def test_expands_mondays_and_wednesdays_in_february():
    ava = Individual(individual_id=1, cohort_key="Level 4", sub_group_key="A")

    days = expand(ava, BLOCKS, date(2026, 2, 1), date(2026, 2, 28))

    assert days == [
        date(2026, 2, 2),
        date(2026, 2, 4),
        date(2026, 2, 9),
        date(2026, 2, 11),
        date(2026, 2, 16),
        date(2026, 2, 18),
        date(2026, 2, 23),
        date(2026, 2, 25),
    ]


def test_range_bounds_are_inclusive():
    ava = Individual(individual_id=1, cohort_key="Level 4", sub_group_key="A")

    assert expand(ava, BLOCKS, date(2026, 2, 2), date(2026, 2, 4)) == [date(2026, 2, 2), date(2026, 2, 4)]
    assert expand(ava, BLOCKS, date(2026, 2, 2), date(2026, 2, 2)) == [date(2026, 2, 2)]


def test_missing_sub_group_defaults_to_a():
    no_group = Individual(individual_id=1, cohort_key="Level 4", sub_group_key=None)
    blank_group = Individual(individual_id=2, cohort_key="Level 4", sub_group_key="  ")

    assert [b.block_id for b in blocks_for(no_group, BLOCKS)] == [1, 2]
    assert [b.block_id for b in blocks_for(blank_group, BLOCKS)] == [1, 2]


def test_sub_group_b_gets_only_its_own_days():
    lily = Individual(individual_id=3, cohort_key="Level 4", sub_group_key="B")

    days = expand(lily, BLOCKS, date(2026, 2, 1), date(2026, 2, 14))

    assert days == [date(2026, 2, 3), date(2026, 2, 10)]


def test_no_matching_blocks_or_no_cohort_gives_nothing():
    unassigned = Individual(individual_id=5, cohort_key=None)
    other_level = Individual(individual_id=6, cohort_key="Level 9")

    assert expand(unassigned, BLOCKS, date(2026, 2, 1), date(2026, 2, 28)) == []
    assert expand(other_level, BLOCKS, date(2026, 2, 1), date(2026, 2, 28)) == []


def test_reversed_range_is_empty_not_an_error():
    ava = Individual(individual_id=1, cohort_key="Level 4")

    assert expand(ava, BLOCKS, date(2026, 2, 28), date(2026, 2, 1)) == []


def test_blocks_sharing_a_weekday_do_not_duplicate_dates():
    ava = Individual(individual_id=1, cohort_key="Level 4")
    doubled = [block(1, MONDAY), block(9, MONDAY)]

    days = expand(ava, doubled, date(2026, 2, 1), date(2026, 2, 28))

    assert days == [date(2026, 2, 2), date(2026, 2, 9), date(2026, 2, 16), date(2026, 2, 23)]


def test_count_matches_weekday_scan_and_is_idempotent():
    ava = Individual(individual_id=1, cohort_key="Level 4")
    start = date(2025, 12, 20)

    for length in (0, 1, 6, 7, 30, 95):
        end = start + timedelta(days=length)
        # date.weekday(): Monday=0 ... Sunday=6
        scan = [start + timedelta(days=i) for i in range(length + 1)]
        wanted = [d for d in scan if d.weekday() in (0, 2)]

        first = expand(ava, BLOCKS, start, end)
        second = expand(ava, BLOCKS, start, end)

        assert first == wanted
        assert first == second
        assert first == sorted(set(first))


def test_sunday_is_weekday_zero():
    ava = Individual(individual_id=1, cohort_key="Level 4")

    days = expand(ava, [block(1, 0)], date(2026, 2, 1), date(2026, 2, 10))

    assert days == [date(2026, 2, 1), date(2026, 2, 8)]


def test_expected_on_lists_attendees_with_their_block():
    roster = [
        Individual(individual_id=1, cohort_key="Level 4", sub_group_key="A"),
        Individual(individual_id=2, cohort_key="Level 4"),
        Individual(individual_id=3, cohort_key="Level 4", sub_group_key="B"),
        Individual(individual_id=4, cohort_key="Level 3"),
        Individual(individual_id=5, cohort_key=None),
    ]

    attendees = expected_on(date(2026, 2, 2), roster, BLOCKS)

    assert [a.individual.individual_id for a in attendees] == [1, 2]
    assert attendees[0].expected_start == time(16, 0)
    assert attendees[0].expected_end == time(19, 0)


def test_padded_cohort_name_still_matches():
    ava = Individual(individual_id=1, cohort_key="Level 4 ", sub_group_key=" A")

    assert ava.effective_cohort == "Level 4"
    assert expand(ava, BLOCKS, date(2026, 2, 1), date(2026, 2, 7)) == [date(2026, 2, 2), date(2026, 2, 4)]


def test_blank_cohort_name_has_no_practices():
    assert expand(Individual(1, "   "), BLOCKS, date(2026, 2, 1), date(2026, 2, 7)) == []
