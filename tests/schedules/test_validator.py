from __future__ import annotations

from datetime import time

from practice_tracker.core.exceptions import ConflictError
from practice_tracker.schedules.model import BlockDraft, RecurringBlock
from practice_tracker.schedules.validator import validate, validate_batch


def block(block_id: int, weekday: int, cohort: str = "Level 4", group: str = "A", start=time(16, 0), end=time(19, 0)):
    return RecurringBlock(
        block_id=block_id,
        cohort_key=cohort,
        sub_group_key=group,
        weekday=weekday,
        start_time=start,
        end_time=end,
    )


def draft(weekday: int, cohort: str = "Level 4", group: str = "A", start=time(16, 0), end=time(19, 0)):
    return BlockDraft(cohort_key=cohort, sub_group_key=group, weekday=weekday, start_time=start, end_time=end)


def test_same_cohort_group_and_weekday_conflicts():
    existing = [block(1, weekday=1)]

    err = validate(draft(1), existing)

    assert isinstance(err, ConflictError)
    assert err.weekdays == [1]
    assert err.weekday_names == ["Monday"]
    assert "Monday" in str(err)
    assert "Level 4 Group A" in str(err)


def test_other_weekday_is_accepted():
    existing = [block(1, weekday=1)]

    assert validate(draft(2), existing) is None


def test_other_sub_group_or_cohort_is_accepted():
    existing = [block(1, weekday=1)]

    assert validate(draft(1, group="B"), existing) is None
    assert validate(draft(1, cohort="Level 3"), existing) is None


def test_time_overlap_is_not_checked():
    # Same times on a different weekday, and overlapping times for another cohort on the same day.
    existing = [block(1, weekday=1, start=time(16, 0), end=time(19, 0))]

    assert validate(draft(3, start=time(17, 0), end=time(18, 0)), existing) is None
    assert validate(draft(1, cohort="Level 5", start=time(17, 0), end=time(18, 0)), existing) is None


def test_edit_in_place_excludes_itself():
    existing = [block(7, weekday=1), block(8, weekday=3)]
    edited = block(7, weekday=1, start=time(15, 0), end=time(18, 0))

    assert validate(edited, existing, exclude_id=7) is None


def test_edit_moving_onto_taken_weekday_conflicts():
    existing = [block(7, weekday=1), block(8, weekday=3)]

    err = validate(draft(3), existing, exclude_id=7)

    assert err is not None
    assert err.weekday_names == ["Wednesday"]


def test_validation_returns_error_instead_of_raising():
    existing = [block(1, weekday=1)]

    result = validate(draft(1), existing)

    assert isinstance(result, Exception)


def test_batch_reports_every_conflicting_weekday():
    existing = [block(1, weekday=1), block(2, weekday=5), block(3, weekday=3, group="B")]

    err = validate_batch([draft(5), draft(1), draft(3)], existing)

    assert err is not None
    assert err.weekdays == [1, 5]
    assert err.weekday_names == ["Monday", "Friday"]
    assert str(err) == "A schedule already exists for Level 4 Group A on Monday, Friday"


def test_batch_without_conflicts_passes():
    existing = [block(1, weekday=1)]

    assert validate_batch([draft(2), draft(4)], existing) is None
    assert validate_batch([], existing) is None
