"""Example: run the schedule engine on plain data (no Flask, no database).

expand -> reconcile per individual -> aggregate, the same path the report
service takes after loading its inputs.
"""

from datetime import date, time

from practice_tracker.attendance.aggregator import aggregate, overall
from practice_tracker.attendance.model import AttendanceEvent, IndividualAttendance
from practice_tracker.attendance.reconciler import latest_per_date, reconcile
from practice_tracker.core.enums import AttendanceStatus
from practice_tracker.roster.model import Individual
from practice_tracker.schedules.expander import expand
from practice_tracker.schedules.model import BlockDraft, RecurringBlock
from practice_tracker.schedules.validator import validate_batch


def main():
    blocks = [
        RecurringBlock(1, "Level 4", "A", 1, time(16, 0), time(19, 0)),
        RecurringBlock(2, "Level 4", "A", 3, time(16, 0), time(19, 0)),
    ]
    roster = [Individual(1, "Level 4", None, "Ava Nguyen"), Individual(2, "Level 4", "A", "Mia Tran")]
    events = [
        AttendanceEvent(1, date(2026, 2, 2), AttendanceStatus.PRESENT),
        AttendanceEvent(2, date(2026, 2, 2), AttendanceStatus.ABSENT),
        AttendanceEvent(2, date(2026, 2, 4), AttendanceStatus.ABSENT),
    ]

    start, end = date(2026, 2, 1), date(2026, 2, 7)
    results = []
    for person in roster:
        expected = expand(person, blocks, start, end)
        mine = [e for e in latest_per_date(events) if e.individual_id == person.individual_id]
        results.append(IndividualAttendance(person, reconcile(expected, mine)))

    for r in results:
        print(r.individual.display_name, r.metrics)
    print(aggregate(results, ["Level 4"]))
    print(overall(results))

    draft = BlockDraft("Level 4", "A", 1, time(17, 0), time(20, 0))
    print(validate_batch([draft], blocks))


if __name__ == "__main__":
    main()
