from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..common.math_utils import rounded_mean
from ..core.constants import FAIR_ATTENDANCE_PERCENT, GOOD_ATTENDANCE_PERCENT, UNKNOWN_COHORT
from ..core.enums import AttendanceBand
from .model import CohortMetrics, IndividualAttendance, OverallMetrics


def sort_cohorts(keys: Iterable[str], cohort_order: Optional[Sequence[str]] = None) -> list[str]:
    """Configured cohorts first in their configured order, the rest alphabetically."""
    order = {name: i for i, name in enumerate(cohort_order or [])}
    return sorted(
        set(keys),
        key=lambda k: (0, order[k], "") if k in order else (1, 0, k),
    )


def cohort_of(item: IndividualAttendance) -> str:
    return item.individual.effective_cohort or UNKNOWN_COHORT


def _require_applicable(items: Sequence[IndividualAttendance]) -> None:
    for item in items:
        if not item.metrics.applicable:
            raise ValueError(
                f"Individual {item.individual.individual_id} has no expected occurrences; "
                "filter it out before aggregating"
            )


def aggregate(
    individual_metrics: Iterable[IndividualAttendance],
    cohort_order: Optional[Sequence[str]] = None,
) -> list[CohortMetrics]:
    items = list(individual_metrics)
    _require_applicable(items)

    grouped: dict[str, list[IndividualAttendance]] = defaultdict(list)
    for item in items:
        grouped[cohort_of(item)].append(item)

    out: list[CohortMetrics] = []
    for key in sort_cohorts(grouped, cohort_order):
        members = grouped[key]
        out.append(
            CohortMetrics(
                cohort_key=key,
                individual_count=len(members),
                average_percentage=rounded_mean([m.metrics.percentage for m in members]),
                warning_count=sum(1 for m in members if m.metrics.in_warning),
            )
        )
    return out


def overall(individual_metrics: Iterable[IndividualAttendance]) -> OverallMetrics:
    items = list(individual_metrics)
    _require_applicable(items)
    return OverallMetrics(
        individual_count=len(items),
        average_percentage=rounded_mean([m.metrics.percentage for m in items]),
        warning_count=sum(1 for m in items if m.metrics.in_warning),
    )


def attendance_band(percentage: int) -> AttendanceBand:
    if percentage >= GOOD_ATTENDANCE_PERCENT:
        return AttendanceBand.GOOD
    if percentage >= FAIR_ATTENDANCE_PERCENT:
        return AttendanceBand.FAIR
    return AttendanceBand.POOR
