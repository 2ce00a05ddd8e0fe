from __future__ import annotations

import math
from typing import Sequence


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(12.5) == 12); percentages
    shown to coaches round 12.5 up to 13.
    """
    return int(math.floor(value + 0.5))


def percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100)


def rounded_mean(values: Sequence[int]) -> int:
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))
