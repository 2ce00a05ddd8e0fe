"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SUB_GROUP = "A"
UNKNOWN_COHORT = "Unknown"

WARNING_STREAK_THRESHOLD = 3

GOOD_ATTENDANCE_PERCENT = 90
FAIR_ATTENDANCE_PERCENT = 75

DEFAULT_PRACTICE_START = "16:00"
DEFAULT_PRACTICE_END = "20:00"

DEFAULT_HISTORY_MONTHS = 6
MAX_HISTORY_MONTHS = 24
DEFAULT_WEEK_RANGE_DAYS = 7

DAYS_OF_WEEK = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
