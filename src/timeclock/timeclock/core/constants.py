"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date, time

DEFAULT_SESSION_HOURS = 12
DEFAULT_HISTORY_LIMIT = 50

DEFAULT_GRACE_MINUTES = 15
DEFAULT_LUNCH_MINUTES = 60
DEFAULT_ROUNDING_INCREMENT_MINUTES = 15

DEFAULT_SHIFT_START = time(8, 0)
DEFAULT_SHIFT_END = time(17, 0)

DEFAULT_PAY_PERIOD_ANCHOR = date(2025, 1, 5)
WEEKLY_PERIOD_DAYS = 7
BIWEEKLY_PERIOD_DAYS = 14

DEFAULT_VACATION_ALLOTMENT_HOURS = 80
DEFAULT_VACATION_ACCRUAL_RATE = 26

# Scheduled spans longer than this get the default lunch deducted.
LUNCH_THRESHOLD_HOURS = 6
TEMPLATE_WORK_HOURS = 8

# Reports read this many days past their end so overnight sessions close.
REPORT_LOOKAHEAD_DAYS = 1
