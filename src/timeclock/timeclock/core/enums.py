from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EventKind(str, Enum):
    """Clock event types as stored in the event log."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    LUNCH_OUT = "lunch_out"
    LUNCH_IN = "lunch_in"
    UNPAID_OUT = "unpaid_out"
    UNPAID_IN = "unpaid_in"


class ClockStatus(str, Enum):
    """Live status derived from the latest events of the day."""

    CLOCKED_OUT = "clocked_out"
    CLOCKED_IN = "clocked_in"
    ON_LUNCH = "on_lunch"
    ON_UNPAID_BREAK = "on_unpaid_break"


class AttendanceStatus(str, Enum):
    """Daily attendance status. UNSCHEDULED is the only non-terminal value."""

    UNSCHEDULED = "unscheduled"
    PRESENT = "present"
    LATE = "late"
    MISSED = "missed"
    EXCUSED = "excused"


class GoalKind(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class PayPeriodType(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"


class ScheduleTemplate(str, Enum):
    """Bulk assignment templates for the weekly schedule grid."""

    EVERY_DAY_FULL = "every_day_full"
    EVERY_DAY_8HOURS = "every_day_8hours"
    WEEKDAYS_ONLY = "weekdays_only"


class DateRangeOption(str, Enum):
    CURRENT_MONTH = "current-month"
    LAST_MONTH = "last-month"
    SELECT_MONTH = "select-month"
    CURRENT_YEAR = "current-year"
    LAST_YEAR = "last-year"
