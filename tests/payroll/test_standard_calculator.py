from datetime import datetime, time, timezone

import pytest

from src.timeclock.timeclock.core.exceptions import InvalidConfiguration
from src.timeclock.timeclock.payroll.calculator.base import DayInterval
from src.timeclock.timeclock.payroll.calculator.standard_calculator import (
    StandardPayrollCalculator,
    round_to_increment,
)
from src.timeclock.timeclock.shifts.model import ShiftPolicy

MONDAY = ShiftPolicy(weekday=0, start_time=time(8, 0), end_time=time(17, 0))


def at(hour, minute=0, second=0, day=6):
    return datetime(2025, 1, day, hour, minute, second, tzinfo=timezone.utc)


def paid(interval, policy=MONDAY, lunch=60, increment=15):
    return StandardPayrollCalculator().paid_minutes(
        interval, policy, default_lunch_minutes=lunch, rounding_increment_minutes=increment
    )


def test_early_start_is_clamped_to_shift_start():
    interval = DayInterval(clock_in=at(7, 30), clock_out=at(17), lunch_minutes=30, lunch_recorded=True)

    assert paid(interval) == 8 * 60 + 30


def test_late_end_is_clamped_to_shift_end():
    interval = DayInterval(clock_in=at(8), clock_out=at(17, 40), lunch_minutes=60, lunch_recorded=True)

    assert paid(interval) == 8 * 60


def test_clamping_can_be_disabled():
    policy = ShiftPolicy(weekday=0, clamp_early_start=False)
    interval = DayInterval(clock_in=at(7, 30), clock_out=at(17), lunch_minutes=30, lunch_recorded=True)

    assert paid(interval, policy) == 9 * 60


def test_default_lunch_applies_when_none_recorded():
    interval = DayInterval(clock_in=at(8), clock_out=at(17))

    assert paid(interval) == 8 * 60


def test_no_default_lunch_when_not_required():
    policy = ShiftPolicy(weekday=0, lunch_required=False)
    interval = DayInterval(clock_in=at(8), clock_out=at(17))

    assert paid(interval, policy) == 9 * 60


def test_unpaid_minutes_are_subtracted():
    policy = ShiftPolicy(weekday=0, lunch_required=False)
    interval = DayInterval(clock_in=at(8), clock_out=at(12), unpaid_minutes=30)

    assert paid(interval, policy) == 210


def test_rounding_to_increment():
    policy = ShiftPolicy(weekday=0, lunch_required=False)

    assert paid(DayInterval(clock_in=at(8), clock_out=at(12, 7)), policy) == 240
    assert paid(DayInterval(clock_in=at(8), clock_out=at(12, 8)), policy) == 255
    # exactly half an increment rounds up
    assert paid(DayInterval(clock_in=at(8), clock_out=at(12, 7, 30)), policy) == 255


def test_disabled_day_is_paid_as_punched():
    saturday = ShiftPolicy(weekday=5, enabled=False)
    interval = DayInterval(clock_in=at(6, day=11), clock_out=at(10, day=11))

    assert paid(interval, saturday) == 240


def test_paid_minutes_never_negative():
    interval = DayInterval(clock_in=at(18), clock_out=at(19))

    assert paid(interval) == 0


@pytest.mark.parametrize("lunch, increment", [(-1, 15), (60, 0), (None, 15), (60, None)])
def test_missing_or_invalid_configuration(lunch, increment):
    interval = DayInterval(clock_in=at(8), clock_out=at(17))

    with pytest.raises(InvalidConfiguration):
        paid(interval, lunch=lunch, increment=increment)


def test_round_to_increment_half_up():
    assert round_to_increment(7.5, 15) == 15
    assert round_to_increment(7.4, 15) == 0
    assert round_to_increment(0, 15) == 0


def test_shift_end_must_follow_start():
    with pytest.raises(InvalidConfiguration):
        ShiftPolicy(weekday=0, start_time=time(17, 0), end_time=time(8, 0))
