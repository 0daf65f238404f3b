from datetime import datetime, timezone

import pytest

from src.timeclock.timeclock.core.enums import ClockStatus, EventKind
from src.timeclock.timeclock.core.exceptions import InconsistentSequence, NoActiveSession
from src.timeclock.timeclock.events.model import TimeEvent
from src.timeclock.timeclock.events.sequence import check_transition, clock_status, validate_sequence


def ev(kind, hour, minute=0):
    return TimeEvent(employee_id=1, kind=kind, timestamp=datetime(2025, 1, 6, hour, minute, tzinfo=timezone.utc))


def test_validate_sequence_reports_open_pairs():
    assert validate_sequence([ev(EventKind.CLOCK_IN, 8), ev(EventKind.LUNCH_OUT, 12)]) == {"clock", "lunch"}
    assert validate_sequence([ev(EventKind.CLOCK_IN, 8), ev(EventKind.CLOCK_OUT, 17)]) == set()


def test_check_transition_does_not_mutate_on_rejection():
    open_pairs: set[str] = set()

    with pytest.raises(NoActiveSession):
        check_transition(open_pairs, ev(EventKind.CLOCK_OUT, 17))

    assert open_pairs == set()


def test_only_one_break_at_a_time():
    events = [ev(EventKind.CLOCK_IN, 8), ev(EventKind.LUNCH_OUT, 12), ev(EventKind.UNPAID_OUT, 12, 10)]

    with pytest.raises(InconsistentSequence):
        validate_sequence(events)


def test_kind_is_coerced_from_string():
    event = TimeEvent(employee_id=1, kind="clock_in", timestamp=datetime(2025, 1, 6, 8, tzinfo=timezone.utc))

    assert event.kind is EventKind.CLOCK_IN


@pytest.mark.parametrize(
    "events, expected",
    [
        ([], ClockStatus.CLOCKED_OUT),
        ([ev(EventKind.CLOCK_IN, 8)], ClockStatus.CLOCKED_IN),
        ([ev(EventKind.CLOCK_IN, 8), ev(EventKind.LUNCH_OUT, 12)], ClockStatus.ON_LUNCH),
        ([ev(EventKind.CLOCK_IN, 8), ev(EventKind.UNPAID_OUT, 10)], ClockStatus.ON_UNPAID_BREAK),
        ([ev(EventKind.CLOCK_IN, 8), ev(EventKind.CLOCK_OUT, 17)], ClockStatus.CLOCKED_OUT),
    ],
)
def test_clock_status(events, expected):
    assert clock_status(events) == expected
