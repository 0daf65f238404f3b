"""Fold clock events into work sessions and worked-hours totals.

All functions are pure: the caller supplies the events (and, for open
sessions, the `as_of` instant); nothing reads the wall clock.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import hours_between, local_date, minutes_between
from ..core.enums import EventKind
from ..events.model import TimeEvent
from ..events.sequence import apply_transition, check_ordering
from .model import WorkSession, WorkedHoursResult


class _OpenSession:
    def __init__(self, employee_id: int, clock_in: datetime):
        self.employee_id = employee_id
        self.clock_in = clock_in
        self.lunch_minutes = 0.0
        self.unpaid_minutes = 0.0
        self.lunch_recorded = False
        self.lunch_start: Optional[datetime] = None
        self.unpaid_start: Optional[datetime] = None

    def close(self, clock_out: Optional[datetime]) -> WorkSession:
        return WorkSession(
            employee_id=self.employee_id,
            clock_in=self.clock_in,
            clock_out=clock_out,
            lunch_minutes=self.lunch_minutes,
            unpaid_minutes=self.unpaid_minutes,
            lunch_recorded=self.lunch_recorded,
            lunch_start=self.lunch_start if clock_out is None else None,
            unpaid_start=self.unpaid_start if clock_out is None else None,
        )


def fold_sessions(events: Sequence[TimeEvent]) -> list[WorkSession]:
    """Pair events into sessions; a trailing open session has clock_out=None.

    Raises AlreadyClockedIn, NoActiveSession or InconsistentSequence on
    malformed input. A break left open at the end of the stream stays on the
    open session as `lunch_start` or `unpaid_start`.
    """

    events = list(events)
    check_ordering(events)

    sessions: list[WorkSession] = []
    open_pairs: set[str] = set()
    current: Optional[_OpenSession] = None

    for event in events:
        apply_transition(open_pairs, event)
        kind = event.kind

        if kind == EventKind.CLOCK_IN:
            current = _OpenSession(event.employee_id, event.timestamp)
        elif kind == EventKind.CLOCK_OUT:
            sessions.append(current.close(event.timestamp))
            current = None
        elif kind == EventKind.LUNCH_OUT:
            current.lunch_start = event.timestamp
        elif kind == EventKind.LUNCH_IN:
            current.lunch_minutes += minutes_between(current.lunch_start, event.timestamp)
            current.lunch_recorded = True
            current.lunch_start = None
        elif kind == EventKind.UNPAID_OUT:
            current.unpaid_start = event.timestamp
        elif kind == EventKind.UNPAID_IN:
            current.unpaid_minutes += minutes_between(current.unpaid_start, event.timestamp)
            current.unpaid_start = None

    if current is not None:
        sessions.append(current.close(None))
    return sessions


def reduce_sessions(sessions: Sequence[WorkSession], *, as_of: Optional[datetime] = None) -> WorkedHoursResult:
    total = lunch = unpaid = 0.0
    incomplete = False

    for s in sessions:
        lunch += s.lunch_minutes / 60
        unpaid += s.unpaid_minutes / 60
        if s.clock_out is not None:
            total += hours_between(s.clock_in, s.clock_out)
            continue

        incomplete = True
        if as_of is None:
            continue
        if as_of > s.clock_in:
            total += hours_between(s.clock_in, as_of)
        if s.lunch_start is not None and as_of > s.lunch_start:
            lunch += hours_between(s.lunch_start, as_of)
        if s.unpaid_start is not None and as_of > s.unpaid_start:
            unpaid += hours_between(s.unpaid_start, as_of)

    return WorkedHoursResult.from_components(total=total, lunch=lunch, unpaid=unpaid, incomplete=incomplete)


def reduce_events(events: Sequence[TimeEvent], *, as_of: Optional[datetime] = None) -> WorkedHoursResult:
    """Total/lunch/unpaid/paid hours for a time-ordered event stream.

    An open session at the end yields `incomplete=True`; it only adds time
    when `as_of` is given, and a break still running counts up to `as_of`.
    """

    return reduce_sessions(fold_sessions(events), as_of=as_of)


def sessions_by_day(sessions: Sequence[WorkSession], tz: Optional[tzinfo] = None) -> dict[date, list[WorkSession]]:
    """Group sessions by the local date of their clock-in."""

    grouped: dict[date, list[WorkSession]] = defaultdict(list)
    for s in sessions:
        grouped[local_date(s.clock_in, tz)].append(s)
    return dict(sorted(grouped.items()))


def reduce_by_day(
    events: Sequence[TimeEvent],
    tz: Optional[tzinfo] = None,
    *,
    as_of: Optional[datetime] = None,
) -> dict[date, WorkedHoursResult]:
    return {
        day: reduce_sessions(day_sessions, as_of=as_of)
        for day, day_sessions in sessions_by_day(fold_sessions(events), tz).items()
    }
