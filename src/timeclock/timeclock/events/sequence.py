"""Well-formedness checks over one employee's clock events."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..core.enums import ClockStatus, EventKind
from ..core.exceptions import AlreadyClockedIn, InconsistentSequence, NoActiveSession
from .model import CLOSING_KINDS, OPENING_KINDS, TimeEvent


def check_transition(open_pairs: set[str], event: TimeEvent) -> None:
    """Raise if `event` is not a legal next punch given the open pair types.

    Does not mutate `open_pairs`; see `apply_transition`.
    """

    kind = event.kind
    if kind == EventKind.CLOCK_IN:
        if "clock" in open_pairs:
            raise AlreadyClockedIn(f"Employee {event.employee_id} is already clocked in")
        return

    if kind == EventKind.CLOCK_OUT:
        if "clock" not in open_pairs:
            raise NoActiveSession(f"Employee {event.employee_id} has no active clock-in")
        still_open = sorted(open_pairs - {"clock"})
        if still_open:
            raise InconsistentSequence(f"Cannot clock out while on {still_open[0]} break")
        return

    pair = OPENING_KINDS.get(kind) or CLOSING_KINDS[kind]
    if "clock" not in open_pairs:
        raise NoActiveSession(f"{kind.value} requires an active clock-in")

    if kind in OPENING_KINDS:
        if pair in open_pairs:
            raise InconsistentSequence(f"{pair} break already started")
        if len(open_pairs) > 1:
            raise InconsistentSequence("Only one break can be open at a time")
    elif pair not in open_pairs:
        raise InconsistentSequence(f"{kind.value} without a matching {pair} start")


def apply_transition(open_pairs: set[str], event: TimeEvent) -> None:
    check_transition(open_pairs, event)
    if event.kind in OPENING_KINDS:
        open_pairs.add(OPENING_KINDS[event.kind])
    else:
        open_pairs.discard(CLOSING_KINDS[event.kind])


def check_ordering(events: Sequence[TimeEvent]) -> None:
    employee_ids = {e.employee_id for e in events}
    if len(employee_ids) > 1:
        raise InconsistentSequence(f"Events belong to several employees: {sorted(employee_ids)}")

    for prev, cur in zip(events, events[1:]):
        if cur.timestamp < prev.timestamp:
            raise InconsistentSequence(
                f"Events out of order: {cur.kind.value} at {cur.timestamp.isoformat()} "
                f"precedes {prev.kind.value} at {prev.timestamp.isoformat()}"
            )


def validate_sequence(events: Sequence[TimeEvent]) -> set[str]:
    """Validate one employee's time-ordered events.

    Returns the pair types still open at the end ("clock", "lunch",
    "unpaid"); an open pair is not an error, it means "still open".
    """

    events = list(events)
    check_ordering(events)
    open_pairs: set[str] = set()
    for event in events:
        apply_transition(open_pairs, event)
    return open_pairs


def clock_status(events: Iterable[TimeEvent]) -> ClockStatus:
    open_pairs = validate_sequence(list(events))
    if "lunch" in open_pairs:
        return ClockStatus.ON_LUNCH
    if "unpaid" in open_pairs:
        return ClockStatus.ON_UNPAID_BREAK
    if "clock" in open_pairs:
        return ClockStatus.CLOCKED_IN
    return ClockStatus.CLOCKED_OUT
