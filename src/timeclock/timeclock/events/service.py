from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import ClockStatus, EventKind
from ..core.exceptions import AuthorizationError, InconsistentSequence, NotFoundError
from ..users.model import SessionUser
from .model import TimeEvent
from .repository import EventRepository
from .sequence import check_transition, clock_status, validate_sequence

logger = logging.getLogger(__name__)

ACTIONS = {
    "clock-in": EventKind.CLOCK_IN,
    "clock-out": EventKind.CLOCK_OUT,
    "lunch-out": EventKind.LUNCH_OUT,
    "lunch-in": EventKind.LUNCH_IN,
    "unpaid-out": EventKind.UNPAID_OUT,
    "unpaid-in": EventKind.UNPAID_IN,
}


@dataclass(frozen=True)
class ClockState:
    status: ClockStatus
    events: Sequence[TimeEvent]

    @property
    def is_on_lunch(self) -> bool:
        return self.status == ClockStatus.ON_LUNCH


class ClockService:
    """Use case: record punches for one employee.

    The store is the single writer per employee; this service only validates
    the requested transition against the employee's latest session, however
    long ago it was opened, and rejects it before anything is written.
    """

    def __init__(self, events: EventRepository):
        self._events = events

    def _session_events(self, employee_id: int) -> list[TimeEvent]:
        return list(self._events.latest_session_events(employee_id))

    def state(self, employee_id: int) -> ClockState:
        events = self._session_events(employee_id)
        return ClockState(status=clock_status(events), events=events)

    def record(self, employee_id: int, kind: EventKind, *, now: Optional[datetime] = None) -> TimeEvent:
        now = now or now_utc()
        event = TimeEvent(employee_id=int(employee_id), kind=EventKind(kind), timestamp=now)

        events = self._session_events(employee_id)
        if events and now < events[-1].timestamp:
            raise InconsistentSequence("Punch is earlier than the last recorded punch")

        try:
            open_pairs = validate_sequence(events)
            check_transition(open_pairs, event)
        except InconsistentSequence as e:
            logger.warning("Rejected %s for employee %s: %s", event.kind.value, employee_id, e)
            raise

        event_id = self._events.append(event)
        return self._events.get(event_id) or event

    def record_action(self, employee_id: int, action: str, *, now: Optional[datetime] = None) -> TimeEvent:
        kind = ACTIONS.get(action)
        if kind is None:
            raise NotFoundError(f"Unknown clock action: {action}")
        return self.record(employee_id, kind, now=now)

    def history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[TimeEvent]:
        return self._events.recent_for_employee(employee_id, limit)

    def delete_event(self, *, current: SessionUser, employee_id: int, event_id: int) -> None:
        """Administrative correction; the only way an event leaves the log."""

        if not current.is_admin:
            raise AuthorizationError("Only admins can delete time entries")
        event = self._events.get(event_id)
        if not event or event.employee_id != int(employee_id):
            raise NotFoundError("Time entry not found")
        self._events.delete(event_id)
        logger.info(
            "Admin %s deleted %s event %s of employee %s",
            current.user_id, event.kind.value, event_id, employee_id,
        )

