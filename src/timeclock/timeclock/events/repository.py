from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import TimeEvent


class EventRepository(Protocol):
    """Append-only event log per employee, plus administrative delete."""

    def list_for_employee(self, employee_id: int, start: datetime, end: datetime) -> Sequence[TimeEvent]:
        """Events with start <= timestamp < end, oldest first."""

        raise NotImplementedError

    def recent_for_employee(self, employee_id: int, limit: int) -> Sequence[TimeEvent]:
        """Newest first."""

        raise NotImplementedError

    def latest_session_events(self, employee_id: int) -> Sequence[TimeEvent]:
        """Events from the most recent ClockIn onward, oldest first; empty if none."""

        raise NotImplementedError

    def get(self, event_id: int) -> Optional[TimeEvent]:
        raise NotImplementedError

    def append(self, event: TimeEvent) -> int:
        raise NotImplementedError

    def delete(self, event_id: int) -> bool:
        raise NotImplementedError
