from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import EventKind
from .model import TimeEvent
from .repository import EventRepository


class InMemoryEventRepository(EventRepository):
    """Demo-mode event log (per-process, like the browser-local demo store)."""

    def __init__(self, events: Optional[list[TimeEvent]] = None):
        self._events: dict[int, TimeEvent] = {}
        self._next_id = 1
        for event in events or []:
            self.append(event)

    def list_for_employee(self, employee_id: int, start: datetime, end: datetime) -> Sequence[TimeEvent]:
        items = [
            e for e in self._events.values()
            if e.employee_id == int(employee_id) and start <= e.timestamp < end
        ]
        return sorted(items, key=lambda e: (e.timestamp, e.event_id))

    def recent_for_employee(self, employee_id: int, limit: int) -> Sequence[TimeEvent]:
        items = [e for e in self._events.values() if e.employee_id == int(employee_id)]
        items.sort(key=lambda e: (e.timestamp, e.event_id), reverse=True)
        return items[:limit]

    def latest_session_events(self, employee_id: int) -> Sequence[TimeEvent]:
        items = sorted(
            (e for e in self._events.values() if e.employee_id == int(employee_id)),
            key=lambda e: (e.timestamp, e.event_id),
        )
        starts = [i for i, e in enumerate(items) if e.kind == EventKind.CLOCK_IN]
        return items[starts[-1]:] if starts else []

    def get(self, event_id: int) -> Optional[TimeEvent]:
        return self._events.get(int(event_id))

    def append(self, event: TimeEvent) -> int:
        event_id = self._next_id
        self._next_id += 1
        self._events[event_id] = replace(event, event_id=event_id, created_at=event.created_at or event.timestamp)
        return event_id

    def delete(self, event_id: int) -> bool:
        return self._events.pop(int(event_id), None) is not None
