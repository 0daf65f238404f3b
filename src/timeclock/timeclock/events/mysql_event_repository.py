from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import EventKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_utc_naive, to_utc_naive
from .model import TimeEvent
from .repository import EventRepository

_COLUMNS = "event_id, employee_id, kind, event_time, created_at"


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _map(self, r) -> TimeEvent:
        return TimeEvent(
            employee_id=int(r["employee_id"]),
            kind=EventKind(r["kind"]),
            timestamp=from_utc_naive(r["event_time"]),
            event_id=int(r["event_id"]),
            created_at=from_utc_naive(r.get("created_at")),
        )

    def list_for_employee(self, employee_id: int, start: datetime, end: datetime) -> Sequence[TimeEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_events
                WHERE employee_id=%s AND event_time >= %s AND event_time < %s
                ORDER BY event_time, event_id
                """,
                (employee_id, to_utc_naive(start), to_utc_naive(end)),
            )
            return [self._map(r) for r in fetchall(cur)]

    def recent_for_employee(self, employee_id: int, limit: int) -> Sequence[TimeEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_events
                WHERE employee_id=%s
                ORDER BY event_time DESC, event_id DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [self._map(r) for r in fetchall(cur)]

    def latest_session_events(self, employee_id: int) -> Sequence[TimeEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_events
                WHERE employee_id=%s AND event_time >= (
                    SELECT MAX(event_time) FROM time_events WHERE employee_id=%s AND kind=%s
                )
                ORDER BY event_time, event_id
                """,
                (employee_id, employee_id, EventKind.CLOCK_IN.value),
            )
            return [self._map(r) for r in fetchall(cur)]

    def get(self, event_id: int) -> Optional[TimeEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_events WHERE event_id=%s", (event_id,))
            r = fetchone(cur)
            return self._map(r) if r else None

    def append(self, event: TimeEvent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO time_events (employee_id, kind, event_time) VALUES (%s, %s, %s)",
                (event.employee_id, event.kind.value, to_utc_naive(event.timestamp)),
            )
            return int(cur.lastrowid)

    def delete(self, event_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_events WHERE event_id=%s", (event_id,))
            return cur.rowcount > 0
