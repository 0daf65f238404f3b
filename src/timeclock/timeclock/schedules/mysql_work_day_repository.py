from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import WorkDay
from .repository import WorkDayRepository

_COLUMNS = "employee_id, work_date, start_time, end_time, location, is_scheduled, hours, notes"


class MySQLWorkDayRepository(WorkDayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _map(self, r) -> WorkDay:
        return WorkDay(
            employee_id=int(r["employee_id"]),
            work_date=r["work_date"],
            start_time=normalize_mysql_time(r["start_time"]),
            end_time=normalize_mysql_time(r["end_time"]),
            location=r["location"],
            is_scheduled=bool(r["is_scheduled"]),
            hours=float(r["hours"] or 0),
            notes=r.get("notes"),
        )

    def get(self, *, employee_id: int, work_date: date) -> Optional[WorkDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_days WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return self._map(r) if r else None

    def list_range(self, *, employee_id: int, start: date, end: date) -> Sequence[WorkDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_days
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (employee_id, start, end),
            )
            return [self._map(r) for r in fetchall(cur)]

    def upsert(self, day: WorkDay) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO work_days ({_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    start_time=VALUES(start_time),
                    end_time=VALUES(end_time),
                    location=VALUES(location),
                    is_scheduled=VALUES(is_scheduled),
                    hours=VALUES(hours),
                    notes=VALUES(notes)
                """,
                (
                    day.employee_id,
                    day.work_date,
                    day.start_time,
                    day.end_time,
                    day.location,
                    int(day.is_scheduled),
                    round(day.hours, 2),
                    day.notes,
                ),
            )
