from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, GoalKind
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_utc_naive, to_utc_naive
from .model import AttendanceDay, AttendanceGoal
from .repository import AttendanceRepository, GoalRepository

_DAY_COLUMNS = "employee_id, work_date, status, check_in_time, minutes_late, note"
_GOAL_COLUMNS = "goal_id, name, kind, max_days_missed, max_days_late, display_order, description, is_active"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _map(self, r) -> AttendanceDay:
        return AttendanceDay(
            employee_id=int(r["employee_id"]),
            work_date=r["work_date"],
            status=AttendanceStatus(r["status"]),
            check_in_time=from_utc_naive(r.get("check_in_time")),
            minutes_late=int(r.get("minutes_late") or 0),
            note=r.get("note"),
        )

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_DAY_COLUMNS} FROM attendance_days WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return self._map(r) if r else None

    def create(self, day: AttendanceDay) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO attendance_days ({_DAY_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
                (
                    day.employee_id,
                    day.work_date,
                    day.status.value,
                    to_utc_naive(day.check_in_time) if day.check_in_time else None,
                    day.minutes_late,
                    day.note,
                ),
            )

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[AttendanceDay]:
        sql = f"SELECT {_DAY_COLUMNS} FROM attendance_days WHERE work_date BETWEEN %s AND %s"
        params: list = [start, end]
        if employee_id is not None:
            sql += " AND employee_id=%s"
            params.append(int(employee_id))
        sql += " ORDER BY work_date DESC, employee_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [self._map(r) for r in fetchall(cur)]


class MySQLGoalRepository(GoalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _map(self, r) -> AttendanceGoal:
        return AttendanceGoal(
            goal_id=int(r["goal_id"]),
            name=r["name"],
            kind=GoalKind(r["kind"]),
            max_days_missed=int(r["max_days_missed"]),
            max_days_late=int(r["max_days_late"]),
            display_order=int(r["display_order"]),
            description=r.get("description") or "",
            is_active=bool(r["is_active"]),
        )

    def list_all(self, *, active_only: bool = False) -> Sequence[AttendanceGoal]:
        sql = f"SELECT {_GOAL_COLUMNS} FROM attendance_goals"
        if active_only:
            sql += " WHERE is_active=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY display_order, goal_id")
            return [self._map(r) for r in fetchall(cur)]

    def save(self, goal: AttendanceGoal) -> int:
        values = (
            goal.name,
            goal.kind.value,
            goal.max_days_missed,
            goal.max_days_late,
            goal.display_order,
            goal.description,
            int(goal.is_active),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if goal.goal_id is None:
                cur.execute(
                    """
                    INSERT INTO attendance_goals
                        (name, kind, max_days_missed, max_days_late, display_order, description, is_active)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    """,
                    values,
                )
                return int(cur.lastrowid)

            cur.execute(
                """
                UPDATE attendance_goals
                SET name=%s, kind=%s, max_days_missed=%s, max_days_late=%s,
                    display_order=%s, description=%s, is_active=%s
                WHERE goal_id=%s
                """,
                values + (goal.goal_id,),
            )
            if cur.rowcount == 0:
                cur.execute("SELECT goal_id FROM attendance_goals WHERE goal_id=%s", (goal.goal_id,))
                if not fetchone(cur):
                    raise NotFoundError("Goal not found")
            return int(goal.goal_id)
