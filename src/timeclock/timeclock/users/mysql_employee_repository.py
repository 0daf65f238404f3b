from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, user_id, full_name, email, role, is_active, created_at"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _map(self, r) -> Employee:
        return Employee(
            employee_id=int(r["employee_id"]),
            user_id=int(r["user_id"]),
            full_name=r["full_name"],
            email=r["email"],
            role=Role(r["role"]),
            is_active=bool(r["is_active"]),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return self._map(r) if r else None

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return self._map(r) if r else None

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        sql = f"SELECT {_COLUMNS} FROM employees"
        if active_only:
            sql += " WHERE is_active=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY employee_id")
            return [self._map(r) for r in fetchall(cur)]

    def create_employee(self, *, user_id: int, full_name: str, email: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO employees (user_id, full_name, email, role) VALUES (%s, %s, %s, %s)",
                (user_id, full_name, email, role.value),
            )
            return int(cur.lastrowid)
