from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import VacationBalance
from .repository import VacationRepository


class MySQLVacationRepository(VacationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int, year: int) -> Optional[VacationBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, year, allotted_hours, used_hours
                FROM vacation_balances
                WHERE employee_id=%s AND year=%s
                """,
                (employee_id, year),
            )
            r = fetchone(cur)
            if not r:
                return None
            return VacationBalance(
                employee_id=int(r["employee_id"]),
                year=int(r["year"]),
                allotted_hours=float(r["allotted_hours"]) if r["allotted_hours"] is not None else None,
                used_hours=float(r["used_hours"] or 0),
            )

    def upsert(self, balance: VacationBalance) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO vacation_balances (employee_id, year, allotted_hours, used_hours)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    allotted_hours=VALUES(allotted_hours),
                    used_hours=VALUES(used_hours)
                """,
                (balance.employee_id, balance.year, balance.allotted_hours, balance.used_hours),
            )
