from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_utc_naive, to_utc_naive
from .model import SessionUser
from .session_store import SessionStore


class MySQLSessionStore(SessionStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, token: str, session: SessionUser) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions (token, user_id, employee_id, role, expires_at)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (token, session.user_id, session.employee_id, session.role.value, to_utc_naive(session.expires_at)),
            )

    def get(self, token: str) -> Optional[SessionUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, employee_id, role, expires_at FROM sessions WHERE token=%s",
                (token,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SessionUser(
                user_id=int(r["user_id"]),
                employee_id=int(r["employee_id"]) if r["employee_id"] is not None else None,
                role=Role(r["role"]),
                expires_at=from_utc_naive(r["expires_at"]),
            )

    def delete(self, token: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE token=%s", (token,))
            return cur.rowcount > 0

    def purge_expired(self, *, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE expires_at <= %s", (to_utc_naive(now),))
            return int(cur.rowcount)
