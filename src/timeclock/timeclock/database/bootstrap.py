from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..attendance.model import AttendanceGoal
from ..core.enums import GoalKind, Role
from ..users.model import Employee, User
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = (
    # (full_name, email, password, role)
    ("Admin User", "admin@example.com", "admin123", "admin"),
    ("John Doe", "john.doe@example.com", "employee123", "employee"),
    ("Jane Smith", "jane.smith@example.com", "employee123", "employee"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quotes and `--` comments."""

    buf: list[str] = []
    quote = None
    escape = False

    for line in sql.splitlines(keepends=True):
        if quote is None and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if escape:
                buf.append(ch)
                escape = False
                continue
            if ch == "\\":
                buf.append(ch)
                escape = True
                continue
            if ch in ("'", '"'):
                if quote is None:
                    quote = ch
                elif quote == ch:
                    quote = None
            if ch == ";" and quote is None:
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)
    logger.info("Applied schema %s", schema_path)


def ensure_demo_users(db_config: dict) -> None:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)
        for full_name, email, password, role in DEMO_ACCOUNTS:
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                user_id = int(existing["user_id"])
                cur.execute(
                    "UPDATE users SET password_hash=%s, role=%s, is_active=1 WHERE user_id=%s",
                    (generate_password_hash(password), role, user_id),
                )
            else:
                cur.execute(
                    "INSERT INTO users (email, password_hash, role) VALUES (%s, %s, %s)",
                    (email, generate_password_hash(password), role),
                )
                user_id = int(cur.lastrowid)

            cur.execute("SELECT employee_id FROM employees WHERE user_id=%s", (user_id,))
            if not cur.fetchone():
                cur.execute(
                    "INSERT INTO employees (user_id, full_name, email, role) VALUES (%s, %s, %s, %s)",
                    (user_id, full_name, email, role),
                )
        conn.commit()
        logger.info("Demo accounts ready (%d)", len(DEMO_ACCOUNTS))
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)
    logger.info("Applied seed %s", seed_path)


def demo_goals() -> list[AttendanceGoal]:
    """Same rows as database/seed.sql, for the in-memory backend."""

    return [
        AttendanceGoal(1, "Perfect Attendance", GoalKind.POSITIVE, 0, 0, 1, "No missed days and never late"),
        AttendanceGoal(2, "Reliable", GoalKind.POSITIVE, 1, 2, 2, "At most one missed day and two late arrivals"),
        AttendanceGoal(3, "Needs Improvement", GoalKind.NEGATIVE, 3, 5, 3, "Three or more missed days or five or more late arrivals"),
    ]


def demo_directory() -> tuple[list[User], list[Employee]]:
    """DEMO_ACCOUNTS as in-memory users and employees (ids start at 1)."""

    users: list[User] = []
    employees: list[Employee] = []
    for i, (full_name, email, password, role) in enumerate(DEMO_ACCOUNTS, start=1):
        users.append(User(user_id=i, email=email, password_hash=generate_password_hash(password), role=Role(role)))
        employees.append(Employee(employee_id=i, user_id=i, full_name=full_name, email=email, role=Role(role)))
    return users, employees
