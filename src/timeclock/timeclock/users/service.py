from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_utc
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_SESSION_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import Employee, SessionUser
from .repository import EmployeeRepository, UserRepository
from .session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    session: SessionUser
    employee: Optional[Employee]


class AuthService:
    """Use case: authenticate users and resolve bearer tokens."""

    def __init__(
        self,
        users: UserRepository,
        employees: EmployeeRepository,
        sessions: SessionStore,
        *,
        session_hours: int = DEFAULT_SESSION_HOURS,
    ):
        self._users = users
        self._employees = employees
        self._sessions = sessions
        self._session_hours = int(session_hours)

    def login(self, email: str, password: str, *, now: Optional[datetime] = None) -> LoginResult:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False
        if not ok:
            raise AuthenticationError("Invalid email or password")

        employee = self._employees.get_by_user_id(user.user_id)
        now = now or now_utc()
        session = SessionUser(
            user_id=user.user_id,
            employee_id=employee.employee_id if employee else None,
            role=user.role,
            expires_at=now + timedelta(hours=self._session_hours),
        )
        self._sessions.purge_expired(now=now)
        token = secrets.token_hex(32)
        self._sessions.save(token, session)
        logger.info("User %s logged in", user.user_id)
        return LoginResult(token=token, session=session, employee=employee)

    def resolve(self, token: str, *, now: Optional[datetime] = None) -> SessionUser:
        if not token:
            raise AuthenticationError("Missing bearer token")
        session = self._sessions.get(token)
        if not session:
            raise AuthenticationError("Invalid or expired token")
        if session.expires_at <= (now or now_utc()):
            self._sessions.delete(token)
            raise AuthenticationError("Invalid or expired token")
        return session

    def logout(self, token: str) -> None:
        self._sessions.delete(token)


class EmployeeService:
    """Use case: employee directory (admin managed)."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository):
        self._users = users
        self._employees = employees

    def list_all(self, *, current: SessionUser) -> Sequence[Employee]:
        if not current.is_admin:
            raise AuthorizationError("Access denied")
        return self._employees.list_all()

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_visible(self, *, current: SessionUser, employee_id: int) -> Employee:
        employee = self.get(employee_id)
        if not current.is_admin and current.user_id != employee.user_id:
            raise AuthorizationError("Access denied")
        return employee

    def for_session(self, current: SessionUser) -> Employee:
        if current.employee_id is None:
            raise NotFoundError("Employee record not found")
        return self.get(current.employee_id)

    def active_ids(self) -> list[int]:
        return [e.employee_id for e in self._employees.list_all(active_only=True)]

    def create_employee(
        self,
        *,
        current: SessionUser,
        full_name: str,
        email: str,
        password: str,
        role: Role = Role.EMPLOYEE,
    ) -> int:
        if not current.is_admin:
            raise AuthorizationError("Access denied")

        full_name = require_non_empty(full_name, "Full name")
        email = require_email(email)
        require_min_length(password, "Password", 6)
        if self._users.get_by_email(email):
            raise ValidationError("Email already registered")

        user_id = self._users.create_user(email=email, password_hash=generate_password_hash(password), role=role)
        employee_id = self._employees.create_employee(user_id=user_id, full_name=full_name, email=email, role=role)
        logger.info("Employee %s created by user %s", employee_id, current.user_id)
        return employee_id
