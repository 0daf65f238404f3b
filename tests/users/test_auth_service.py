from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from werkzeug.security import generate_password_hash

from src.timeclock.timeclock.core.enums import Role
from src.timeclock.timeclock.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.timeclock.timeclock.users.memory_employee_repository import InMemoryEmployeeRepository
from src.timeclock.timeclock.users.memory_user_repository import InMemoryUserRepository
from src.timeclock.timeclock.users.model import Employee, User
from src.timeclock.timeclock.users.service import AuthService, EmployeeService
from src.timeclock.timeclock.users.session_store import InMemorySessionStore

NOW = datetime(2025, 1, 6, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def users():
    return InMemoryUserRepository(
        [
            User(1, "admin@example.com", generate_password_hash("admin123"), Role.ADMIN),
            User(2, "john.doe@example.com", generate_password_hash("employee123"), Role.EMPLOYEE),
            User(3, "legacy@example.com", "CHANGE_ME", Role.EMPLOYEE),
        ]
    )


@pytest.fixture
def employees():
    return InMemoryEmployeeRepository(
        [
            Employee(1, 1, "Admin User", "admin@example.com", Role.ADMIN),
            Employee(2, 2, "John Doe", "john.doe@example.com"),
        ]
    )


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def auth(users, employees, store):
    return AuthService(users, employees, store, session_hours=2)


def test_login_issues_token_that_resolves(auth):
    result = auth.login("john.doe@example.com", "employee123", now=NOW)

    assert len(result.token) == 64
    assert result.employee.full_name == "John Doe"
    session = auth.resolve(result.token, now=NOW + timedelta(hours=1))
    assert (session.user_id, session.employee_id, session.role) == (2, 2, Role.EMPLOYEE)


@pytest.mark.parametrize(
    "email, password",
    [
        ("john.doe@example.com", "wrong"),
        ("nobody@example.com", "employee123"),
        ("legacy@example.com", "anything"),
    ],
)
def test_bad_credentials(auth, email, password):
    with pytest.raises(AuthenticationError):
        auth.login(email, password, now=NOW)


def test_missing_credentials(auth):
    with pytest.raises(ValidationError):
        auth.login("", "", now=NOW)


def test_expired_session_is_dropped(auth, store):
    result = auth.login("admin@example.com", "admin123", now=NOW)

    with pytest.raises(AuthenticationError):
        auth.resolve(result.token, now=NOW + timedelta(hours=2))
    assert store.get(result.token) is None


def test_logout(auth):
    result = auth.login("admin@example.com", "admin123", now=NOW)
    auth.logout(result.token)

    with pytest.raises(AuthenticationError):
        auth.resolve(result.token, now=NOW)


def test_purge_expired_sessions(auth, store):
    auth.login("admin@example.com", "admin123", now=NOW)
    auth.login("john.doe@example.com", "employee123", now=NOW + timedelta(hours=1))

    assert store.purge_expired(now=NOW + timedelta(hours=2, minutes=30)) == 1


def test_employee_directory_permissions(auth, users, employees):
    directory = EmployeeService(users, employees)
    admin = auth.login("admin@example.com", "admin123", now=NOW).session
    john = auth.login("john.doe@example.com", "employee123", now=NOW).session

    assert len(directory.list_all(current=admin)) == 2
    assert directory.get_visible(current=john, employee_id=2).email == "john.doe@example.com"
    with pytest.raises(AuthorizationError):
        directory.list_all(current=john)
    with pytest.raises(AuthorizationError):
        directory.get_visible(current=john, employee_id=1)
    with pytest.raises(NotFoundError):
        directory.get(99)


def test_create_employee(auth, users, employees):
    directory = EmployeeService(users, employees)
    admin = auth.login("admin@example.com", "admin123", now=NOW).session

    employee_id = directory.create_employee(
        current=admin, full_name="Jane Smith", email="Jane.Smith@Example.com", password="secret1"
    )

    created = directory.get(employee_id)
    assert created.email == "jane.smith@example.com"
    assert auth.login("jane.smith@example.com", "secret1", now=NOW).employee.employee_id == employee_id


@pytest.mark.parametrize(
    "full_name, email, password",
    [
        ("", "x@example.com", "secret1"),
        ("X", "not-an-email", "secret1"),
        ("X", "x@example.com", "123"),
        ("X", "john.doe@example.com", "secret1"),
    ],
)
def test_create_employee_validation(auth, users, employees, full_name, email, password):
    directory = EmployeeService(users, employees)
    admin = auth.login("admin@example.com", "admin123", now=NOW).session

    with pytest.raises(ValidationError):
        directory.create_employee(current=admin, full_name=full_name, email=email, password=password)


def test_login_purges_expired_sessions(auth, store):
    stale = auth.login("admin@example.com", "admin123", now=NOW).token
    auth.login("john.doe@example.com", "employee123", now=NOW + timedelta(hours=3))

    assert store.get(stale) is None
