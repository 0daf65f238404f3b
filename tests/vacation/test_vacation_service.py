from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.timeclock.timeclock.core.enums import EventKind, Role
from src.timeclock.timeclock.core.exceptions import AuthorizationError, ValidationError
from src.timeclock.timeclock.events.memory_event_repository import InMemoryEventRepository
from src.timeclock.timeclock.events.model import TimeEvent
from src.timeclock.timeclock.payroll.service import PayrollReportService
from src.timeclock.timeclock.settings.memory_settings_repository import InMemorySettingsRepository
from src.timeclock.timeclock.users.memory_employee_repository import InMemoryEmployeeRepository
from src.timeclock.timeclock.users.model import Employee, SessionUser
from src.timeclock.timeclock.vacation.memory_vacation_repository import InMemoryVacationRepository
from src.timeclock.timeclock.vacation.service import VacationService, accrued_hours

FAR_FUTURE = datetime(2100, 1, 1, tzinfo=timezone.utc)
ADMIN = SessionUser(user_id=1, employee_id=1, role=Role.ADMIN, expires_at=FAR_FUTURE)
EMPLOYEE = SessionUser(user_id=2, employee_id=2, role=Role.EMPLOYEE, expires_at=FAR_FUTURE)
NOW = datetime(2025, 1, 10, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def svc():
    events = InMemoryEventRepository()
    # four full weekdays: 8 paid hours each after the default lunch
    for day in (6, 7, 8, 9):
        events.append(TimeEvent(2, EventKind.CLOCK_IN, datetime(2025, 1, day, 8, tzinfo=timezone.utc)))
        events.append(TimeEvent(2, EventKind.CLOCK_OUT, datetime(2025, 1, day, 17, tzinfo=timezone.utc)))

    settings = InMemorySettingsRepository()
    employees = InMemoryEmployeeRepository([Employee(2, 2, "John Doe", "john.doe@example.com")])
    reports = PayrollReportService(events, employees, settings)
    return VacationService(InMemoryVacationRepository(), reports, settings)


def test_accrued_hours_are_whole_hours():
    assert accrued_hours(51.9, 26) == 1.0
    assert accrued_hours(52, 26) == 2.0
    assert accrued_hours(0, 26) == 0.0


def test_accrued_hours_needs_positive_rate():
    with pytest.raises(ValidationError):
        accrued_hours(40, 0)


def test_summary_uses_paid_hours_this_year(svc):
    summary = svc.summary(2, now=NOW)

    assert summary.hours_worked == pytest.approx(32.0)
    assert summary.accrued_hours == 1.0
    assert summary.allotted_hours == 80
    assert summary.available_hours == 1.0


def test_admin_adjustments(svc):
    svc.adjust(current=ADMIN, employee_id=2, year=2025, used_hours=0.5)
    svc.adjust(current=ADMIN, employee_id=2, year=2025, allotted_hours=120)

    summary = svc.summary(2, now=NOW)
    assert summary.used_hours == 0.5
    assert summary.allotted_hours == 120
    assert summary.available_hours == pytest.approx(0.5)


def test_adjust_rules(svc):
    with pytest.raises(AuthorizationError):
        svc.adjust(current=EMPLOYEE, employee_id=2, year=2025, used_hours=1)
    with pytest.raises(ValidationError):
        svc.adjust(current=ADMIN, employee_id=2, year=2025, used_hours=-1)
