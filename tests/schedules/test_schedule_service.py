from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from src.timeclock.timeclock.core.enums import Role, ScheduleTemplate
from src.timeclock.timeclock.core.exceptions import AuthorizationError, ValidationError
from src.timeclock.timeclock.schedules.memory_work_day_repository import InMemoryWorkDayRepository
from src.timeclock.timeclock.schedules.service import ScheduleService, scheduled_hours, week_start_for
from src.timeclock.timeclock.settings.memory_settings_repository import InMemorySettingsRepository
from src.timeclock.timeclock.settings.model import SystemSettings
from src.timeclock.timeclock.shifts.model import WeeklySchedule
from src.timeclock.timeclock.users.model import SessionUser

FAR_FUTURE = datetime(2100, 1, 1, tzinfo=timezone.utc)
ADMIN = SessionUser(user_id=1, employee_id=1, role=Role.ADMIN, expires_at=FAR_FUTURE)
EMPLOYEE = SessionUser(user_id=2, employee_id=2, role=Role.EMPLOYEE, expires_at=FAR_FUTURE)
SUNDAY = date(2025, 1, 5)


@pytest.fixture
def repo():
    return InMemoryWorkDayRepository()


@pytest.fixture
def svc(repo):
    return ScheduleService(repo, InMemorySettingsRepository())


def test_scheduled_hours_deducts_lunch_over_six_hours():
    assert scheduled_hours(time(8), time(17), lunch_minutes=60) == pytest.approx(8.0)
    assert scheduled_hours(time(8), time(14), lunch_minutes=60) == pytest.approx(6.0)
    assert scheduled_hours(time(8), time(17), lunch_minutes=60, include_lunch=False) == pytest.approx(9.0)


def test_week_starts_on_sunday():
    assert week_start_for(date(2025, 1, 8)) == SUNDAY
    assert week_start_for(SUNDAY) == SUNDAY


def test_week_defaults_follow_weekly_schedule(svc):
    days = svc.week(employee_id=2, week_start=SUNDAY)

    assert [d.is_scheduled for d in days] == [False, True, True, True, True, True, False]
    assert svc.week_total_hours(days) == pytest.approx(40.0)


def test_every_day_full_template(svc, repo):
    result = svc.apply_template(
        current=ADMIN, employee_ids=[2], week_start=SUNDAY, template=ScheduleTemplate.EVERY_DAY_FULL, location="Annex"
    )

    days = result[2]
    assert all(d.is_scheduled for d in days)
    assert {d.location for d in days} == {"Annex"}
    assert len(repo.list_range(employee_id=2, start=SUNDAY, end=date(2025, 1, 11))) == 7


def test_eight_hour_template_adds_lunch_to_end(svc):
    days = svc.apply_template(
        current=ADMIN, employee_ids=[2], week_start=SUNDAY, template=ScheduleTemplate.EVERY_DAY_8HOURS
    )[2]

    assert {(d.start_time, d.end_time, d.hours) for d in days} == {(time(8), time(17), 8.0)}


def test_eight_hour_template_rejects_crossing_midnight(repo):
    late = WeeklySchedule.from_policies([p.with_times(time(18), time(23)) for p in WeeklySchedule.default().policies])
    svc = ScheduleService(repo, InMemorySettingsRepository(SystemSettings(schedule=late)))

    with pytest.raises(ValidationError):
        svc.apply_template(current=ADMIN, employee_ids=[2], week_start=SUNDAY, template=ScheduleTemplate.EVERY_DAY_8HOURS)


def test_weekdays_only_template(svc):
    days = svc.apply_template(current=ADMIN, employee_ids=[2], week_start=SUNDAY, template=ScheduleTemplate.WEEKDAYS_ONLY)[2]

    assert [d.is_scheduled for d in days] == [False, True, True, True, True, True, False]


def test_template_requires_admin_and_employees(svc):
    with pytest.raises(AuthorizationError):
        svc.apply_template(current=EMPLOYEE, employee_ids=[2], week_start=SUNDAY, template=ScheduleTemplate.WEEKDAYS_ONLY)
    with pytest.raises(ValidationError):
        svc.apply_template(current=ADMIN, employee_ids=[], week_start=SUNDAY, template=ScheduleTemplate.WEEKDAYS_ONLY)


def test_update_day_overrides_window(svc):
    day = svc.update_day(
        current=ADMIN,
        payload={"employee_id": 2, "date": "2025-01-11", "start_time": "10:00", "end_time": "14:00", "is_scheduled": True},
    )

    assert day.hours == pytest.approx(4.0)
    settings = SystemSettings()
    assert svc.scheduled_window(employee_id=2, work_date=date(2025, 1, 11), settings=settings) == (time(10), time(14))
    assert svc.scheduled_window(employee_id=2, work_date=date(2025, 1, 12), settings=settings) is None


def test_update_day_validation(svc):
    with pytest.raises(ValidationError):
        svc.update_day(current=ADMIN, payload={"employee_id": 2})
    with pytest.raises(ValidationError):
        svc.update_day(
            current=ADMIN, payload={"employee_id": 2, "date": "2025-01-06", "start_time": "17:00", "end_time": "08:00"}
        )
