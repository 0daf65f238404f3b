from __future__ import annotations

from datetime import date, time

import pytest

from src.timeclock.timeclock.core.enums import Role
from src.timeclock.timeclock.core.exceptions import AuthorizationError, InvalidConfiguration
from src.timeclock.timeclock.settings.memory_settings_repository import InMemorySettingsRepository
from src.timeclock.timeclock.settings.model import SystemSettings
from src.timeclock.timeclock.settings.service import SettingsService


@pytest.fixture
def svc():
    return SettingsService(InMemorySettingsRepository())


def test_defaults():
    settings = SystemSettings()

    assert settings.pay_period.anchor_date == date(2025, 1, 5)
    assert settings.pay_period.period_length_days == 14
    assert settings.rounding_increment_minutes == 15
    assert settings.default_lunch_minutes == 60
    assert settings.schedule.for_weekday(0).start_time == time(8)
    assert not settings.schedule.for_weekday(6).enabled


def test_as_dict_round_trips():
    settings = SystemSettings(grace_minutes=7, timezone="UTC")

    assert SystemSettings.from_dict(settings.as_dict()) == settings


def test_update_requires_admin(svc):
    with pytest.raises(AuthorizationError):
        svc.update(current_role=Role.EMPLOYEE, payload={"grace_minutes": 5})


def test_update_merges_partial_shift(svc):
    settings = svc.update(current_role=Role.ADMIN, payload={"daily_shifts": {"saturday": {"enabled": True, "end": "12:00"}}})

    saturday = settings.schedule.for_weekday(5)
    assert saturday.enabled
    assert (saturday.start_time, saturday.end_time) == (time(8), time(12))
    assert svc.current() == settings


def test_switch_to_weekly_pay_periods(svc):
    settings = svc.update(current_role=Role.ADMIN, payload={"pay_period_type": "weekly"})

    assert settings.pay_period.period_length_days == 7


@pytest.mark.parametrize(
    "payload",
    [
        {"grace_minutes": -1},
        {"rounding_increment_minutes": 0},
        {"daily_shifts": {"monday": {"start": "18:00", "end": "17:00"}}},
        {"daily_shifts": {"monday": {"start": "8am"}}},
        {"pay_period_start_date": "05/01/2025"},
        {"pay_period_type": "monthly"},
        {"timezone": "Mars/Olympus_Mons"},
        {"grace_minutes": "ten"},
    ],
)
def test_invalid_updates_are_rejected(svc, payload):
    before = svc.current()

    with pytest.raises(InvalidConfiguration):
        svc.update(current_role=Role.ADMIN, payload=payload)

    assert svc.current() == before
