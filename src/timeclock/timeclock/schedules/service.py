from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_hhmm
from ..core.constants import LUNCH_THRESHOLD_HOURS, TEMPLATE_WORK_HOURS
from ..core.enums import Role, ScheduleTemplate
from ..core.exceptions import AuthorizationError, ValidationError
from ..settings.model import SystemSettings
from ..settings.repository import SettingsRepository
from ..users.model import SessionUser
from .model import DEFAULT_LOCATION, WorkDay
from .repository import WorkDayRepository

logger = logging.getLogger(__name__)


def scheduled_hours(start: time, end: time, *, lunch_minutes: int, include_lunch: bool = True) -> float:
    """Hours between two times of day; spans over six hours lose the lunch."""

    anchor = date(2000, 1, 1)
    hours = (datetime.combine(anchor, end) - datetime.combine(anchor, start)).total_seconds() / 3600
    if include_lunch and hours > LUNCH_THRESHOLD_HOURS:
        hours -= lunch_minutes / 60
    return max(hours, 0.0)


def week_start_for(day: date) -> date:
    """Sunday on or before `day` (the grid runs Sunday to Saturday)."""

    return day - timedelta(days=(day.weekday() + 1) % 7)


def default_day(employee_id: int, work_date: date, settings: SystemSettings, *, location: str = DEFAULT_LOCATION) -> WorkDay:
    policy = settings.schedule.for_date(work_date)
    return WorkDay(
        employee_id=employee_id,
        work_date=work_date,
        start_time=policy.start_time,
        end_time=policy.end_time,
        location=location,
        is_scheduled=policy.enabled,
        hours=scheduled_hours(policy.start_time, policy.end_time, lunch_minutes=settings.default_lunch_minutes)
        if policy.enabled
        else 0.0,
    )


def apply_template(day: WorkDay, template: ScheduleTemplate, settings: SystemSettings) -> WorkDay:
    policy = settings.schedule.for_date(day.work_date)
    lunch = settings.default_lunch_minutes
    template = ScheduleTemplate(template)

    if template == ScheduleTemplate.EVERY_DAY_FULL:
        return replace(
            day,
            is_scheduled=True,
            start_time=policy.start_time,
            end_time=policy.end_time,
            hours=scheduled_hours(policy.start_time, policy.end_time, lunch_minutes=lunch),
        )

    if template == ScheduleTemplate.EVERY_DAY_8HOURS:
        start = datetime.combine(day.work_date, policy.start_time)
        end = start + timedelta(minutes=TEMPLATE_WORK_HOURS * 60 + lunch)
        if end.date() != day.work_date:
            raise ValidationError("An 8 hour shift from this start time would cross midnight")
        return replace(day, is_scheduled=True, start_time=policy.start_time, end_time=end.time(), hours=float(TEMPLATE_WORK_HOURS))

    if day.work_date.weekday() < 5:
        return replace(
            day,
            is_scheduled=True,
            start_time=policy.start_time,
            end_time=policy.end_time,
            hours=scheduled_hours(policy.start_time, policy.end_time, lunch_minutes=lunch),
        )
    return replace(day, is_scheduled=False, hours=0.0)


class ScheduleService:
    def __init__(self, work_days: WorkDayRepository, settings: SettingsRepository):
        self._work_days = work_days
        self._settings = settings

    def week(self, *, employee_id: int, week_start: date) -> list[WorkDay]:
        """Seven days from `week_start`: stored cells, else the weekday defaults."""

        settings = self._settings.load()
        end = week_start + timedelta(days=6)
        stored = {d.work_date: d for d in self._work_days.list_range(employee_id=employee_id, start=week_start, end=end)}
        days = []
        for offset in range(7):
            work_date = week_start + timedelta(days=offset)
            days.append(stored.get(work_date) or default_day(employee_id, work_date, settings))
        return days

    def week_total_hours(self, days: Iterable[WorkDay]) -> float:
        return sum(d.hours for d in days if d.is_scheduled)

    def scheduled_window(self, *, employee_id: int, work_date: date, settings: SystemSettings) -> Optional[tuple[time, time]]:
        """Shift window for one day, or None when the day is not scheduled.

        A stored cell overrides the weekday policy.
        """

        stored = self._work_days.get(employee_id=employee_id, work_date=work_date)
        if stored is not None:
            return (stored.start_time, stored.end_time) if stored.is_scheduled else None
        policy = settings.schedule.for_date(work_date)
        return (policy.start_time, policy.end_time) if policy.enabled else None

    def apply_template(
        self,
        *,
        current: SessionUser,
        employee_ids: Sequence[int],
        week_start: date,
        template: ScheduleTemplate,
        location: Optional[str] = None,
    ) -> dict[int, list[WorkDay]]:
        if current.role != Role.ADMIN:
            raise AuthorizationError("Only admins can assign schedules")
        if not employee_ids:
            raise ValidationError("Select at least one employee")

        settings = self._settings.load()
        result: dict[int, list[WorkDay]] = {}
        for employee_id in employee_ids:
            updated = []
            for day in self.week(employee_id=int(employee_id), week_start=week_start):
                day = apply_template(day, template, settings)
                if location:
                    day = replace(day, location=location)
                self._work_days.upsert(day)
                updated.append(day)
            result[int(employee_id)] = updated

        logger.info("Template %s applied to %d employees for week %s", ScheduleTemplate(template).value, len(result), week_start)
        return result

    def update_day(self, *, current: SessionUser, payload: dict) -> WorkDay:
        if current.role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit schedules")

        settings = self._settings.load()
        try:
            employee_id = int(payload["employee_id"])
            work_date = date.fromisoformat(str(payload["date"]))
        except (KeyError, TypeError, ValueError):
            raise ValidationError("employee_id and date (YYYY-MM-DD) are required")

        day = self._work_days.get(employee_id=employee_id, work_date=work_date) or default_day(employee_id, work_date, settings)
        start = parse_hhmm(payload["start_time"]) if payload.get("start_time") else day.start_time
        end = parse_hhmm(payload["end_time"]) if payload.get("end_time") else day.end_time
        if end <= start:
            raise ValidationError("End time must be after start time")

        is_scheduled = bool(payload.get("is_scheduled", day.is_scheduled))
        day = replace(
            day,
            start_time=start,
            end_time=end,
            is_scheduled=is_scheduled,
            location=(payload.get("store_location") or day.location).strip(),
            notes=(payload.get("notes") or "").strip() or None,
            hours=scheduled_hours(start, end, lunch_minutes=settings.default_lunch_minutes) if is_scheduled else 0.0,
        )
        self._work_days.upsert(day)
        return day
