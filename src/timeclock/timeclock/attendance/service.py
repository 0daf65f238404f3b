from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, now_utc
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus, EventKind, GoalKind
from ..core.exceptions import AuthorizationError, ValidationError
from ..events.repository import EventRepository
from ..schedules.service import ScheduleService
from ..settings.model import SystemSettings
from ..settings.repository import SettingsRepository
from ..users.model import SessionUser
from .factory import AttendanceStrategyFactory, classify_day
from .goals import summarize
from .model import AttendanceDay, AttendanceGoal, AttendanceStats
from .repository import AttendanceRepository, GoalRepository
from .strategies.base import StatusDecision

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        days: AttendanceRepository,
        goals: GoalRepository,
        events: EventRepository,
        schedules: ScheduleService,
        settings: SettingsRepository,
    ):
        self._days = days
        self._goals = goals
        self._events = events
        self._schedules = schedules
        self._settings = settings

    def _first_check_in(self, employee_id: int, work_date: date, settings: SystemSettings) -> Optional[datetime]:
        start, end = day_bounds(work_date, settings.tz)
        for event in self._events.list_for_employee(employee_id, start, end):
            if event.kind == EventKind.CLOCK_IN:
                return event.timestamp.astimezone(settings.tz)
        return None

    def classify(
        self,
        *,
        employee_id: int,
        work_date: date,
        excused: bool = False,
        reason: Optional[str] = None,
        settings: Optional[SystemSettings] = None,
    ) -> tuple[StatusDecision, Optional[datetime]]:
        settings = settings or self._settings.load()
        window = self._schedules.scheduled_window(employee_id=employee_id, work_date=work_date, settings=settings)
        scheduled_start = datetime.combine(work_date, window[0], tzinfo=settings.tz) if window else None
        check_in = self._first_check_in(employee_id, work_date, settings)

        decision = classify_day(
            scheduled_start=scheduled_start,
            check_in=check_in,
            grace_minutes=settings.grace_minutes,
            excused=excused,
            excuse_reason=reason,
            factory=AttendanceStrategyFactory(late_includes_grace=settings.late_includes_grace),
        )
        return decision, check_in

    def _today(self, settings: SystemSettings, now: Optional[datetime]) -> date:
        return (now or now_utc()).astimezone(settings.tz).date()

    def close_day(
        self,
        *,
        current: SessionUser,
        employee_id: int,
        work_date: date,
        excused: bool = False,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceDay:
        """Reporting job: fix the day's status. Closed days never change."""

        if not current.is_admin:
            raise AuthorizationError("Only admins can close attendance days")

        settings = self._settings.load()
        if work_date > self._today(settings, now):
            raise ValidationError("Cannot close a day in the future")
        if self._days.get_for_employee_and_date(employee_id, work_date):
            raise ValidationError(f"Attendance for {work_date.isoformat()} is already closed")

        decision, check_in = self.classify(
            employee_id=employee_id,
            work_date=work_date,
            excused=excused,
            reason=reason,
            settings=settings,
        )
        day = AttendanceDay(
            employee_id=int(employee_id),
            work_date=work_date,
            status=decision.status,
            check_in_time=check_in,
            minutes_late=decision.minutes_late,
            note=decision.note,
        )
        if day.status != AttendanceStatus.UNSCHEDULED:
            self._days.create(day)
        return day

    def close_range(
        self,
        *,
        current: SessionUser,
        employee_ids: Sequence[int],
        start: date,
        end: date,
        now: Optional[datetime] = None,
    ) -> int:
        """Close every still-open day in [start, end]; returns how many were stored."""

        if not current.is_admin:
            raise AuthorizationError("Only admins can close attendance days")
        if start > end:
            raise ValidationError("start must be on or before end")
        if end > self._today(self._settings.load(), now):
            raise ValidationError("Cannot close a day in the future")

        stored = 0
        for employee_id in employee_ids:
            day = start
            while day <= end:
                if not self._days.get_for_employee_and_date(employee_id, day):
                    closed = self.close_day(current=current, employee_id=employee_id, work_date=day, now=now)
                    stored += closed.status != AttendanceStatus.UNSCHEDULED
                day += timedelta(days=1)
        logger.info("Closed %d attendance days between %s and %s", stored, start, end)
        return stored

    def summary(
        self,
        *,
        current: SessionUser,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> list[AttendanceStats]:
        if not current.is_admin:
            if employee_id is not None and employee_id != current.employee_id:
                raise AuthorizationError("Access denied")
            employee_id = current.employee_id

        days = self._days.list_range(start=start, end=end, employee_id=employee_id)
        return summarize(days, self._goals.list_all(active_only=True))

    def list_days(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[AttendanceDay]:
        return self._days.list_range(start=start, end=end, employee_id=employee_id)

    def list_goals(self) -> Sequence[AttendanceGoal]:
        return self._goals.list_all()

    def save_goal(self, *, current: SessionUser, payload: dict) -> AttendanceGoal:
        if not current.is_admin:
            raise AuthorizationError("Only admins can edit goals")

        try:
            goal = AttendanceGoal(
                goal_id=int(payload["goal_id"]) if payload.get("goal_id") is not None else None,
                name=require_non_empty(payload.get("name", ""), "Goal name"),
                kind=GoalKind(payload.get("kind", GoalKind.POSITIVE.value)),
                max_days_missed=int(payload.get("max_days_missed", 0)),
                max_days_late=int(payload.get("max_days_late", 0)),
                display_order=int(payload.get("display_order", 0)),
                description=(payload.get("description") or "").strip(),
                is_active=bool(payload.get("is_active", True)),
            )
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid goal: {e}")

        if goal.max_days_missed < 0 or goal.max_days_late < 0:
            raise ValidationError("Goal thresholds must not be negative")

        goal_id = self._goals.save(goal)
        logger.info("Goal %s saved by user %s", goal_id, current.user_id)
        return replace(goal, goal_id=goal_id)
