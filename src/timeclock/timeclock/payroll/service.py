from __future__ import annotations

import csv
import io
import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, format_minutes, minutes_between
from ..core.constants import REPORT_LOOKAHEAD_DAYS
from ..core.enums import EventKind
from ..core.exceptions import AuthorizationError, NotFoundError
from ..events.model import TimeEvent
from ..events.repository import EventRepository
from ..settings.model import SystemSettings
from ..settings.repository import SettingsRepository
from ..timesheet.model import WorkSession
from ..timesheet.reducer import fold_sessions, sessions_by_day
from ..users.model import Employee, SessionUser
from ..users.repository import EmployeeRepository
from .calculator.base import DayInterval, PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .periods import PayPeriod, period_for

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "employee_id",
    "full_name",
    "work_date",
    "pay_period",
    "clock_in",
    "clock_out",
    "lunch_minutes",
    "unpaid_minutes",
    "paid_hours",
    "incomplete",
]


@dataclass(frozen=True)
class DayRow:
    employee_id: int
    full_name: str
    work_date: date
    pay_period: Optional[int]
    clock_in: datetime
    clock_out: Optional[datetime]
    lunch_minutes: int
    unpaid_minutes: int
    paid_minutes: int
    incomplete: bool

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "full_name": self.full_name,
            "work_date": self.work_date.isoformat(),
            "pay_period": self.pay_period,
            "clock_in": self.clock_in.strftime("%H:%M"),
            "clock_out": self.clock_out.strftime("%H:%M") if self.clock_out else "-",
            "lunch_minutes": self.lunch_minutes,
            "unpaid_minutes": self.unpaid_minutes,
            "paid_hours": format_minutes(self.paid_minutes),
            "incomplete": self.incomplete,
        }


@dataclass
class EmployeeSummary:
    employee_id: int
    full_name: str
    days_worked: int = 0
    paid_minutes: int = 0
    incomplete_days: int = 0

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "full_name": self.full_name,
            "days_worked": self.days_worked,
            "paid_minutes": self.paid_minutes,
            "total_hours": format_minutes(self.paid_minutes),
            "incomplete_days": self.incomplete_days,
        }


@dataclass(frozen=True)
class ReportData:
    start: date
    end: date
    rows: list[DayRow]
    summary: list[EmployeeSummary]
    period: Optional[PayPeriod] = None
    # paid minutes per employee per pay period number
    by_period: dict[int, dict[int, int]] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "period": {
                "number": self.period.number,
                "start": self.period.start.isoformat(),
                "end": self.period.end.isoformat(),
                "label": self.period.label,
            }
            if self.period
            else None,
            "rows": [r.as_dict() for r in self.rows],
            "summary": [s.as_dict() for s in self.summary],
            "by_period": {str(k): v for k, v in self.by_period.items()},
        }


def _trim_leading(events: Sequence[TimeEvent]) -> list[TimeEvent]:
    """Drop events that belong to a session opened before the queried range."""

    events = list(events)
    for i, event in enumerate(events):
        if event.kind == EventKind.CLOCK_IN:
            if i:
                logger.debug("Skipping %d events carried over from before the range", i)
            return events[i:]
    return []


def day_interval(sessions: Sequence[WorkSession], tz) -> Optional[DayInterval]:
    """Merge a day's closed sessions into one interval; gaps count as unpaid."""

    closed = [s for s in sessions if not s.is_open]
    if not closed:
        return None

    gaps = sum(
        max(minutes_between(prev.clock_out, nxt.clock_in), 0.0)
        for prev, nxt in zip(closed, closed[1:])
    )
    return DayInterval(
        clock_in=closed[0].clock_in.astimezone(tz),
        clock_out=closed[-1].clock_out.astimezone(tz),
        lunch_minutes=sum(s.lunch_minutes for s in closed),
        unpaid_minutes=sum(s.unpaid_minutes for s in closed) + gaps,
        lunch_recorded=any(s.lunch_recorded for s in closed),
    )


class PayrollReportService:
    """Use case: paid hours per employee per day, bucketed into pay periods.

    Employees are independent of each other; when an executor is supplied
    they are computed in parallel.
    """

    def __init__(
        self,
        events: EventRepository,
        employees: EmployeeRepository,
        settings: SettingsRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        executor: Optional[Executor] = None,
    ):
        self._events = events
        self._employees = employees
        self._settings = settings
        self._calculator = calculator or StandardPayrollCalculator()
        self._executor = executor

    def _employee_rows(self, employee: Employee, start: date, end: date, settings: SystemSettings) -> list[DayRow]:
        tz = settings.tz
        range_start, _ = day_bounds(start, tz)
        _, range_end = day_bounds(end + timedelta(days=REPORT_LOOKAHEAD_DAYS), tz)
        events = _trim_leading(self._events.list_for_employee(employee.employee_id, range_start, range_end))

        rows = []
        for work_date, sessions in sessions_by_day(fold_sessions(events), tz).items():
            if not start <= work_date <= end:
                continue

            incomplete = any(s.is_open for s in sessions)
            interval = day_interval(sessions, tz)
            paid = 0
            if interval is not None:
                paid = self._calculator.paid_minutes(
                    interval,
                    settings.schedule.for_date(work_date),
                    default_lunch_minutes=settings.default_lunch_minutes,
                    rounding_increment_minutes=settings.rounding_increment_minutes,
                )

            last = sessions[-1]
            rows.append(
                DayRow(
                    employee_id=employee.employee_id,
                    full_name=employee.full_name,
                    work_date=work_date,
                    pay_period=period_for(settings.pay_period, work_date).number
                    if work_date >= settings.pay_period.anchor_date
                    else None,
                    clock_in=sessions[0].clock_in.astimezone(tz),
                    clock_out=last.clock_out.astimezone(tz) if last.clock_out else None,
                    lunch_minutes=round(sum(s.lunch_minutes for s in sessions)),
                    unpaid_minutes=round(sum(s.unpaid_minutes for s in sessions)),
                    paid_minutes=paid,
                    incomplete=incomplete,
                )
            )
        return rows

    def build_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
        period: Optional[PayPeriod] = None,
    ) -> ReportData:
        settings = self._settings.load()

        if employee_id is not None:
            employee = self._employees.get_by_id(employee_id)
            if not employee:
                raise NotFoundError("Employee not found")
            employees = [employee]
        else:
            employees = list(self._employees.list_all(active_only=True))

        def compute(employee: Employee) -> list[DayRow]:
            return self._employee_rows(employee, start, end, settings)

        if self._executor is not None:
            per_employee = list(self._executor.map(compute, employees))
        else:
            per_employee = [compute(e) for e in employees]

        rows: list[DayRow] = []
        summary: list[EmployeeSummary] = []
        by_period: dict[int, dict[int, int]] = {}
        for employee, employee_rows in zip(employees, per_employee):
            s = EmployeeSummary(employee_id=employee.employee_id, full_name=employee.full_name)
            for r in employee_rows:
                s.days_worked += 1
                s.paid_minutes += r.paid_minutes
                s.incomplete_days += r.incomplete
                if r.pay_period is not None:
                    bucket = by_period.setdefault(r.pay_period, {})
                    bucket[employee.employee_id] = bucket.get(employee.employee_id, 0) + r.paid_minutes
            rows.extend(employee_rows)
            summary.append(s)

        rows.sort(key=lambda r: (r.work_date, r.employee_id))
        summary.sort(key=lambda s: s.paid_minutes, reverse=True)
        return ReportData(start=start, end=end, rows=rows, summary=summary, period=period, by_period=by_period)

    def pay_period_report(self, *, target: date, employee_id: Optional[int] = None) -> ReportData:
        period = period_for(self._settings.load().pay_period, target)
        return self.build_report(start=period.start, end=period.end, employee_id=employee_id, period=period)

    def my_report(self, *, current: SessionUser, target: date) -> ReportData:
        if current.employee_id is None:
            raise AuthorizationError("No employee record for this account")
        return self.pay_period_report(target=target, employee_id=current.employee_id)

    def paid_hours_between(self, employee_id: int, start: date, end: date) -> float:
        report = self.build_report(start=start, end=end, employee_id=employee_id)
        return sum(r.paid_minutes for r in report.rows) / 60


def to_csv(rows: Sequence[DayRow]) -> str:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for r in rows:
        writer.writerow(r.as_dict())
    return output.getvalue()
