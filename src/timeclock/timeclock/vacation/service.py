from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_negative
from ..core.exceptions import AuthorizationError, ValidationError
from ..payroll.service import PayrollReportService
from ..settings.repository import SettingsRepository
from ..users.model import SessionUser
from .model import VacationBalance, VacationSummary
from .repository import VacationRepository

logger = logging.getLogger(__name__)


def accrued_hours(hours_worked: float, accrual_rate: float) -> float:
    """One vacation hour per `accrual_rate` paid hours, whole hours only."""

    if accrual_rate <= 0:
        raise ValidationError("Accrual rate must be positive")
    return float(math.floor(max(hours_worked, 0.0) / accrual_rate))


class VacationService:
    def __init__(self, balances: VacationRepository, reports: PayrollReportService, settings: SettingsRepository):
        self._balances = balances
        self._reports = reports
        self._settings = settings

    def summary(self, employee_id: int, *, now: Optional[datetime] = None) -> VacationSummary:
        settings = self._settings.load()
        today = (now or now_utc()).astimezone(settings.tz).date()
        balance = self._balances.get(employee_id, today.year) or VacationBalance(employee_id=int(employee_id), year=today.year)

        worked = self._reports.paid_hours_between(employee_id, date(today.year, 1, 1), today)
        return VacationSummary(
            employee_id=int(employee_id),
            year=today.year,
            allotted_hours=balance.allotted_hours
            if balance.allotted_hours is not None
            else float(settings.vacation_allotment_hours),
            accrued_hours=accrued_hours(worked, float(settings.vacation_accrual_rate)),
            used_hours=balance.used_hours,
            hours_worked=worked,
        )

    def adjust(
        self,
        *,
        current: SessionUser,
        employee_id: int,
        year: int,
        allotted_hours: Optional[float] = None,
        used_hours: Optional[float] = None,
    ) -> VacationBalance:
        if not current.is_admin:
            raise AuthorizationError("Only admins can adjust vacation balances")

        balance = self._balances.get(employee_id, year) or VacationBalance(employee_id=int(employee_id), year=int(year))
        if allotted_hours is not None:
            balance = replace(balance, allotted_hours=require_non_negative(allotted_hours, "allotted_hours"))
        if used_hours is not None:
            balance = replace(balance, used_hours=require_non_negative(used_hours, "used_hours"))
        self._balances.upsert(balance)
        logger.info("Vacation balance of employee %s for %s adjusted by user %s", employee_id, year, current.user_id)
        return balance
