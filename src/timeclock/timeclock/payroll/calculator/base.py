from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...shifts.model import ShiftPolicy


@dataclass(frozen=True)
class DayInterval:
    """Raw punches for one worked interval plus the breaks recorded in it."""

    clock_in: datetime
    clock_out: datetime
    lunch_minutes: float = 0.0
    unpaid_minutes: float = 0.0
    lunch_recorded: bool = False


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def paid_minutes(
        self,
        interval: DayInterval,
        policy: ShiftPolicy,
        *,
        default_lunch_minutes: int,
        rounding_increment_minutes: int,
    ) -> int:
        raise NotImplementedError
