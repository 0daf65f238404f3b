from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class VacationBalance:
    """Stored per employee per year; `allotted_hours=None` means the configured default."""

    employee_id: int
    year: int
    allotted_hours: Optional[float] = None
    used_hours: float = 0.0


@dataclass(frozen=True)
class VacationSummary:
    employee_id: int
    year: int
    allotted_hours: float
    accrued_hours: float
    used_hours: float
    hours_worked: float

    @property
    def available_hours(self) -> float:
        return self.accrued_hours - self.used_hours

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "year": self.year,
            "allotted_hours": self.allotted_hours,
            "accrued_hours": self.accrued_hours,
            "used_hours": self.used_hours,
            "available_hours": round(self.available_hours, 2),
            "hours_worked": round(self.hours_worked, 2),
        }
