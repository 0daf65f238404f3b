from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_hhmm

DEFAULT_LOCATION = "Main Store"


@dataclass(frozen=True)
class WorkDay:
    """One cell of the weekly schedule grid (employee x date)."""

    employee_id: int
    work_date: date
    start_time: time
    end_time: time
    location: str = DEFAULT_LOCATION
    is_scheduled: bool = True
    hours: float = 0.0
    notes: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "start_time": format_hhmm(self.start_time),
            "end_time": format_hhmm(self.end_time),
            "store_location": self.location,
            "is_scheduled": self.is_scheduled,
            "hours": round(self.hours, 2),
            "notes": self.notes or "",
        }
