from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WorkSession:
    """One clock-in/clock-out pair with the breaks recorded inside it."""

    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime]
    lunch_minutes: float = 0.0
    unpaid_minutes: float = 0.0
    lunch_recorded: bool = False
    # breaks still running on an open session
    lunch_start: Optional[datetime] = None
    unpaid_start: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None


@dataclass(frozen=True)
class WorkedHoursResult:
    """Derived totals, never persisted."""

    total_hours: float
    lunch_hours: float
    unpaid_hours: float
    paid_hours: float
    incomplete: bool = False

    @classmethod
    def from_components(cls, *, total: float, lunch: float, unpaid: float, incomplete: bool = False) -> "WorkedHoursResult":
        return cls(
            total_hours=total,
            lunch_hours=lunch,
            unpaid_hours=unpaid,
            paid_hours=max(total - lunch - unpaid, 0.0),
            incomplete=incomplete,
        )

    def as_dict(self) -> dict:
        return {
            "total_hours": round(self.total_hours, 2),
            "lunch_hours": round(self.lunch_hours, 2),
            "unpaid_hours": round(self.unpaid_hours, 2),
            "paid_hours": round(self.paid_hours, 2),
            "incomplete": self.incomplete,
        }
