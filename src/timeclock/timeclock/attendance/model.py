from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, GoalKind


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: closed-out attendance for one employee and date."""

    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    minutes_late: int = 0
    note: Optional[str] = None


@dataclass(frozen=True)
class AttendanceGoal:
    """Achievement threshold evaluated against aggregated attendance."""

    goal_id: Optional[int]
    name: str
    kind: GoalKind
    max_days_missed: int
    max_days_late: int
    display_order: int = 0
    description: str = ""
    is_active: bool = True

    def as_dict(self) -> dict:
        return {
            "goal_id": self.goal_id,
            "name": self.name,
            "kind": self.kind.value,
            "max_days_missed": self.max_days_missed,
            "max_days_late": self.max_days_late,
            "display_order": self.display_order,
            "description": self.description,
            "is_active": self.is_active,
        }


@dataclass
class AttendanceStats:
    """Read-model: per-employee aggregate over a date range."""

    employee_id: int
    days_present: int = 0
    days_late: int = 0
    days_missed: int = 0
    days_excused: int = 0
    total_minutes_late: int = 0
    achievement: Optional[AttendanceGoal] = None

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "days_present": self.days_present,
            "days_late": self.days_late,
            "days_missed": self.days_missed,
            "days_excused": self.days_excused,
            "total_minutes_late": self.total_minutes_late,
            "achievement": self.achievement.as_dict() if self.achievement else None,
        }
