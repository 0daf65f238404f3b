from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceDay, AttendanceGoal


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def create(self, day: AttendanceDay) -> None:
        """Insert a closed day; closed days are never updated."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[AttendanceDay]:
        raise NotImplementedError


class GoalRepository(Protocol):
    def list_all(self, *, active_only: bool = False) -> Sequence[AttendanceGoal]:
        """Ordered by display_order."""

        raise NotImplementedError

    def save(self, goal: AttendanceGoal) -> int:
        """Insert when goal_id is None, else update; returns goal_id."""

        raise NotImplementedError
