from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError
from .model import AttendanceDay, AttendanceGoal
from .repository import AttendanceRepository, GoalRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._by_employee_date: dict[tuple[int, date], AttendanceDay] = {}

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        return self._by_employee_date.get((int(employee_id), work_date))

    def create(self, day: AttendanceDay) -> None:
        self._by_employee_date[(day.employee_id, day.work_date)] = day

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[AttendanceDay]:
        items = [
            d for d in self._by_employee_date.values()
            if start <= d.work_date <= end and (employee_id is None or d.employee_id == int(employee_id))
        ]
        return sorted(items, key=lambda d: (d.work_date, d.employee_id), reverse=True)


class InMemoryGoalRepository(GoalRepository):
    def __init__(self, goals: Optional[list[AttendanceGoal]] = None):
        self._goals: dict[int, AttendanceGoal] = {}
        for goal in goals or []:
            if goal.goal_id is None:
                self.save(goal)
            else:
                self._goals[goal.goal_id] = goal

    def list_all(self, *, active_only: bool = False) -> Sequence[AttendanceGoal]:
        items = [g for g in self._goals.values() if g.is_active or not active_only]
        return sorted(items, key=lambda g: (g.display_order, g.goal_id))

    def save(self, goal: AttendanceGoal) -> int:
        if goal.goal_id is None:
            goal_id = max(self._goals, default=0) + 1
            goal = replace(goal, goal_id=goal_id)
        elif goal.goal_id not in self._goals:
            raise NotFoundError("Goal not found")
        self._goals[goal.goal_id] = goal
        return goal.goal_id
