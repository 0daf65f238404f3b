from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from .model import WorkDay
from .repository import WorkDayRepository


class InMemoryWorkDayRepository(WorkDayRepository):
    def __init__(self):
        self._days: dict[tuple[int, date], WorkDay] = {}

    def get(self, *, employee_id: int, work_date: date) -> Optional[WorkDay]:
        return self._days.get((int(employee_id), work_date))

    def list_range(self, *, employee_id: int, start: date, end: date) -> Sequence[WorkDay]:
        items = [d for (emp, day), d in self._days.items() if emp == int(employee_id) and start <= day <= end]
        return sorted(items, key=lambda d: d.work_date)

    def upsert(self, day: WorkDay) -> None:
        self._days[(day.employee_id, day.work_date)] = day
