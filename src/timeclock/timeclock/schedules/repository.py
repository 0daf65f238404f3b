from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkDay


class WorkDayRepository(Protocol):
    def get(self, *, employee_id: int, work_date: date) -> Optional[WorkDay]:
        raise NotImplementedError

    def list_range(self, *, employee_id: int, start: date, end: date) -> Sequence[WorkDay]:
        """Stored days with start <= work_date <= end."""

        raise NotImplementedError

    def upsert(self, day: WorkDay) -> None:
        raise NotImplementedError
