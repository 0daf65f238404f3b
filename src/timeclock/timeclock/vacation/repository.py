from __future__ import annotations

from typing import Optional, Protocol

from .model import VacationBalance


class VacationRepository(Protocol):
    def get(self, employee_id: int, year: int) -> Optional[VacationBalance]:
        raise NotImplementedError

    def upsert(self, balance: VacationBalance) -> None:
        raise NotImplementedError
