from __future__ import annotations

from typing import Optional

from .model import VacationBalance
from .repository import VacationRepository


class InMemoryVacationRepository(VacationRepository):
    def __init__(self):
        self._balances: dict[tuple[int, int], VacationBalance] = {}

    def get(self, employee_id: int, year: int) -> Optional[VacationBalance]:
        return self._balances.get((int(employee_id), int(year)))

    def upsert(self, balance: VacationBalance) -> None:
        self._balances[(balance.employee_id, balance.year)] = balance
