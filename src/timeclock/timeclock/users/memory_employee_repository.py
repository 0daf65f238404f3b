from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from .model import Employee
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(self, employees: Optional[list[Employee]] = None):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees or []}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.user_id == int(user_id)), None)

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        items = [e for e in self._by_id.values() if e.is_active or not active_only]
        return sorted(items, key=lambda e: e.employee_id)

    def create_employee(self, *, user_id: int, full_name: str, email: str, role: Role) -> int:
        employee_id = max(self._by_id, default=0) + 1
        self._by_id[employee_id] = Employee(
            employee_id=employee_id,
            user_id=int(user_id),
            full_name=full_name,
            email=email,
            role=role,
        )
        return employee_id
