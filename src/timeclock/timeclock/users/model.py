from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: login account.

    Note: plain data object (no DB access code).
    """

    user_id: int
    email: str
    password_hash: str
    role: Role
    is_active: bool = True


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee directory record linked to a login account."""

    employee_id: int
    user_id: int
    full_name: str
    email: str
    role: Role = Role.EMPLOYEE
    is_active: bool = True
    created_at: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class SessionUser:
    """What a bearer token resolves to."""

    user_id: int
    employee_id: Optional[int]
    role: Role
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
