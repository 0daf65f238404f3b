from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: Optional[list[User]] = None):
        self._by_id: dict[int, User] = {u.user_id: u for u in users or []}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        email = (email or "").strip().lower()
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, *, email: str, password_hash: str, role: Role) -> int:
        user_id = max(self._by_id, default=0) + 1
        self._by_id[user_id] = User(user_id=user_id, email=email, password_hash=password_hash, role=role)
        return user_id
