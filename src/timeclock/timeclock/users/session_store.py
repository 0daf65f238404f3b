"""Bearer-session storage.

Two interchangeable implementations exist: `InMemorySessionStore` for demo
mode and `MySQLSessionStore` for the hosted backend; the container picks
one from the STORAGE_BACKEND setting.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import SessionUser


class SessionStore(Protocol):
    def save(self, token: str, session: SessionUser) -> None:
        raise NotImplementedError

    def get(self, token: str) -> Optional[SessionUser]:
        raise NotImplementedError

    def delete(self, token: str) -> bool:
        raise NotImplementedError

    def purge_expired(self, *, now: datetime) -> int:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    def __init__(self):
        self._sessions: dict[str, SessionUser] = {}

    def save(self, token: str, session: SessionUser) -> None:
        self._sessions[token] = session

    def get(self, token: str) -> Optional[SessionUser]:
        return self._sessions.get(token)

    def delete(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def purge_expired(self, *, now: datetime) -> int:
        expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        return len(expired)
