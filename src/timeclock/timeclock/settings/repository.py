from __future__ import annotations

from typing import Protocol

from .model import SystemSettings


class SettingsRepository(Protocol):
    def load(self) -> SystemSettings:
        raise NotImplementedError

    def save(self, settings: SystemSettings) -> None:
        raise NotImplementedError
