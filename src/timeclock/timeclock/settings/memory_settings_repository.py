from __future__ import annotations

from typing import Optional

from .model import SystemSettings
from .repository import SettingsRepository


class InMemorySettingsRepository(SettingsRepository):
    """Demo-mode settings, kept for the lifetime of the process."""

    def __init__(self, initial: Optional[SystemSettings] = None):
        self._settings = initial or SystemSettings()

    def load(self) -> SystemSettings:
        return self._settings

    def save(self, settings: SystemSettings) -> None:
        self._settings = settings
