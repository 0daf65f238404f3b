from __future__ import annotations

import logging

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import SystemSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def current(self) -> SystemSettings:
        return self._settings.load()

    def update(self, *, current_role: Role, payload: dict) -> SystemSettings:
        """Merge `payload` over the stored settings; raises InvalidConfiguration."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can change settings")

        merged = self.current().as_dict()
        shifts = dict(merged["daily_shifts"])
        for day, values in (payload.get("daily_shifts") or {}).items():
            shifts[day] = {**shifts.get(day, {}), **(values or {})}
        merged.update({k: v for k, v in payload.items() if k != "daily_shifts"})
        merged["daily_shifts"] = shifts
        if "pay_period_type" in payload and "pay_period_length_days" not in payload:
            merged.pop("pay_period_length_days", None)

        settings = SystemSettings.from_dict(merged)
        self._settings.save(settings)
        logger.info("System settings updated: %s", sorted(payload))
        return settings
