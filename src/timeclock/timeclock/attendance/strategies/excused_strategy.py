from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class ExcusedStrategy(AttendanceStrategy):
    """Explicit excuse overrides present/late/missed."""

    def __init__(self, reason: Optional[str] = None):
        self._reason = reason

    def decide(self, *, scheduled_start: Optional[datetime], check_in: Optional[datetime], grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EXCUSED, note=self._reason)
