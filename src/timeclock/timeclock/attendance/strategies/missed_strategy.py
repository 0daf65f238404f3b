from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class MissedStrategy(AttendanceStrategy):
    """Scheduled day with no check-in."""

    def decide(self, *, scheduled_start: Optional[datetime], check_in: Optional[datetime], grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.MISSED, note="No check-in recorded")
