from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in.

    By default minutes late are counted past the grace threshold; with
    `include_grace=True` they are counted from the scheduled start.
    """

    def __init__(self, *, include_grace: bool = False):
        self._include_grace = include_grace

    def decide(self, *, scheduled_start: Optional[datetime], check_in: Optional[datetime], grace_minutes: int) -> StatusDecision:
        origin = scheduled_start if self._include_grace else scheduled_start + timedelta(minutes=grace_minutes)
        minutes = int((check_in - origin).total_seconds() // 60)
        return StatusDecision(
            status=AttendanceStatus.LATE,
            minutes_late=max(minutes, 0),
            note=f"Checked in {check_in.strftime('%H:%M')}",
        )
