from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.exceptions import ValidationError
from .strategies.base import AttendanceStrategy, StatusDecision
from .strategies.excused_strategy import ExcusedStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.missed_strategy import MissedStrategy
from .strategies.present_strategy import PresentStrategy
from .strategies.unscheduled_strategy import UnscheduledStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    late_includes_grace: bool = False

    def for_day(
        self,
        *,
        scheduled_start: Optional[datetime],
        check_in: Optional[datetime],
        grace_minutes: int,
        excused: bool = False,
        excuse_reason: Optional[str] = None,
    ) -> AttendanceStrategy:
        if excused:
            return ExcusedStrategy(excuse_reason)
        if scheduled_start is None:
            return UnscheduledStrategy()
        if check_in is None:
            return MissedStrategy()
        if check_in <= scheduled_start + timedelta(minutes=grace_minutes):
            return PresentStrategy()
        return LateStrategy(include_grace=self.late_includes_grace)


def classify_day(
    *,
    scheduled_start: Optional[datetime],
    check_in: Optional[datetime],
    grace_minutes: int,
    excused: bool = False,
    excuse_reason: Optional[str] = None,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> StatusDecision:
    """Classify one day. `scheduled_start=None` means the day is unscheduled."""

    if grace_minutes is None or grace_minutes < 0:
        raise ValidationError("Grace minutes must not be negative")
    factory = factory or AttendanceStrategyFactory()
    strategy = factory.for_day(
        scheduled_start=scheduled_start,
        check_in=check_in,
        grace_minutes=grace_minutes,
        excused=excused,
        excuse_reason=excuse_reason,
    )
    return strategy.decide(scheduled_start=scheduled_start, check_in=check_in, grace_minutes=grace_minutes)
