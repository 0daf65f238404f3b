from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ...common.datetime_utils import minutes_between
from ...core.exceptions import InvalidConfiguration
from ...shifts.model import ShiftPolicy
from .base import DayInterval, PayrollCalculator


def round_to_increment(minutes: float, increment: int) -> int:
    """Round to the nearest multiple of `increment`, halves going up."""

    if increment <= 0:
        raise InvalidConfiguration(f"Rounding increment must be positive, got {increment!r}")
    steps = (Decimal(str(minutes)) / Decimal(increment)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(steps) * int(increment)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: clamp to the shift window, minus breaks, rounded, not below 0.

    Unscheduled weekdays (policy disabled) are paid as punched.
    """

    def effective_bounds(self, interval: DayInterval, policy: ShiftPolicy) -> tuple[datetime, datetime]:
        start, end = interval.clock_in, interval.clock_out
        if not policy.enabled:
            return start, end

        # Punches are expected in the site timezone already.
        shift_start = datetime.combine(start.date(), policy.start_time, tzinfo=start.tzinfo)
        shift_end = datetime.combine(start.date(), policy.end_time, tzinfo=start.tzinfo)

        if policy.clamp_early_start and start < shift_start:
            start = shift_start
        if policy.clamp_late_end and end > shift_end:
            end = shift_end
        return start, end

    def paid_minutes(
        self,
        interval: DayInterval,
        policy: ShiftPolicy,
        *,
        default_lunch_minutes: int,
        rounding_increment_minutes: int,
    ) -> int:
        if default_lunch_minutes is None or default_lunch_minutes < 0:
            raise InvalidConfiguration("Default lunch minutes must be configured and not negative")
        if rounding_increment_minutes is None or rounding_increment_minutes <= 0:
            raise InvalidConfiguration("Rounding increment must be configured and positive")

        start, end = self.effective_bounds(interval, policy)
        minutes = max(minutes_between(start, end), 0.0)

        lunch = interval.lunch_minutes
        if policy.enabled and policy.lunch_required and not interval.lunch_recorded:
            lunch = float(default_lunch_minutes)

        minutes -= lunch + interval.unpaid_minutes
        return round_to_increment(max(minutes, 0.0), int(rounding_increment_minutes))
