"""Pay period bucketing.

Periods are numbered from 1, starting at the configured anchor date, and
run for `period_length_days` consecutive days. Every function here is a
pure function of the config and the date passed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.constants import BIWEEKLY_PERIOD_DAYS, WEEKLY_PERIOD_DAYS
from ..core.enums import PayPeriodType
from ..core.exceptions import InvalidConfiguration, PeriodBeforeAnchor


@dataclass(frozen=True)
class PayPeriodConfig:
    anchor_date: date
    period_length_days: int

    def __post_init__(self):
        if self.anchor_date is None:
            raise InvalidConfiguration("Pay period anchor date is required")
        if isinstance(self.anchor_date, datetime):
            object.__setattr__(self, "anchor_date", self.anchor_date.date())
        if self.period_length_days is None or int(self.period_length_days) <= 0:
            raise InvalidConfiguration(f"Pay period length must be positive, got {self.period_length_days!r}")

    @classmethod
    def from_type(cls, period_type: PayPeriodType | str, anchor_date: date) -> "PayPeriodConfig":
        try:
            period_type = PayPeriodType(period_type)
        except ValueError:
            raise InvalidConfiguration(f"Unknown pay period type: {period_type!r}")
        length = WEEKLY_PERIOD_DAYS if period_type == PayPeriodType.WEEKLY else BIWEEKLY_PERIOD_DAYS
        return cls(anchor_date=anchor_date, period_length_days=length)

    @property
    def period_type(self) -> str:
        return {
            WEEKLY_PERIOD_DAYS: PayPeriodType.WEEKLY.value,
            BIWEEKLY_PERIOD_DAYS: PayPeriodType.BIWEEKLY.value,
        }.get(self.period_length_days, f"{self.period_length_days}-day")


@dataclass(frozen=True)
class PayPeriod:
    number: int
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        day = self.start
        while day <= self.end:
            yield day
            day += timedelta(days=1)

    @property
    def label(self) -> str:
        return f"Pay Period {self.number} ({self.start.isoformat()} - {self.end.isoformat()})"


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def period_number(config: PayPeriodConfig, target: date) -> int:
    target = _as_date(target)
    if target < config.anchor_date:
        raise PeriodBeforeAnchor(
            f"{target.isoformat()} is before the pay period anchor {config.anchor_date.isoformat()}"
        )
    return (target - config.anchor_date).days // config.period_length_days + 1


def period_by_number(config: PayPeriodConfig, number: int) -> PayPeriod:
    if int(number) < 1:
        raise PeriodBeforeAnchor(f"Pay period numbers start at 1, got {number!r}")
    start = config.anchor_date + timedelta(days=(int(number) - 1) * config.period_length_days)
    return PayPeriod(number=int(number), start=start, end=start + timedelta(days=config.period_length_days - 1))


def period_for(config: PayPeriodConfig, target: date) -> PayPeriod:
    return period_by_number(config, period_number(config, target))


def periods_between(config: PayPeriodConfig, start: date, end: date) -> list[PayPeriod]:
    """Every period overlapping [start, end]; days before the anchor are skipped."""

    start, end = _as_date(start), _as_date(end)
    if end < start or end < config.anchor_date:
        return []
    first = period_number(config, max(start, config.anchor_date))
    last = period_number(config, end)
    return [period_by_number(config, n) for n in range(first, last + 1)]
