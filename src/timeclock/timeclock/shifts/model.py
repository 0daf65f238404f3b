from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, time
from typing import Sequence

from ..core.constants import DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from ..core.exceptions import InvalidConfiguration

WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass(frozen=True)
class ShiftPolicy:
    """Domain entity: configured shift for one weekday (Monday=0)."""

    weekday: int
    start_time: time = DEFAULT_SHIFT_START
    end_time: time = DEFAULT_SHIFT_END
    enabled: bool = True
    lunch_required: bool = True
    clamp_early_start: bool = True
    clamp_late_end: bool = True

    def __post_init__(self):
        if not 0 <= int(self.weekday) <= 6:
            raise InvalidConfiguration(f"weekday must be 0..6, got {self.weekday!r}")
        if self.start_time is None or self.end_time is None:
            raise InvalidConfiguration("Shift start_time and end_time are required")
        if self.end_time <= self.start_time:
            raise InvalidConfiguration(
                f"{WEEKDAY_NAMES[self.weekday]}: shift end {self.end_time} must be after start {self.start_time}"
            )

    @property
    def day_name(self) -> str:
        return WEEKDAY_NAMES[self.weekday]

    def with_times(self, start_time: time, end_time: time) -> "ShiftPolicy":
        return replace(self, start_time=start_time, end_time=end_time)


@dataclass(frozen=True)
class WeeklySchedule:
    """Exactly seven ShiftPolicy entries, indexed by weekday."""

    policies: tuple[ShiftPolicy, ...]

    def __post_init__(self):
        policies = tuple(sorted(self.policies, key=lambda p: p.weekday))
        if [p.weekday for p in policies] != list(range(7)):
            raise InvalidConfiguration("Weekly schedule needs one shift policy per weekday")
        object.__setattr__(self, "policies", policies)

    @classmethod
    def default(cls) -> "WeeklySchedule":
        return cls(tuple(ShiftPolicy(weekday=d, enabled=d < 5) for d in range(7)))

    @classmethod
    def from_policies(cls, policies: Sequence[ShiftPolicy]) -> "WeeklySchedule":
        return cls(tuple(policies))

    def for_weekday(self, weekday: int) -> ShiftPolicy:
        return self.policies[weekday]

    def for_date(self, day: date) -> ShiftPolicy:
        return self.policies[day.weekday()]
