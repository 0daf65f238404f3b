from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo

from ..common.datetime_utils import format_hhmm, get_zone, parse_hhmm, parse_iso_date
from ..core import constants
from ..core.exceptions import InvalidConfiguration, ValidationError
from ..payroll.periods import PayPeriodConfig
from ..shifts.model import WEEKDAY_NAMES, ShiftPolicy, WeeklySchedule


@dataclass(frozen=True)
class SystemSettings:
    """Engine configuration, loaded once per computation and passed explicitly."""

    schedule: WeeklySchedule = field(default_factory=WeeklySchedule.default)
    pay_period: PayPeriodConfig = field(
        default_factory=lambda: PayPeriodConfig(
            anchor_date=constants.DEFAULT_PAY_PERIOD_ANCHOR,
            period_length_days=constants.BIWEEKLY_PERIOD_DAYS,
        )
    )
    grace_minutes: int = constants.DEFAULT_GRACE_MINUTES
    rounding_increment_minutes: int = constants.DEFAULT_ROUNDING_INCREMENT_MINUTES
    default_lunch_minutes: int = constants.DEFAULT_LUNCH_MINUTES
    late_includes_grace: bool = False
    vacation_allotment_hours: float = constants.DEFAULT_VACATION_ALLOTMENT_HOURS
    vacation_accrual_rate: float = constants.DEFAULT_VACATION_ACCRUAL_RATE
    timezone: str = "UTC"

    def __post_init__(self):
        if int(self.grace_minutes) < 0:
            raise InvalidConfiguration("grace_minutes must not be negative")
        if int(self.rounding_increment_minutes) <= 0:
            raise InvalidConfiguration("rounding_increment_minutes must be positive")
        if int(self.default_lunch_minutes) < 0:
            raise InvalidConfiguration("default_lunch_minutes must not be negative")
        if float(self.vacation_allotment_hours) < 0:
            raise InvalidConfiguration("vacation_allotment_hours must not be negative")
        if float(self.vacation_accrual_rate) <= 0:
            raise InvalidConfiguration("vacation_accrual_rate must be positive")
        get_zone(self.timezone)

    @property
    def tz(self) -> tzinfo:
        return get_zone(self.timezone)

    def as_dict(self) -> dict:
        return {
            "daily_shifts": {
                p.day_name: {
                    "start": format_hhmm(p.start_time),
                    "end": format_hhmm(p.end_time),
                    "enabled": p.enabled,
                    "lunch_required": p.lunch_required,
                    "clamp_early_start": p.clamp_early_start,
                    "clamp_late_end": p.clamp_late_end,
                }
                for p in self.schedule.policies
            },
            "pay_period_start_date": self.pay_period.anchor_date.isoformat(),
            "pay_period_length_days": self.pay_period.period_length_days,
            "pay_period_type": self.pay_period.period_type,
            "grace_minutes": self.grace_minutes,
            "rounding_increment_minutes": self.rounding_increment_minutes,
            "default_lunch_minutes": self.default_lunch_minutes,
            "late_includes_grace": self.late_includes_grace,
            "vacation_allotment_hours": self.vacation_allotment_hours,
            "vacation_accrual_rate": self.vacation_accrual_rate,
            "timezone": self.timezone,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SystemSettings":
        """Build from the `as_dict` shape; missing keys keep their defaults."""

        defaults = cls()
        try:
            shifts = data.get("daily_shifts") or {}
            policies = []
            for weekday, name in enumerate(WEEKDAY_NAMES):
                current = defaults.schedule.for_weekday(weekday)
                raw = shifts.get(name) or {}
                policies.append(
                    ShiftPolicy(
                        weekday=weekday,
                        start_time=parse_hhmm(raw["start"]) if "start" in raw else current.start_time,
                        end_time=parse_hhmm(raw["end"]) if "end" in raw else current.end_time,
                        enabled=bool(raw.get("enabled", current.enabled)),
                        lunch_required=bool(raw.get("lunch_required", current.lunch_required)),
                        clamp_early_start=bool(raw.get("clamp_early_start", current.clamp_early_start)),
                        clamp_late_end=bool(raw.get("clamp_late_end", current.clamp_late_end)),
                    )
                )

            if "pay_period_length_days" in data:
                pay_period = PayPeriodConfig(
                    anchor_date=parse_iso_date(data.get("pay_period_start_date") or defaults.pay_period.anchor_date.isoformat()),
                    period_length_days=int(data["pay_period_length_days"]),
                )
            else:
                pay_period = PayPeriodConfig.from_type(
                    data.get("pay_period_type", defaults.pay_period.period_type),
                    parse_iso_date(data.get("pay_period_start_date") or defaults.pay_period.anchor_date.isoformat()),
                )

            return cls(
                schedule=WeeklySchedule.from_policies(policies),
                pay_period=pay_period,
                grace_minutes=int(data.get("grace_minutes", defaults.grace_minutes)),
                rounding_increment_minutes=int(data.get("rounding_increment_minutes", defaults.rounding_increment_minutes)),
                default_lunch_minutes=int(data.get("default_lunch_minutes", defaults.default_lunch_minutes)),
                late_includes_grace=bool(data.get("late_includes_grace", defaults.late_includes_grace)),
                vacation_allotment_hours=float(data.get("vacation_allotment_hours", defaults.vacation_allotment_hours)),
                vacation_accrual_rate=float(data.get("vacation_accrual_rate", defaults.vacation_accrual_rate)),
                timezone=str(data.get("timezone", defaults.timezone)),
            )
        except (TypeError, ValueError, ValidationError) as e:
            raise InvalidConfiguration(f"Invalid settings payload: {e}")
