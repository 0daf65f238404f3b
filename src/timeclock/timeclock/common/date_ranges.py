"""Preset reporting ranges (month to date, last month, ...).

`today` is always passed in by the caller so the ranges stay reproducible.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import DateRangeOption


@dataclass(frozen=True)
class DateRange:
    start_date: date
    end_date: date
    label: str


def _month_range(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _month_label(d: date) -> str:
    return d.strftime("%B %Y")


def get_date_range(option: DateRangeOption, *, today: date, selected: Optional[date] = None) -> DateRange:
    option = DateRangeOption(option)

    if option == DateRangeOption.CURRENT_MONTH:
        start, end = _month_range(today.year, today.month)
        return DateRange(start, end, f"{_month_label(start)} (Month to Date)")

    if option == DateRangeOption.LAST_MONTH:
        year, month = (today.year - 1, 12) if today.month == 1 else (today.year, today.month - 1)
        start, end = _month_range(year, month)
        return DateRange(start, end, _month_label(start))

    if option == DateRangeOption.SELECT_MONTH:
        if selected is None:
            return get_date_range(DateRangeOption.CURRENT_MONTH, today=today)
        start, end = _month_range(selected.year, selected.month)
        return DateRange(start, end, _month_label(start))

    if option == DateRangeOption.CURRENT_YEAR:
        return DateRange(date(today.year, 1, 1), date(today.year, 12, 31), f"{today.year} (Year to Date)")

    last_year = today.year - 1
    return DateRange(date(last_year, 1, 1), date(last_year, 12, 31), str(last_year))
