from datetime import date

from src.timeclock.timeclock.common.date_ranges import get_date_range
from src.timeclock.timeclock.core.enums import DateRangeOption

TODAY = date(2025, 3, 14)


def test_current_month():
    r = get_date_range(DateRangeOption.CURRENT_MONTH, today=TODAY)

    assert (r.start_date, r.end_date) == (date(2025, 3, 1), date(2025, 3, 31))
    assert r.label == "March 2025 (Month to Date)"


def test_last_month_wraps_year():
    r = get_date_range(DateRangeOption.LAST_MONTH, today=date(2025, 1, 10))

    assert (r.start_date, r.end_date) == (date(2024, 12, 1), date(2024, 12, 31))


def test_select_month_handles_leap_february():
    r = get_date_range(DateRangeOption.SELECT_MONTH, today=TODAY, selected=date(2024, 2, 1))

    assert r.end_date == date(2024, 2, 29)


def test_select_month_without_selection_falls_back_to_current():
    assert get_date_range("select-month", today=TODAY) == get_date_range("current-month", today=TODAY)


def test_years():
    assert get_date_range(DateRangeOption.CURRENT_YEAR, today=TODAY).start_date == date(2025, 1, 1)
    last = get_date_range(DateRangeOption.LAST_YEAR, today=TODAY)
    assert (last.start_date, last.end_date, last.label) == (date(2024, 1, 1), date(2024, 12, 31), "2024")
