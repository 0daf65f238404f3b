from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone

import pytest

from src.timeclock.timeclock.core.enums import EventKind, Role
from src.timeclock.timeclock.core.exceptions import AuthorizationError, NotFoundError, PeriodBeforeAnchor
from src.timeclock.timeclock.events.memory_event_repository import InMemoryEventRepository
from src.timeclock.timeclock.events.model import TimeEvent
from src.timeclock.timeclock.payroll.service import CSV_COLUMNS, PayrollReportService, to_csv
from src.timeclock.timeclock.settings.memory_settings_repository import InMemorySettingsRepository
from src.timeclock.timeclock.users.memory_employee_repository import InMemoryEmployeeRepository
from src.timeclock.timeclock.users.model import Employee, SessionUser


def at(day, hour, minute=0):
    return datetime(2025, 1, day, hour, minute, tzinfo=timezone.utc)


def punches(repo, employee_id, *items):
    for kind, ts in items:
        repo.append(TimeEvent(employee_id=employee_id, kind=kind, timestamp=ts))


@pytest.fixture
def events():
    repo = InMemoryEventRepository()
    # John: clamped full day, then an unfinished day
    punches(
        repo,
        2,
        (EventKind.CLOCK_IN, at(6, 7, 45)),
        (EventKind.LUNCH_OUT, at(6, 12)),
        (EventKind.LUNCH_IN, at(6, 12, 30)),
        (EventKind.CLOCK_OUT, at(6, 17, 10)),
        (EventKind.CLOCK_IN, at(7, 8)),
    )
    # Jane: half day in the second pay period, no lunch punched
    punches(repo, 3, (EventKind.CLOCK_IN, at(20, 8)), (EventKind.CLOCK_OUT, at(20, 12)))
    return repo


@pytest.fixture
def employees():
    return InMemoryEmployeeRepository(
        [
            Employee(2, 2, "John Doe", "john.doe@example.com"),
            Employee(3, 3, "Jane Smith", "jane.smith@example.com"),
        ]
    )


def make_service(events, employees, **kwargs):
    return PayrollReportService(events, employees, InMemorySettingsRepository(), **kwargs)


def test_report_rows_and_summary(events, employees):
    report = make_service(events, employees).build_report(start=date(2025, 1, 6), end=date(2025, 1, 31))

    assert [(r.employee_id, r.work_date.day, r.paid_minutes, r.incomplete) for r in report.rows] == [
        (2, 6, 510, False),
        (2, 7, 0, True),
        (3, 20, 180, False),
    ]
    john, jane = report.summary
    assert (john.employee_id, john.days_worked, john.paid_minutes, john.incomplete_days) == (2, 2, 510, 1)
    assert (jane.employee_id, jane.paid_minutes) == (3, 180)
    assert report.by_period == {1: {2: 510}, 2: {3: 180}}


def test_pay_period_report(events, employees):
    report = make_service(events, employees).pay_period_report(target=date(2025, 1, 20))

    assert (report.period.number, report.start, report.end) == (2, date(2025, 1, 19), date(2025, 2, 1))
    assert [r.employee_id for r in report.rows] == [3]


def test_pay_period_before_anchor(events, employees):
    with pytest.raises(PeriodBeforeAnchor):
        make_service(events, employees).pay_period_report(target=date(2024, 12, 31))


def test_split_sessions_count_gap_as_unpaid(employees):
    repo = InMemoryEventRepository()
    punches(
        repo,
        2,
        (EventKind.CLOCK_IN, at(8, 8)),
        (EventKind.CLOCK_OUT, at(8, 12)),
        (EventKind.CLOCK_IN, at(8, 13)),
        (EventKind.CLOCK_OUT, at(8, 17)),
    )

    report = make_service(repo, employees).build_report(start=date(2025, 1, 8), end=date(2025, 1, 8), employee_id=2)

    # 9h window, minus the 1h gap and the default lunch
    assert report.rows[0].paid_minutes == 420


def test_session_opened_before_range_is_skipped(employees):
    repo = InMemoryEventRepository()
    punches(repo, 2, (EventKind.CLOCK_IN, at(5, 22)), (EventKind.CLOCK_OUT, at(6, 1)))

    report = make_service(repo, employees).build_report(start=date(2025, 1, 6), end=date(2025, 1, 6))

    assert report.rows == []


def test_overnight_session_on_last_day_includes_its_clock_out(employees):
    repo = InMemoryEventRepository()
    # Saturday night, paid raw because the weekend is unscheduled
    punches(repo, 2, (EventKind.CLOCK_IN, at(11, 22)), (EventKind.CLOCK_OUT, at(12, 2)))

    report = make_service(repo, employees).build_report(start=date(2025, 1, 11), end=date(2025, 1, 11), employee_id=2)

    [row] = report.rows
    assert (row.work_date, row.clock_out, row.incomplete, row.paid_minutes) == (date(2025, 1, 11), at(12, 2), False, 240)


def test_executor_gives_same_result(events, employees):
    serial = make_service(events, employees).build_report(start=date(2025, 1, 6), end=date(2025, 1, 31))
    with ThreadPoolExecutor(max_workers=2) as pool:
        parallel = make_service(events, employees, executor=pool).build_report(
            start=date(2025, 1, 6), end=date(2025, 1, 31)
        )

    assert parallel.rows == serial.rows
    assert [s.paid_minutes for s in parallel.summary] == [s.paid_minutes for s in serial.summary]


def test_unknown_employee(events, employees):
    with pytest.raises(NotFoundError):
        make_service(events, employees).build_report(start=date(2025, 1, 6), end=date(2025, 1, 6), employee_id=42)


def test_my_report_needs_employee_record(events, employees):
    orphan = SessionUser(user_id=9, employee_id=None, role=Role.ADMIN, expires_at=at(31, 0))

    with pytest.raises(AuthorizationError):
        make_service(events, employees).my_report(current=orphan, target=date(2025, 1, 6))


def test_csv_export(events, employees):
    report = make_service(events, employees).build_report(start=date(2025, 1, 6), end=date(2025, 1, 31))

    lines = to_csv(report.rows).splitlines()

    assert lines[0] == ",".join(CSV_COLUMNS)
    assert len(lines) == 4
    assert lines[1].startswith("2,John Doe,2025-01-06,1,07:45,17:10,30,0,08:30,False")
