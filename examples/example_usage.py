"""Example: drive the service layer and the engine without Flask.

Uses the in-memory backend, so nothing is written to MySQL.
"""

from datetime import date, datetime, timezone

from src.timeclock.timeclock.container import build_container
from src.timeclock.timeclock.core.enums import EventKind
from src.timeclock.timeclock.events.model import TimeEvent
from src.timeclock.timeclock.payroll.periods import period_for
from src.timeclock.timeclock.timesheet.reducer import reduce_events


def main():
    container = build_container(storage_backend="memory")
    john = container.employees_repo.get_by_id(2)

    day = datetime(2025, 1, 6, tzinfo=timezone.utc)
    for hour, minute, kind in [
        (8, 0, EventKind.CLOCK_IN),
        (12, 0, EventKind.LUNCH_OUT),
        (12, 30, EventKind.LUNCH_IN),
        (17, 0, EventKind.CLOCK_OUT),
    ]:
        container.clock_service.record(john.employee_id, kind, now=day.replace(hour=hour, minute=minute))

    events = [
        TimeEvent(employee_id=9, kind=EventKind.CLOCK_IN, timestamp=day.replace(hour=9)),
        TimeEvent(employee_id=9, kind=EventKind.CLOCK_OUT, timestamp=day.replace(hour=13)),
    ]
    print(reduce_events(events).as_dict())

    settings = container.settings_service.current()
    print(period_for(settings.pay_period, date(2025, 1, 20)).label)

    report = container.payroll_report_service.build_report(start=date(2025, 1, 6), end=date(2025, 1, 6))
    for row in report.rows:
        print(row.as_dict())


if __name__ == "__main__":
    main()
