from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository, InMemoryGoalRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository, MySQLGoalRepository
from .attendance.repository import AttendanceRepository, GoalRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_SESSION_HOURS
from .core.exceptions import InvalidConfiguration
from .database.bootstrap import demo_directory, demo_goals
from .database.connection import DBConfig, DatabaseConnection
from .events.memory_event_repository import InMemoryEventRepository
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import ClockService
from .payroll.service import PayrollReportService
from .schedules.memory_work_day_repository import InMemoryWorkDayRepository
from .schedules.mysql_work_day_repository import MySQLWorkDayRepository
from .schedules.repository import WorkDayRepository
from .schedules.service import ScheduleService
from .settings.memory_settings_repository import InMemorySettingsRepository
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .users.memory_employee_repository import InMemoryEmployeeRepository
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_employee_repository import MySQLEmployeeRepository
from .users.mysql_session_store import MySQLSessionStore
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import EmployeeRepository, UserRepository
from .users.service import AuthService, EmployeeService
from .users.session_store import InMemorySessionStore, SessionStore
from .vacation.memory_vacation_repository import InMemoryVacationRepository
from .vacation.mysql_vacation_repository import MySQLVacationRepository
from .vacation.repository import VacationRepository
from .vacation.service import VacationService

BACKENDS = ("memory", "mysql")


@dataclass(frozen=True)
class Container:
    backend: str
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    sessions: SessionStore
    events_repo: EventRepository
    settings_repo: SettingsRepository
    attendance_repo: AttendanceRepository
    goals_repo: GoalRepository
    work_days_repo: WorkDayRepository
    vacation_repo: VacationRepository

    auth_service: AuthService
    employee_service: EmployeeService
    clock_service: ClockService
    settings_service: SettingsService
    schedule_service: ScheduleService
    attendance_service: AttendanceService
    payroll_report_service: PayrollReportService
    vacation_service: VacationService


def build_container(
    *,
    db_config: Optional[dict] = None,
    storage_backend: str = "memory",
    session_hours: int = DEFAULT_SESSION_HOURS,
    seed_demo: bool = True,
    executor: Optional[Executor] = None,
) -> Container:
    if storage_backend not in BACKENDS:
        raise InvalidConfiguration(f"STORAGE_BACKEND must be one of {BACKENDS}, got {storage_backend!r}")

    conn = None
    if storage_backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        users_repo = MySQLUserRepository(conn)
        employees_repo = MySQLEmployeeRepository(conn)
        sessions = MySQLSessionStore(conn)
        events_repo = MySQLEventRepository(conn)
        settings_repo = MySQLSettingsRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        goals_repo = MySQLGoalRepository(conn)
        work_days_repo = MySQLWorkDayRepository(conn)
        vacation_repo = MySQLVacationRepository(conn)
    else:
        users, employees = demo_directory() if seed_demo else ([], [])
        users_repo = InMemoryUserRepository(users)
        employees_repo = InMemoryEmployeeRepository(employees)
        sessions = InMemorySessionStore()
        events_repo = InMemoryEventRepository()
        settings_repo = InMemorySettingsRepository()
        attendance_repo = InMemoryAttendanceRepository()
        goals_repo = InMemoryGoalRepository(demo_goals() if seed_demo else None)
        work_days_repo = InMemoryWorkDayRepository()
        vacation_repo = InMemoryVacationRepository()

    auth_service = AuthService(users_repo, employees_repo, sessions, session_hours=session_hours)
    employee_service = EmployeeService(users_repo, employees_repo)
    clock_service = ClockService(events_repo)
    settings_service = SettingsService(settings_repo)
    schedule_service = ScheduleService(work_days_repo, settings_repo)
    attendance_service = AttendanceService(attendance_repo, goals_repo, events_repo, schedule_service, settings_repo)
    payroll_report_service = PayrollReportService(events_repo, employees_repo, settings_repo, executor=executor)
    vacation_service = VacationService(vacation_repo, payroll_report_service, settings_repo)

    return Container(
        backend=storage_backend,
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        sessions=sessions,
        events_repo=events_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        goals_repo=goals_repo,
        work_days_repo=work_days_repo,
        vacation_repo=vacation_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        clock_service=clock_service,
        settings_service=settings_service,
        schedule_service=schedule_service,
        attendance_service=attendance_service,
        payroll_report_service=payroll_report_service,
        vacation_service=vacation_service,
    )
