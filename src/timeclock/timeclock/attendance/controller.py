from __future__ import annotations

from datetime import date, datetime

from flask import Flask, jsonify, request

from ..common.date_ranges import get_date_range
from ..common.datetime_utils import now_utc, parse_iso_date
from ..common.http import current_user, json_body, query_int, session_guards
from ..container import Container
from ..core.enums import DateRangeOption
from ..core.exceptions import ValidationError
from .model import AttendanceDay


def _day_dict(d: AttendanceDay) -> dict:
    return {
        "employee_id": d.employee_id,
        "work_date": d.work_date.isoformat(),
        "status": d.status.value,
        "check_in_time": d.check_in_time.isoformat() if d.check_in_time else None,
        "minutes_late": d.minutes_late,
        "note": d.note,
    }


def _parse_month(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise ValidationError(f"Invalid month (YYYY-MM): {value!r}")


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = session_guards(container.auth_service)

    def _today() -> date:
        return now_utc().astimezone(container.settings_service.current().tz).date()

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="api_attendance_summary")
    @login_required
    def summary():
        try:
            option = DateRangeOption(request.args.get("range", DateRangeOption.CURRENT_MONTH.value))
        except ValueError:
            raise ValidationError(f"Unknown range: {request.args.get('range')!r}")
        month = request.args.get("month")
        selected = _parse_month(month) if month else None

        date_range = get_date_range(option, today=_today(), selected=selected)
        stats = container.attendance_service.summary(
            current=current_user(),
            start=date_range.start_date,
            end=date_range.end_date,
            employee_id=query_int("employee_id"),
        )
        return jsonify(
            {
                "range": {
                    "start": date_range.start_date.isoformat(),
                    "end": date_range.end_date.isoformat(),
                    "label": date_range.label,
                },
                "summary": [s.as_dict() for s in stats],
            }
        )

    @app.route("/api/attendance/close-day", methods=["POST"], endpoint="api_attendance_close_day")
    @admin_required
    def close_day():
        data = json_body()
        try:
            employee_id = int(data["employee_id"])
        except (KeyError, TypeError, ValueError):
            raise ValidationError("employee_id is required")

        day = container.attendance_service.close_day(
            current=current_user(),
            employee_id=employee_id,
            work_date=parse_iso_date(data.get("date", "")),
            excused=bool(data.get("excused", False)),
            reason=data.get("reason"),
        )
        return jsonify(_day_dict(day)), 201

    @app.route("/api/attendance/close-range", methods=["POST"], endpoint="api_attendance_close_range")
    @admin_required
    def close_range():
        data = json_body()
        start = parse_iso_date(data.get("start", ""))
        end = parse_iso_date(data.get("end", ""))

        employee_ids = data.get("employee_ids") or container.employee_service.active_ids()
        stored = container.attendance_service.close_range(
            current=current_user(),
            employee_ids=[int(i) for i in employee_ids],
            start=start,
            end=end,
        )
        return jsonify({"stored": stored})

    @app.route("/api/attendance/days", methods=["GET"], endpoint="api_attendance_days")
    @admin_required
    def days():
        start = parse_iso_date(request.args.get("start", ""))
        end = parse_iso_date(request.args.get("end", ""))
        items = container.attendance_service.list_days(start=start, end=end, employee_id=query_int("employee_id"))
        return jsonify([_day_dict(d) for d in items])

    @app.route("/api/attendance/goals", methods=["GET"], endpoint="api_attendance_goals")
    @admin_required
    def goals():
        return jsonify([g.as_dict() for g in container.attendance_service.list_goals()])

    @app.route("/api/attendance/goals", methods=["POST"], endpoint="api_attendance_save_goal")
    @admin_required
    def save_goal():
        goal = container.attendance_service.save_goal(current=current_user(), payload=json_body())
        return jsonify(goal.as_dict()), 201
