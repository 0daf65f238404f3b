from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc, parse_iso_date
from ..common.http import current_user, json_body, query_int, session_guards
from ..container import Container
from ..core.enums import ScheduleTemplate
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .service import week_start_for


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = session_guards(container.auth_service)

    @app.route("/api/schedules/week", methods=["GET"], endpoint="api_schedule_week")
    @login_required
    def week():
        current = current_user()
        employee_id = query_int("employee_id") or current.employee_id
        if employee_id is None:
            raise NotFoundError("Employee record not found")
        if not current.is_admin and employee_id != current.employee_id:
            raise AuthorizationError("Access denied")

        if request.args.get("start"):
            start = week_start_for(parse_iso_date(request.args["start"]))
        else:
            start = week_start_for(now_utc().astimezone(container.settings_service.current().tz).date())

        days = container.schedule_service.week(employee_id=employee_id, week_start=start)
        return jsonify(
            {
                "employee_id": employee_id,
                "week_start": start.isoformat(),
                "days": [d.as_dict() for d in days],
                "total_hours": round(container.schedule_service.week_total_hours(days), 2),
            }
        )

    @app.route("/api/schedules/template", methods=["POST"], endpoint="api_schedule_template")
    @admin_required
    def template():
        data = json_body()
        try:
            chosen = ScheduleTemplate(data.get("template", ""))
        except ValueError:
            raise ValidationError(f"Unknown template: {data.get('template')!r}")

        result = container.schedule_service.apply_template(
            current=current_user(),
            employee_ids=[int(i) for i in data.get("employee_ids") or []],
            week_start=week_start_for(parse_iso_date(data.get("week_start", ""))),
            template=chosen,
            location=data.get("store_location"),
        )
        return jsonify({str(emp): [d.as_dict() for d in days] for emp, days in result.items()})

    @app.route("/api/schedules/day", methods=["PUT"], endpoint="api_schedule_day")
    @admin_required
    def update_day():
        day = container.schedule_service.update_day(current=current_user(), payload=json_body())
        return jsonify(day.as_dict())
