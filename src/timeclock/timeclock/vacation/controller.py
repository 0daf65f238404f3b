from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_utc
from ..common.http import current_user, json_body, session_guards
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = session_guards(container.auth_service)

    @app.route("/api/vacation/me", methods=["GET"], endpoint="api_vacation_me")
    @login_required
    def my_vacation():
        current = current_user()
        if current.employee_id is None:
            raise NotFoundError("Employee record not found")
        return jsonify(container.vacation_service.summary(current.employee_id).as_dict())

    @app.route("/api/vacation/<int:employee_id>", methods=["GET"], endpoint="api_vacation_employee")
    @admin_required
    def employee_vacation(employee_id: int):
        container.employee_service.get(employee_id)
        return jsonify(container.vacation_service.summary(employee_id).as_dict())

    @app.route("/api/vacation/<int:employee_id>", methods=["PUT"], endpoint="api_vacation_adjust")
    @admin_required
    def adjust(employee_id: int):
        container.employee_service.get(employee_id)
        data = json_body()
        try:
            year = int(data.get("year") or now_utc().year)
        except (TypeError, ValueError):
            raise ValidationError("year must be an integer")

        container.vacation_service.adjust(
            current=current_user(),
            employee_id=employee_id,
            year=year,
            allotted_hours=data.get("allotted_hours"),
            used_hours=data.get("used_hours"),
        )
        return jsonify(container.vacation_service.summary(employee_id).as_dict())
