from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import bearer_token, current_user, json_body, session_guards
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = session_guards(container.auth_service)

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def login():
        data = json_body()
        result = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return jsonify(
            {
                "token": result.token,
                "expires_at": result.session.expires_at.isoformat(),
                "role": result.session.role.value,
                "employee": result.employee.as_dict() if result.employee else None,
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    @login_required
    def logout():
        container.auth_service.logout(bearer_token())
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="api_me")
    @login_required
    def me():
        current = current_user()
        employee = container.employee_service.for_session(current) if current.employee_id else None
        return jsonify(
            {
                "user_id": current.user_id,
                "role": current.role.value,
                "employee": employee.as_dict() if employee else None,
            }
        )

    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    @admin_required
    def employees():
        items = container.employee_service.list_all(current=current_user())
        return jsonify([e.as_dict() for e in items])

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="api_employee")
    @login_required
    def employee(employee_id: int):
        found = container.employee_service.get_visible(current=current_user(), employee_id=employee_id)
        return jsonify(found.as_dict())

    @app.route("/api/employees", methods=["POST"], endpoint="api_create_employee")
    @admin_required
    def create_employee():
        data = json_body()
        try:
            role = Role(data.get("role", Role.EMPLOYEE.value))
        except ValueError:
            raise ValidationError(f"Unknown role: {data.get('role')!r}")

        employee_id = container.employee_service.create_employee(
            current=current_user(),
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=role,
        )
        return jsonify(container.employee_service.get(employee_id).as_dict()), 201
