from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_user, json_body, session_guards
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = session_guards(container.auth_service)

    @app.route("/api/settings", methods=["GET"], endpoint="api_settings")
    @login_required
    def get_settings():
        return jsonify(container.settings_service.current().as_dict())

    @app.route("/api/settings", methods=["PUT"], endpoint="api_update_settings")
    @admin_required
    def update_settings():
        settings = container.settings_service.update(current_role=current_user().role, payload=json_body())
        return jsonify(settings.as_dict())
