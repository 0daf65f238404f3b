from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_user, session_guards
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from .model import TimeEvent


def _event_dict(e: TimeEvent) -> dict:
    return {
        "event_id": e.event_id,
        "employee_id": e.employee_id,
        "kind": e.kind.value,
        "timestamp": e.timestamp.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = session_guards(container.auth_service)

    def _employee_id() -> int:
        current = current_user()
        if current.employee_id is None:
            raise NotFoundError("Employee record not found")
        return current.employee_id

    @app.route("/api/time-entries/<action>", methods=["POST"], endpoint="api_clock_action")
    @login_required
    def clock_action(action: str):
        event = container.clock_service.record_action(_employee_id(), action)
        return jsonify(_event_dict(event)), 201

    @app.route("/api/time-entries/status", methods=["GET"], endpoint="api_clock_status")
    @login_required
    def clock_status():
        state = container.clock_service.state(_employee_id())
        return jsonify({"status": state.status.value, "events": [_event_dict(e) for e in state.events]})

    @app.route("/api/time-entries/my-entries", methods=["GET"], endpoint="api_my_entries")
    @login_required
    def my_entries():
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            raise ValidationError("limit must be an integer")
        events = container.clock_service.history(_employee_id(), limit=max(1, min(limit, 500)))
        return jsonify([_event_dict(e) for e in events])

    @app.route("/api/time-entries/<int:employee_id>/<int:event_id>", methods=["DELETE"], endpoint="api_delete_entry")
    @admin_required
    def delete_entry(employee_id: int, event_id: int):
        container.clock_service.delete_event(current=current_user(), employee_id=employee_id, event_id=event_id)
        return jsonify({"success": True})
