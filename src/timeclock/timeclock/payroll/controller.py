from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import now_utc
from ..common.http import current_user, query_date, query_int, session_guards
from ..container import Container
from ..core.exceptions import ValidationError
from .service import to_csv


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = session_guards(container.auth_service)

    def _today():
        return now_utc().astimezone(container.settings_service.current().tz).date()

    @app.route("/api/reports/timesheet", methods=["GET"], endpoint="api_report_timesheet")
    @admin_required
    def timesheet():
        start = query_date("start")
        end = query_date("end")
        if end < start:
            raise ValidationError("end must not be before start")

        report = container.payroll_report_service.build_report(start=start, end=end, employee_id=query_int("employee_id"))
        if request.args.get("format") == "csv":
            filename = f"timesheet_{start.isoformat()}_{end.isoformat()}.csv"
            return Response(
                to_csv(report.rows),
                mimetype="text/csv",
                headers={"Content-Disposition": f"attachment; filename={filename}"},
            )
        return jsonify(report.as_dict())

    @app.route("/api/reports/pay-period", methods=["GET"], endpoint="api_report_pay_period")
    @admin_required
    def pay_period():
        report = container.payroll_report_service.pay_period_report(target=query_date("date", _today()))
        return jsonify(report.as_dict())

    @app.route("/api/reports/me", methods=["GET"], endpoint="api_report_me")
    @login_required
    def my_report():
        report = container.payroll_report_service.my_report(current=current_user(), target=query_date("date", _today()))
        return jsonify(report.as_dict())
