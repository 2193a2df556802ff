from __future__ import annotations

from flask import Blueprint, Flask, jsonify, request

from ..common.http import json_body, json_errors, make_guards
from ..common.validators import parse_identifier
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container.auth_service)
    user_bp = Blueprint("user_reports", __name__, url_prefix="/api/v2/user")
    admin_bp = Blueprint("admin_reports", __name__, url_prefix="/api/v1/admin")

    def _as_json(reports):
        return jsonify([r.to_dict() for r in reports])

    @user_bp.post("/submit")
    @login_required
    @json_errors("submit report")
    def submit_report():
        container.report_service.submit_report(json_body())
        return jsonify({"message": "Work report submitted successfully!"}), 201

    @user_bp.get("/get")
    @login_required
    @json_errors("filter reports")
    def get_reports():
        user_id = parse_identifier(request.args.get("userId"), "userId")
        reports = container.report_service.filtered_reports(
            user_id,
            filter_type=request.args.get("filterType", ""),
            filter_value=request.args.get("filterValue", ""),
        )
        return _as_json(reports)

    @user_bp.get("/report/details/<project_id>")
    @login_required
    @json_errors("project reports")
    def project_reports(project_id: str):
        pid = parse_identifier(project_id, "projectId")
        return _as_json(container.report_service.reports_for_project(pid))

    @user_bp.get("/report/<project_id>/<user_id>")
    @login_required
    @json_errors("project reports for user")
    def project_user_reports(project_id: str, user_id: str):
        pid = parse_identifier(project_id, "projectId")
        uid = parse_identifier(user_id, "userId")
        return _as_json(container.report_service.reports_for_project(pid, user_id=uid))

    @admin_bp.get("/reports/today")
    @admin_required
    @json_errors("today report")
    def today_reports():
        today = container.report_service.today_reports()
        response = jsonify(today.users)
        for name, value in today.diagnostics.to_headers().items():
            response.headers[name] = value
        return response

    @admin_bp.get("/reports")
    @admin_required
    @json_errors("list reports")
    def all_reports():
        return _as_json(container.report_service.all_reports())

    @admin_bp.get("/user/<user_id>/reports")
    @admin_required
    @json_errors("user reports")
    def user_reports(user_id: str):
        uid = parse_identifier(user_id, "userId")
        return _as_json(container.report_service.reports_for_user(uid))

    app.register_blueprint(user_bp)
    app.register_blueprint(admin_bp)
