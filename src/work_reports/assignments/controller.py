from __future__ import annotations

from flask import Blueprint, Flask, g, jsonify

from ..common.http import json_body, json_errors, make_guards
from ..common.validators import parse_identifier
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container.auth_service)
    user_bp = Blueprint("user_assignments", __name__, url_prefix="/api/v2/user")
    admin_bp = Blueprint("admin_assignments", __name__, url_prefix="/api/v1/admin")

    @user_bp.post("/projects")
    @login_required
    @json_errors("list own projects")
    def my_projects():
        return jsonify(container.assignment_service.assigned_projects(g.identity.user_id))

    @admin_bp.post("/assign")
    @admin_required
    @json_errors("assign projects")
    def assign_projects():
        body = json_body()
        container.assignment_service.assign_projects(user_id=body.get("name"), project_ids=body.get("projects"))
        return jsonify({"message": "Projects assigned successfully."}), 201

    @admin_bp.get("/assigned-projects/<user_id>")
    @admin_required
    @json_errors("list assigned projects")
    def assigned_projects(user_id: str):
        uid = parse_identifier(user_id, "userId")
        return jsonify(container.assignment_service.assigned_projects(uid))

    app.register_blueprint(user_bp)
    app.register_blueprint(admin_bp)
