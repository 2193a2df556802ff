from __future__ import annotations

from flask import Blueprint, Flask, jsonify

from ..common.http import json_body, json_errors, make_guards
from ..common.validators import parse_identifier
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = make_guards(container.auth_service)
    bp = Blueprint("admin_projects", __name__, url_prefix="/api/v1/admin")

    @bp.get("/")
    @admin_required
    @json_errors("list projects")
    def list_projects():
        return jsonify([p.to_dict() for p in container.project_service.list_projects()])

    @bp.post("/")
    @admin_required
    @json_errors("create project")
    def create_project():
        body = json_body()
        project = container.project_service.create_project(name=body.get("name", ""), url=body.get("url"))
        return jsonify(project.to_dict()), 201

    @bp.put("/<project_id>")
    @admin_required
    @json_errors("update project")
    def update_project(project_id: str):
        pid = parse_identifier(project_id, "projectId")
        project = container.project_service.update_project(pid, name=json_body().get("name", ""))
        return jsonify(project.to_dict())

    @bp.delete("/<project_id>")
    @admin_required
    @json_errors("delete project")
    def delete_project(project_id: str):
        container.project_service.delete_project(parse_identifier(project_id, "projectId"))
        return jsonify({"message": "Project deleted successfully"})

    app.register_blueprint(bp)
