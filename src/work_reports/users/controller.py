from __future__ import annotations

from flask import Blueprint, Flask, jsonify

from ..common.http import json_body, json_errors, make_guards
from ..common.validators import parse_identifier
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = make_guards(container.auth_service)
    user_bp = Blueprint("users", __name__, url_prefix="/api/v2/user")
    admin_bp = Blueprint("admin_users", __name__, url_prefix="/api/v1/admin")

    @user_bp.post("/login")
    @json_errors("login")
    def login():
        body = json_body()
        result = container.auth_service.authenticate(body.get("userId", ""), body.get("password", ""))
        return jsonify(result.to_dict())

    @admin_bp.post("/register")
    @admin_required
    @json_errors("register")
    def register_user():
        body = json_body()
        container.user_service.register(
            username=body.get("userId", ""),
            password=body.get("password") or "",
            name=body.get("name", ""),
            role=body.get("role"),
        )
        return jsonify({"message": "User created successfully"}), 201

    @admin_bp.get("/users")
    @admin_required
    @json_errors("list users")
    def list_users():
        return jsonify(container.user_service.list_users())

    @admin_bp.delete("/user/<user_id>")
    @admin_required
    @json_errors("delete user")
    def delete_user(user_id: str):
        container.user_service.delete_user(parse_identifier(user_id, "userId"))
        return jsonify({"message": "User deleted successfully"})

    app.register_blueprint(user_bp)
    app.register_blueprint(admin_bp)
