"""Shared Flask helpers: bearer-token guards and domain-error mapping."""
from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, g, jsonify, request

from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def make_guards(auth_service):
    """Build ``login_required`` / ``admin_required`` decorators bound to an AuthService."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            header = request.headers.get("Authorization", "")
            scheme, _, token = header.partition(" ")
            if scheme.lower() != "bearer" or not token.strip():
                return jsonify({"message": "Authorization token missing"}), 401
            try:
                g.identity = auth_service.decode_token(token.strip())
            except AuthenticationError as e:
                return jsonify({"message": str(e)}), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if not g.identity.is_admin:
                return jsonify({"message": "Admin access required"}), 403
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required


def json_errors(action: str):
    """Translate domain errors raised by a view into JSON error responses.

    ``action`` names the operation in the log line for unexpected failures.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"message": str(e)}), 400
            except AuthenticationError as e:
                return jsonify({"message": str(e)}), 401
            except AuthorizationError as e:
                return jsonify({"message": str(e)}), 403
            except NotFoundError as e:
                return jsonify({"message": str(e)}), 404
            except Exception as e:
                logger.exception("%s failed", action)
                body = {"message": "Server Error"}
                if current_app.config.get("DEBUG"):
                    body["error"] = str(e)
                return jsonify(body), 500

        return wrapper

    return decorator


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
