from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..common.validators import require_date
from ..core.exceptions import ValidationError
from .datetime_utils import today


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "username" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def date_arg(name: str = "date") -> date:
    """Date from the query string, defaulting to today."""

    value = request.args.get(name)
    return require_date(value, name) if value else today()


def int_field(data: dict[str, Any], name: str, label: str) -> int:
    value = data.get(name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a whole number")


def register_error_handlers(app) -> None:
    from ..core.exceptions import AuthenticationError, NotFoundError, StorageError

    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return _fail(str(e), 400)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _fail(str(e), 404)

    @app.errorhandler(AuthenticationError)
    def _unauthenticated(e: AuthenticationError):
        return _fail(str(e), 401)

    @app.errorhandler(StorageError)
    def _storage(e: StorageError):
        app.logger.error("Storage failure: %s", e)
        return _fail("Storage is unavailable, nothing was saved", 500)
