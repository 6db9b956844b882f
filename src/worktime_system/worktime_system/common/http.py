from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import ErrorKind, Role
from ..core.exceptions import DomainError

_STATUS_BY_KIND = {
    ErrorKind.ALREADY_OPEN: 409,
    ErrorKind.DUPLICATE_DAY: 409,
    ErrorKind.NO_OPEN_RECORD: 404,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ORDER: 400,
    ErrorKind.VALIDATION: 400,
}


def error_response(e: DomainError):
    return jsonify({"success": False, "error": e.kind.value, "message": str(e)}), _STATUS_BY_KIND.get(e.kind, 400)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "error": "Unauthorized", "message": "Login required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    """Authorization for privileged engine calls (corrections, batch jobs)."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "error": "Unauthorized", "message": "Login required"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "error": "Forbidden", "message": "Admin role required"}), 403
        return view(*args, **kwargs)

    return wrapper
