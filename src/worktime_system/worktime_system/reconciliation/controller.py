from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response, login_required
from ..core.enums import Classification, Role
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reconciliation", methods=["GET"], endpoint="api_reconciliation")
    @login_required
    def reconcile():
        try:
            user_id = request.args.get("user_id", type=int) or int(session["user_id"])
            # Staff may only look at their own day.
            if session.get("role") != Role.ADMIN.value and user_id != int(session["user_id"]):
                return jsonify({"success": False, "error": "Forbidden", "message": "Admin role required"}), 403
            work_date = parse_iso_date(request.args.get("date", ""))
            result = container.reconciliation_service.reconcile(user_id, work_date)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "result": result.to_dict()}), 200

    @app.route("/api/reconciliation/issues", methods=["GET"], endpoint="api_reconciliation_issues")
    @login_required
    def recent_issues():
        try:
            kind = request.args.get("kind", Classification.EXCESSIVE.value)
            try:
                classification = Classification(kind)
            except ValueError:
                raise ValidationError(f"Unknown classification: {kind!r}")
            flagged = container.reconciliation_service.find_recent_issues(classification)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "users": [f.to_dict() for f in flagged]}), 200
