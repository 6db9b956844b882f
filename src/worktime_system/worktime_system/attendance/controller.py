from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.http import admin_required, error_response, login_required
from ..core.constants import DEVICE_PC
from ..core.enums import AttendanceState
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _optional_datetime(data: dict, key: str):
    value = data.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_iso_datetime(value)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    @login_required
    def clock_in():
        data = _json_body()
        try:
            record = container.attendance_service.clock_in(
                int(session["user_id"]), device=data.get("deviceType") or DEVICE_PC
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "attendance": record.to_dict()}), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    @login_required
    def clock_out():
        data = _json_body()
        try:
            record = container.attendance_service.clock_out(
                int(session["user_id"]), device=data.get("deviceType") or DEVICE_PC
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "attendance": record.to_dict()}), 200

    @app.route("/api/attendance/status", methods=["GET"], endpoint="api_attendance_status")
    @login_required
    def status():
        try:
            work_date = parse_iso_date(request.args["date"]) if request.args.get("date") else None
            record = container.attendance_service.get_status(int(session["user_id"]), work_date)
        except DomainError as e:
            return error_response(e)
        state = record.state if record else AttendanceState.NOT_STARTED
        return jsonify({"success": True, "state": state.value, "attendance": record.to_dict() if record else None}), 200

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="api_admin_attendance_by_date")
    @admin_required
    def attendance_by_date():
        try:
            work_date = parse_iso_date(request.args.get("date", ""))
            records = container.attendance_service.list_for_date(work_date)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "records": [r.to_dict() for r in records]}), 200

    @app.route("/api/admin/attendance/clock-in", methods=["POST"], endpoint="api_admin_clock_in")
    @admin_required
    def admin_clock_in():
        data = _json_body()
        try:
            at = _optional_datetime(data, "clockIn")
            if at is None:
                raise ValidationError("clockIn is required")
            record = container.attendance_service.admin_clock_in(
                data.get("userId"),
                at=at,
                editor_id=int(session["user_id"]),
                device=data.get("deviceType") or DEVICE_PC,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "attendance": record.to_dict()}), 201

    @app.route("/api/admin/attendance/clock-out", methods=["POST"], endpoint="api_admin_clock_out")
    @admin_required
    def admin_clock_out():
        data = _json_body()
        try:
            at = _optional_datetime(data, "clockOut")
            if at is None:
                raise ValidationError("clockOut is required")
            record = container.attendance_service.admin_clock_out(
                data.get("userId"), at=at, editor_id=int(session["user_id"])
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "attendance": record.to_dict()}), 200

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["PATCH"], endpoint="api_admin_update_attendance")
    @admin_required
    def update_attendance(attendance_id: int):
        data = _json_body()
        try:
            record = container.attendance_service.admin_update(
                attendance_id,
                editor_id=int(session["user_id"]),
                clock_in=_optional_datetime(data, "clockIn"),
                clock_out=_optional_datetime(data, "clockOut"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "attendance": record.to_dict()}), 200

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="api_admin_delete_attendance")
    @admin_required
    def delete_attendance(attendance_id: int):
        try:
            container.attendance_service.delete_record(attendance_id)
        except DomainError as e:
            return error_response(e)
        logger.info("Attendance %s deleted by user %s", attendance_id, session["user_id"])
        return jsonify({"success": True}), 200

    @app.route("/api/admin/attendance/auto-close", methods=["POST"], endpoint="api_admin_auto_close")
    @admin_required
    def auto_close():
        data = _json_body()
        try:
            result = container.attendance_service.auto_close(_optional_datetime(data, "cutoff"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, **result.to_dict()}), 200

    @app.route("/api/admin/attendance/recalculate", methods=["POST"], endpoint="api_admin_recalculate")
    @admin_required
    def recalculate():
        summary = container.recalculation_service.recalculate_all()
        return jsonify({"success": True, **summary.to_dict()}), 200

    @app.route("/api/admin/audit-logs", methods=["GET"], endpoint="api_admin_audit_logs")
    @admin_required
    def audit_logs():
        try:
            attendance_id = request.args.get("attendanceId", type=int)
            start = parse_iso_datetime(request.args["start"]) if request.args.get("start") else None
            end = parse_iso_datetime(request.args["end"]) if request.args.get("end") else None
            entries = container.audit_service.list_entries(attendance_id=attendance_id, start=start, end=end)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "logs": [e.to_dict() for e in entries]}), 200
