from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_text, require_json_object
from ..core.enums import ScanStatus
from ..core.exceptions import UnknownCard, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    # Store failures and anything unexpected fall through to the app-level 500 handlers.
    def _records_json(records):
        return jsonify([r.to_dict() for r in records]), 200

    @app.route("/attendance", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        """Card scan: first scan of the day marks IN, second marks OUT."""
        try:
            data = require_json_object(request.get_json(silent=True))
            card_uid = optional_text(data, "cardUID", "identifier")
            result = container.attendance_service.record_scan(card_uid)
        except UnknownCard as e:
            return jsonify({"message": "Card not registered", "error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"error": str(e), "type": type(e).__name__}), 400

        if result.status == ScanStatus.ALREADY_OUT:
            return jsonify(result.to_dict()), 400
        return jsonify(result.to_dict()), 200

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        return _records_json(container.attendance_service.records_for_date("today"))

    @app.route("/attendance/date/<date_key>", methods=["GET"], endpoint="attendance_by_date")
    def attendance_by_date(date_key: str):
        try:
            return _records_json(container.attendance_service.records_for_date(date_key))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

    @app.route("/attendance/month/<month_key>", methods=["GET"], endpoint="attendance_by_month")
    def attendance_by_month(month_key: str):
        try:
            return _records_json(container.attendance_service.records_for_month(month_key))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

    @app.route("/attendance/calendar", methods=["GET"], endpoint="attendance_calendar")
    @app.route("/attendance/calendar/<date_key>", methods=["GET"], endpoint="attendance_calendar_date")
    def attendance_calendar(date_key: str | None = None):
        selected = date_key or request.args.get("date")
        try:
            view = container.attendance_service.calendar_view(selected)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(view.to_dict()), 200
