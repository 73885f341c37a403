from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/sweep", methods=["POST"], endpoint="run_sweep")
    def run_sweep():
        """Run the end-of-day auto OUT now, for today or a given date."""
        try:
            data = require_json_object(request.get_json(silent=True))
            date_key = container.attendance_service.resolve_date_key(data.get("date"))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        modified = container.reconciliation_service.sweep(date_key)
        return jsonify({"date": date_key, "modified": modified}), 200
