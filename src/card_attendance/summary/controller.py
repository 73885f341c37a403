from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.constants import MAX_SUMMARY_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    default_days = int(app.config.get("SUMMARY_DAYS", 30))

    @app.route("/", methods=["GET"], endpoint="home")
    def home():
        # Read-only page: the service degrades to an empty view instead of failing.
        days = request.args.get("days", default=default_days, type=int)
        if days is None or days < 1:
            days = default_days
        days = min(days, MAX_SUMMARY_DAYS)
        return jsonify(container.summary_service.home(days).to_dict()), 200
