from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.validators import optional_text, require_json_object
from ..core.exceptions import DuplicateIdentifier, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/register", methods=["POST"], endpoint="register_user")
    def register_user():
        try:
            data = require_json_object(request.get_json(silent=True))
            user = container.user_service.register(
                optional_text(data, "name"),
                optional_text(data, "cardUID", "identifier"),
            )
        except (ValidationError, DuplicateIdentifier) as e:
            logger.info("Registration rejected: %s", e)
            return jsonify({"error": str(e), "type": type(e).__name__}), 400
        return jsonify({"message": "User registered", "user": user.to_dict()}), 201

    @app.route("/users", methods=["GET"], endpoint="list_users")
    def list_users():
        return jsonify([u.to_dict() for u in container.user_service.list_users()]), 200

    @app.route("/users/<card_uid>", methods=["GET"], endpoint="get_user")
    def get_user(card_uid: str):
        try:
            user = container.user_service.find_by_identifier(card_uid)
        except ValidationError as e:
            return jsonify({"error": str(e), "type": type(e).__name__}), 400
        if not user:
            return jsonify({"message": "Card not registered"}), 404
        return jsonify(user.to_dict()), 200
