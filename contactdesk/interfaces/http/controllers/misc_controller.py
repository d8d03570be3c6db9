# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from contactdesk.infrastructure.health import check_database
from contactdesk.shared.logging import logger


class MiscController:
    def __init__(self, *, engine: Engine | None) -> None:
        self._engine = engine

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        if self._engine is None:
            status["database"] = "unused"
            return jsonify(status)
        try:
            check_database(self._engine)
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            logger.error(f"health: database check failed: {type(exc).__name__}")
            status["ok"] = False
            status["database"] = f"error: {type(exc).__name__}"
            return jsonify(status), HTTPStatus.SERVICE_UNAVAILABLE
        return jsonify(status)
