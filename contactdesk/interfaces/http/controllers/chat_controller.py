# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from contactdesk.application.use_cases.chat import PublishChatMessageUseCase
from contactdesk.interfaces.http.dto.chat import ChatMessageRequestDTO
from contactdesk.shared.errors.validation import raise_validation_error
from contactdesk.shared.middleware.rate_limit import rate_limit


class ChatController:
    def __init__(self, *, publish_use_case: PublishChatMessageUseCase) -> None:
        self._publish = publish_use_case

    @rate_limit(limit=30, window_seconds=60.0)
    def post_message(self) -> tuple[Response, int]:
        try:
            dto = ChatMessageRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        message, delivered = self._publish.execute(dto.author, dto.text)
        payload = {"success": True, "message": message.to_dict(), "delivered": delivered}
        return jsonify(payload), 202

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("chat", __name__, url_prefix="/api/chat")
        bp.add_url_rule("/messages", view_func=self.post_message, methods=["POST"])
        return bp
