# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""WebSocket endpoint for the chat relay.

Each connection is subscribed to the hub for its lifetime. Text frames are
JSON objects ``{"author": ..., "text": ...}``; every accepted frame is
broadcast to all connections, the sender included.
"""

from __future__ import annotations

import json
import threading

from pydantic import ValidationError
from websockets.exceptions import ConnectionClosed
from websockets.sync.server import Server, ServerConnection, serve

from contactdesk.application.use_cases.chat import PublishChatMessageUseCase
from contactdesk.infrastructure.chat.hub import ChatHub
from contactdesk.interfaces.http.dto.chat import ChatMessageRequestDTO
from contactdesk.shared.errors import AppError
from contactdesk.shared.errors.validation import format_pydantic_errors
from contactdesk.shared.logging import logger


def _error_frame(code: str, context: dict | None = None) -> str:
    payload: dict[str, object] = {"type": "error", "error": code}
    if context:
        payload["context"] = context
    return json.dumps(payload)


class ChatRelayServer:
    def __init__(
        self,
        *,
        hub: ChatHub,
        publish_use_case: PublishChatMessageUseCase,
        host: str,
        port: int,
    ) -> None:
        self._hub = hub
        self._publish = publish_use_case
        self._host = host
        self._port = port
        self._server: Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def port(self) -> int:
        if self._server is None:
            raise RuntimeError("chat relay is not running")
        return self._server.socket.getsockname()[1]

    def start(self) -> int:
        if self._server is not None:
            return self.port
        self._server = serve(self._handle, self._host, self._port)
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="chat-relay", daemon=True
        )
        self._thread.start()
        logger.info(f"chat.relay: listening on ws://{self._host}:{self.port}")
        return self.port

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
        logger.info("chat.relay: stopped")

    def _handle(self, connection: ServerConnection) -> None:
        unsubscribe = self._hub.subscribe(connection.send)
        try:
            for raw in connection:
                self._on_frame(connection, raw)
        except ConnectionClosed:
            pass
        finally:
            unsubscribe()

    def _on_frame(self, connection: ServerConnection, raw: str | bytes) -> None:
        if isinstance(raw, bytes):
            connection.send(_error_frame("binary_not_supported"))
            return
        try:
            dto = ChatMessageRequestDTO.model_validate_json(raw)
        except ValidationError as exc:
            connection.send(_error_frame("validation_error", format_pydantic_errors(exc)))
            return
        try:
            self._publish.execute(dto.author, dto.text)
        except AppError as exc:
            connection.send(_error_frame(exc.code, dict(exc.context or {})))


__all__ = ["ChatRelayServer"]
