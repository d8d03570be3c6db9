# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from contactdesk.domain.chat.entities import ChatMessage
from contactdesk.shared.errors import ValidationError


class ChatBroadcaster(Protocol):
    def publish(self, message: ChatMessage) -> int: ...


class PublishChatMessageUseCase:
    def __init__(
        self,
        *,
        broadcaster: ChatBroadcaster,
        max_length: int = 1000,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._broadcaster = broadcaster
        self._max_length = max_length
        self._clock = clock

    def execute(self, author: str, text: str) -> tuple[ChatMessage, int]:
        if len(text) > self._max_length:
            raise ValidationError(
                context={"fields": ["text"], "max_length": self._max_length},
                message="Message is too long",
            )
        message = ChatMessage(
            id=uuid.uuid4().hex,
            author=author,
            text=text,
            sent_at=self._clock(),
        )
        delivered = self._broadcaster.publish(message)
        return message, delivered
