# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""In-process fan-out of chat messages to connected listeners."""

from __future__ import annotations

import itertools
import json
from collections.abc import Callable
from threading import Lock

from contactdesk.application.use_cases.chat.publish_message import ChatBroadcaster
from contactdesk.domain.chat.entities import ChatMessage
from contactdesk.shared.logging import logger

Listener = Callable[[str], None]


class ChatHub(ChatBroadcaster):
    """Delivers each message to every listener at publish time.

    No queueing, acknowledgement or replay: a listener that is not connected
    when a message is published never sees it.
    """

    def __init__(self) -> None:
        self._listeners: dict[int, Listener] = {}
        self._ids = itertools.count(1)
        self._lock = Lock()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            listener_id = next(self._ids)
            self._listeners[listener_id] = listener
        logger.debug(f"chat.hub: listener {listener_id} subscribed")

        def unsubscribe() -> None:
            with self._lock:
                removed = self._listeners.pop(listener_id, None)
            if removed is not None:
                logger.debug(f"chat.hub: listener {listener_id} unsubscribed")

        return unsubscribe

    def publish(self, message: ChatMessage) -> int:
        payload = json.dumps({"type": "message", "message": message.to_dict()})
        with self._lock:
            snapshot = list(self._listeners.items())

        delivered = 0
        failed: list[int] = []
        for listener_id, listener in snapshot:
            try:
                listener(payload)
                delivered += 1
            except Exception as exc:
                logger.warning(f"chat.hub: dropping listener {listener_id}: {type(exc).__name__}")
                failed.append(listener_id)

        if failed:
            with self._lock:
                for listener_id in failed:
                    self._listeners.pop(listener_id, None)

        logger.info(f"chat.hub: message {message.id} delivered to {delivered} listener(s)")
        return delivered


__all__ = ["ChatHub", "Listener"]
