from __future__ import annotations

import json
from collections.abc import Iterator
from datetime import UTC, datetime

import pytest
from flask import Flask
from websockets.sync.client import connect

from contactdesk.application.use_cases.chat import PublishChatMessageUseCase
from contactdesk.app import CONTAINER_EXTENSION_KEY
from contactdesk.domain.chat.entities import ChatMessage
from contactdesk.infrastructure.chat import ChatHub
from contactdesk.interfaces.ws.chat_relay import ChatRelayServer
from contactdesk.shared.errors import ValidationError


def _message(text: str = "hi") -> ChatMessage:
    return ChatMessage(id="m1", author="ada", text=text, sent_at=datetime(2025, 1, 1, tzinfo=UTC))


def test_every_listener_receives_each_message() -> None:
    hub = ChatHub()
    first: list[str] = []
    second: list[str] = []
    hub.subscribe(first.append)
    hub.subscribe(second.append)

    delivered = hub.publish(_message())

    assert delivered == 2
    assert first == second
    assert json.loads(first[0]) == {"type": "message", "message": _message().to_dict()}


def test_failing_listener_is_dropped_without_affecting_others() -> None:
    hub = ChatHub()
    received: list[str] = []

    def broken(_: str) -> None:
        raise ConnectionError("peer went away")

    hub.subscribe(broken)
    hub.subscribe(received.append)

    assert hub.publish(_message("one")) == 1
    assert hub.listener_count == 1
    assert hub.publish(_message("two")) == 1
    assert len(received) == 2


def test_unsubscribed_listener_gets_nothing() -> None:
    hub = ChatHub()
    received: list[str] = []
    unsubscribe = hub.subscribe(received.append)

    unsubscribe()
    unsubscribe()

    assert hub.publish(_message()) == 0
    assert received == []


def test_publish_rejects_overlong_text() -> None:
    hub = ChatHub()
    use_case = PublishChatMessageUseCase(broadcaster=hub, max_length=5)

    with pytest.raises(ValidationError) as excinfo:
        use_case.execute("ada", "too long")

    assert excinfo.value.status == 400
    message, delivered = use_case.execute("ada", "short")
    assert (message.author, message.text, delivered) == ("ada", "short", 0)


def test_http_endpoint_publishes_to_listeners(app: Flask) -> None:
    hub = app.extensions[CONTAINER_EXTENSION_KEY].chat_hub
    received: list[str] = []
    hub.subscribe(received.append)

    with app.test_client() as client:
        accepted = client.post("/api/chat/messages", json={"author": "ada", "text": "hello"})
        rejected = client.post("/api/chat/messages", json={"author": "", "text": "hello"})

    assert accepted.status_code == 202
    body = accepted.get_json()
    assert body["delivered"] == 1
    assert body["message"]["text"] == "hello"
    assert json.loads(received[0])["message"]["id"] == body["message"]["id"]
    assert rejected.status_code == 400
    assert len(received) == 1


@pytest.fixture()
def relay() -> Iterator[ChatRelayServer]:
    hub = ChatHub()
    server = ChatRelayServer(
        hub=hub,
        publish_use_case=PublishChatMessageUseCase(broadcaster=hub, max_length=100),
        host="127.0.0.1",
        port=0,
    )
    server.start()
    yield server
    server.stop()


def test_relay_broadcasts_to_all_connections(relay: ChatRelayServer) -> None:
    url = f"ws://127.0.0.1:{relay.port}/"
    with connect(url) as alice, connect(url) as bob:
        # An error reply proves the server side of each connection is subscribed.
        alice.send("not json")
        assert json.loads(alice.recv(timeout=5))["error"] == "validation_error"
        bob.send(json.dumps({"author": "bob"}))
        assert json.loads(bob.recv(timeout=5))["error"] == "validation_error"

        alice.send(json.dumps({"author": "alice", "text": "hello all"}))

        for connection in (alice, bob):
            frame = json.loads(connection.recv(timeout=5))
            assert frame["type"] == "message"
            assert frame["message"]["author"] == "alice"
            assert frame["message"]["text"] == "hello all"


def test_relay_reports_overlong_message(relay: ChatRelayServer) -> None:
    with connect(f"ws://127.0.0.1:{relay.port}/") as client:
        client.send(json.dumps({"author": "alice", "text": "x" * 101}))
        frame = json.loads(client.recv(timeout=5))

    assert frame["error"] == "validation_error"
    assert frame["context"]["max_length"] == 100
