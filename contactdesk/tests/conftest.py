from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient
from werkzeug.security import generate_password_hash

from contactdesk.app import create_app
from contactdesk.shared.config import (
    AppConfig,
    AuthConfig,
    ChatConfig,
    DatabaseConfig,
    SecurityConfig,
    StorageConfig,
)

JWT_SECRET = "test-secret-with-at-least-thirty-two-chars"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # Keeps a developer's .env and shell variables out of the config.
    monkeypatch.chdir(tmp_path)
    for name in (
        "JWT_SECRET",
        "DATABASE_URL",
        "CREDENTIAL_BACKEND",
        "RECORDS_BACKEND",
        "ADMIN_USERNAME",
        "ADMIN_PASSWORD",
        "ADMIN_PASSWORD_HASH",
        "CHAT_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., AppConfig]:
    def factory(
        *,
        records_backend: str = "database",
        credential_backend: str = "database",
        auth_overrides: dict[str, Any] | None = None,
        security_overrides: dict[str, Any] | None = None,
    ) -> AppConfig:
        auth_values: dict[str, Any] = {
            "JWT_SECRET": JWT_SECRET,
            "TOKEN_TTL_SECONDS": 900,
            "CREDENTIAL_BACKEND": credential_backend,
            "ADMIN_USERNAME": ADMIN_USERNAME,
        }
        if credential_backend == "database":
            auth_values["ADMIN_PASSWORD"] = ADMIN_PASSWORD
        else:
            auth_values["ADMIN_PASSWORD_HASH"] = generate_password_hash(ADMIN_PASSWORD)
        auth_values.update(auth_overrides or {})

        return AppConfig(
            auth=AuthConfig(**auth_values),
            storage=StorageConfig(RECORDS_BACKEND=records_backend, DATA_DIR=tmp_path / "data"),
            database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'contactdesk.db'}"),
            security=SecurityConfig(**{"ENABLE_RATE_LIMIT": False, **(security_overrides or {})}),
            chat=ChatConfig(CHAT_ENABLED=False),
        )

    return factory


@pytest.fixture()
def app(make_config: Callable[..., AppConfig]) -> Flask:
    return create_app(make_config(), log_to_file=False)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def admin_token(client: FlaskClient) -> str:
    response = client.post(
        "/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return response.get_json()["token"]
