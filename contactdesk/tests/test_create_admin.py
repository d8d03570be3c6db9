from __future__ import annotations

from pathlib import Path

import pytest
from werkzeug.security import check_password_hash

from contactdesk.infrastructure.db import build_engine, build_session_factory
from contactdesk.infrastructure.repositories.admins import SqlAlchemyCredentialStore
from contactdesk.scripts.create_admin import main
from contactdesk.shared.config import DatabaseConfig


def test_print_hash_outputs_verifiable_hash(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--print-hash", "--password", "s3cret-pass"]) == 0

    printed = capsys.readouterr().out.strip()
    assert check_password_hash(printed, "s3cret-pass")


def test_store_mode_creates_credential_once(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    url = f"sqlite:///{tmp_path / 'admins.db'}"
    monkeypatch.setenv("DATABASE_URL", url)

    assert main(["root", "--password", "s3cret-pass"]) == 0
    assert main(["root", "--password", "other-pass"]) == 1

    engine = build_engine(DatabaseConfig(DATABASE_URL=url))
    store = SqlAlchemyCredentialStore(build_session_factory(engine))
    credential = store.find_by_username("root")
    engine.dispose()

    assert credential is not None
    assert check_password_hash(credential.password_hash, "s3cret-pass")


def test_store_mode_requires_username() -> None:
    with pytest.raises(SystemExit):
        main(["--password", "s3cret-pass"])
