from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from flask import Flask

from contactdesk.application.use_cases.admins import VerifySessionUseCase
from contactdesk.application.use_cases.records import (
    DeleteRecordUseCase,
    GetRecordUseCase,
    ListRecordsUseCase,
    SubmitRecordUseCase,
    UpdateRecordUseCase,
)
from contactdesk.domain.admins.entities import SessionClaims
from contactdesk.infrastructure.auth import JwtTokenSigner, SessionGate
from contactdesk.infrastructure.repositories.records import JsonFileRecordRepository
from contactdesk.interfaces.http.controllers.records_controller import RecordsController
from contactdesk.interfaces.http.resources import CONTACT, DIARY, ResourceKind
from contactdesk.shared.middleware.error_handler import configure_error_handling
from contactdesk.shared.middleware.rate_limit import RATE_LIMIT_ENABLED_KEY

SECRET = "controller-secret-controller-secret"
VALID_CONTACT = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "subject": "Engines",
    "message": "About the analytical engine.",
}


@pytest.fixture()
def repository(tmp_path: Path) -> JsonFileRecordRepository:
    return JsonFileRecordRepository(tmp_path)


@pytest.fixture()
def signer() -> JwtTokenSigner:
    return JwtTokenSigner(SECRET)


def _build_app(
    repository: JsonFileRecordRepository,
    signer: JwtTokenSigner,
    *kinds: ResourceKind,
    rate_limited: bool = False,
) -> Flask:
    app = Flask(__name__)
    app.config[RATE_LIMIT_ENABLED_KEY] = rate_limited
    configure_error_handling(app)
    gate = SessionGate(verify=VerifySessionUseCase(signer=signer), cookie_name="admin_token")
    for kind in kinds:
        controller = RecordsController(
            kind,
            submit=SubmitRecordUseCase(records=repository),
            list_records=ListRecordsUseCase(records=repository),
            get_record=GetRecordUseCase(records=repository),
            update=UpdateRecordUseCase(records=repository),
            delete=DeleteRecordUseCase(records=repository),
            gate=gate,
        )
        app.register_blueprint(controller.as_blueprint())
    return app


def _bearer(signer: JwtTokenSigner, *, role: str = "admin", age: timedelta = timedelta()) -> dict:
    issued = datetime.now(UTC).replace(microsecond=0) - age
    token = signer.sign(
        SessionClaims(
            subject="admin", role=role, issued_at=issued, expires_at=issued + timedelta(hours=1)
        )
    )
    return {"Authorization": f"Bearer {token}"}


def test_public_create_then_admin_list_round_trip(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner
) -> None:
    app = _build_app(repository, signer, CONTACT)

    with app.test_client() as client:
        created = client.post(
            "/api/contacts", json=VALID_CONTACT, environ_base={"REMOTE_ADDR": "203.0.113.7"}
        )
        listed = client.get("/api/contacts", headers=_bearer(signer))

    assert created.status_code == 201
    record = created.get_json()["record"]
    assert {key: record[key] for key in VALID_CONTACT} == VALID_CONTACT
    assert record["ip_address"] == "203.0.113.7"

    body = listed.get_json()
    assert listed.status_code == 200
    assert body["count"] == 1
    assert body["records"] == [record]


@pytest.mark.parametrize("missing", ["name", "email", "subject", "message"])
def test_create_with_empty_required_field_persists_nothing(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner, missing: str
) -> None:
    app = _build_app(repository, signer, CONTACT)

    with app.test_client() as client:
        blank = client.post("/api/contacts", json={**VALID_CONTACT, missing: "   "})
        absent = client.post(
            "/api/contacts", json={k: v for k, v in VALID_CONTACT.items() if k != missing}
        )

    for response in (blank, absent):
        assert response.status_code == 400
        payload = response.get_json()
        assert payload["success"] is False
        assert payload["error"] == "validation_error"
        assert missing in payload["context"]["fields"]
    assert repository.list("contact") == []


def test_create_rejects_malformed_email(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner
) -> None:
    app = _build_app(repository, signer, CONTACT)

    with app.test_client() as client:
        response = client.post("/api/contacts", json={**VALID_CONTACT, "email": "nope"})

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["email"]
    assert repository.list("contact") == []


def test_admin_routes_require_a_token(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner
) -> None:
    app = _build_app(repository, signer, CONTACT)

    with app.test_client() as client:
        missing = client.get("/api/contacts")
        expired = client.get("/api/contacts", headers=_bearer(signer, age=timedelta(hours=2)))
        viewer = client.get("/api/contacts", headers=_bearer(signer, role="viewer"))

    assert missing.status_code == 401
    assert missing.get_json()["error"] == "token_missing"
    assert expired.status_code == 401
    assert expired.get_json()["error"] == "token_invalid"
    assert viewer.status_code == 403
    assert viewer.get_json()["error"] == "admin_access_denied"


def test_cookie_token_is_accepted(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner
) -> None:
    app = _build_app(repository, signer, CONTACT)
    token = _bearer(signer)["Authorization"].removeprefix("Bearer ")

    with app.test_client() as client:
        client.set_cookie("admin_token", token)
        response = client.get("/api/contacts")

    assert response.status_code == 200


def test_diary_is_public_to_read_and_admin_to_write(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner
) -> None:
    app = _build_app(repository, signer, DIARY)
    entry = {"title": "Day one", "content": "Started the project.", "mood": ""}

    with app.test_client() as client:
        anonymous = client.post("/api/diary", json=entry)
        created = client.post("/api/diary", json=entry, headers=_bearer(signer))
        listed = client.get("/api/diary")

    assert anonymous.status_code == 401
    assert created.status_code == 201
    assert "mood" not in created.get_json()["record"]
    assert listed.status_code == 200
    assert [r["title"] for r in listed.get_json()["records"]] == ["Day one"]


def test_update_show_and_delete(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner
) -> None:
    app = _build_app(repository, signer, CONTACT)
    headers = _bearer(signer)

    with app.test_client() as client:
        record_id = client.post("/api/contacts", json=VALID_CONTACT).get_json()["record"]["id"]

        updated = client.put(
            f"/api/contacts/{record_id}",
            json={**VALID_CONTACT, "subject": "Revised"},
            headers=headers,
        )
        invalid = client.put(
            f"/api/contacts/{record_id}", json={**VALID_CONTACT, "name": ""}, headers=headers
        )
        shown = client.get(f"/api/contacts/{record_id}", headers=headers)
        deleted = client.delete(f"/api/contacts/{record_id}", headers=headers)
        gone = client.get(f"/api/contacts/{record_id}", headers=headers)

    assert updated.status_code == 200
    assert updated.get_json()["record"]["updated_at"] is not None
    assert invalid.status_code == 400
    assert shown.get_json()["record"]["subject"] == "Revised"
    assert deleted.get_json() == {"success": True, "id": record_id}
    assert gone.status_code == 404
    assert gone.get_json()["error"] == "record_not_found"


def test_delete_unknown_id_is_404_and_changes_nothing(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner
) -> None:
    app = _build_app(repository, signer, CONTACT)

    with app.test_client() as client:
        client.post("/api/contacts", json=VALID_CONTACT)
        before = repository.list("contact")
        response = client.delete("/api/contacts/does-not-exist", headers=_bearer(signer))

    assert response.status_code == 404
    assert repository.list("contact") == before


@pytest.mark.parametrize(
    ("field", "limit"), [("name", 100), ("subject", 200), ("message", 5000)]
)
def test_create_rejects_over_long_field(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner, field: str, limit: int
) -> None:
    app = _build_app(repository, signer, CONTACT)

    with app.test_client() as client:
        at_limit = client.post("/api/contacts", json={**VALID_CONTACT, field: "x" * limit})
        over = client.post("/api/contacts", json={**VALID_CONTACT, field: "x" * (limit + 1)})

    assert at_limit.status_code == 201
    assert over.status_code == 400
    assert over.get_json()["context"]["fields"] == [field]
    assert [r.id for r in repository.list("contact")] == [at_limit.get_json()["record"]["id"]]


def test_public_create_is_rate_limited_per_client(
    repository: JsonFileRecordRepository, signer: JwtTokenSigner
) -> None:
    app = _build_app(repository, signer, CONTACT, rate_limited=True)
    peer = {"REMOTE_ADDR": "198.51.100.23"}

    with app.test_client() as client:
        statuses = [
            client.post("/api/contacts", json=VALID_CONTACT, environ_base=peer).status_code
            for _ in range(6)
        ]
        spoofed = client.post(
            "/api/contacts",
            json=VALID_CONTACT,
            environ_base=peer,
            headers={"X-Forwarded-For": "192.0.2.99"},
        )
        other_peer = client.post(
            "/api/contacts", json=VALID_CONTACT, environ_base={"REMOTE_ADDR": "198.51.100.24"}
        )

    assert statuses == [201, 201, 201, 201, 201, 429]
    assert spoofed.status_code == 429
    assert spoofed.get_json()["error"] == "rate_limited"
    assert other_peer.status_code == 201
    assert len(repository.list("contact")) == 6
