from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from contactdesk.domain.records.entities import Record
from contactdesk.domain.records.repositories import RecordRepository
from contactdesk.infrastructure.db import build_engine, build_session_factory, init_db
from contactdesk.infrastructure.repositories.records import (
    JsonFileRecordRepository,
    SqlAlchemyRecordRepository,
)
from contactdesk.shared.config import DatabaseConfig
from contactdesk.shared.errors import InfrastructureError

BASE_TIME = datetime(2025, 2, 1, 9, 30, tzinfo=UTC)


@pytest.fixture(params=["sqlalchemy", "json"])
def repository(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[RecordRepository]:
    if request.param == "json":
        yield JsonFileRecordRepository(tmp_path / "data")
        return

    engine = build_engine(DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'records.db'}"))
    init_db(engine)
    yield SqlAlchemyRecordRepository(build_session_factory(engine))
    engine.dispose()


def _record(record_id: str, *, kind: str = "contact", offset: int = 0, **fields: str) -> Record:
    return Record(
        id=record_id,
        kind=kind,
        fields=fields or {"name": record_id},
        created_at=BASE_TIME + timedelta(seconds=offset),
        ip_address="127.0.0.1",
    )


def test_added_record_reads_back_identically(repository: RecordRepository) -> None:
    record = _record("a", name="Ada", email="ada@example.com", message="Hello")

    repository.add(record)

    assert repository.get("contact", "a") == record
    assert repository.list("contact") == [record]


def test_list_orders_by_creation_time(repository: RecordRepository) -> None:
    repository.add(_record("middle", offset=10))
    repository.add(_record("oldest", offset=0))
    repository.add(_record("newest", offset=20))
    repository.add(_record("elsewhere", kind="diary", offset=30))

    assert [r.id for r in repository.list("contact")] == ["newest", "middle", "oldest"]
    assert [r.id for r in repository.list("contact", newest_first=False)] == [
        "oldest",
        "middle",
        "newest",
    ]


def test_equal_timestamps_keep_insertion_order(repository: RecordRepository) -> None:
    repository.add(_record("first"))
    repository.add(_record("second"))

    assert [r.id for r in repository.list("contact")] == ["second", "first"]


def test_replace_swaps_fields_only(repository: RecordRepository) -> None:
    repository.add(_record("a", name="Ada"))

    updated = repository.replace("contact", "a", {"name": "Grace"})

    assert updated is not None
    assert updated.fields == {"name": "Grace"}
    assert updated.created_at == BASE_TIME
    assert updated.ip_address == "127.0.0.1"
    assert updated.updated_at is not None
    assert repository.get("contact", "a") == updated
    assert repository.replace("contact", "missing", {"name": "x"}) is None


def test_delete_unknown_id_leaves_collection_unchanged(repository: RecordRepository) -> None:
    repository.add(_record("a"))
    repository.add(_record("b", offset=1))

    assert repository.delete("contact", "missing") is False
    assert repository.delete("diary", "a") is False
    assert [r.id for r in repository.list("contact")] == ["b", "a"]

    assert repository.delete("contact", "a") is True
    assert [r.id for r in repository.list("contact")] == ["b"]


def test_json_store_writes_one_file_per_kind(tmp_path: Path) -> None:
    repository = JsonFileRecordRepository(tmp_path)
    repository.add(_record("a"))
    repository.add(_record("d", kind="diary", title="entry"))

    assert sorted(p.name for p in tmp_path.glob("*.json")) == ["contact.json", "diary.json"]
    assert JsonFileRecordRepository(tmp_path).get("diary", "d") is not None


def test_json_store_reports_unreadable_file(tmp_path: Path) -> None:
    (tmp_path / "contact.json").write_text('{"not": "a list"}', encoding="utf-8")

    with pytest.raises(InfrastructureError) as excinfo:
        JsonFileRecordRepository(tmp_path).list("contact")

    assert excinfo.value.code == "storage_unreadable"
    assert excinfo.value.status == 500
