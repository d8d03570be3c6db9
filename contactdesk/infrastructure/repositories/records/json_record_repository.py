# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Flat-file record storage: one JSON array per resource kind."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from threading import Lock
from typing import Any

from contactdesk.domain.records.entities import Record
from contactdesk.domain.records.repositories import RecordRepository
from contactdesk.shared.errors import InfrastructureError
from contactdesk.shared.logging import logger
from contactdesk.utils.jsonio import read_json_list_of_dicts, write_json_list


def _serialize(record: Record) -> dict[str, Any]:
    return {
        "id": record.id,
        "kind": record.kind,
        "fields": dict(record.fields),
        "ip_address": record.ip_address,
        "created_at": record.created_at.isoformat(),
        "updated_at": record.updated_at.isoformat() if record.updated_at else None,
    }


def _deserialize(item: dict[str, Any]) -> Record:
    updated_at = item.get("updated_at")
    return Record(
        id=str(item["id"]),
        kind=str(item["kind"]),
        fields=dict(item.get("fields") or {}),
        created_at=datetime.fromisoformat(item["created_at"]),
        ip_address=item.get("ip_address"),
        updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
    )


class JsonFileRecordRepository(RecordRepository):
    def __init__(self, data_dir: str | Path) -> None:
        self._data_dir = Path(data_dir)
        self._lock = Lock()

    def _path(self, kind: str) -> Path:
        return self._data_dir / f"{kind}.json"

    def _load(self, kind: str) -> list[Record]:
        path = self._path(kind)
        try:
            return [_deserialize(item) for item in read_json_list_of_dicts(path)]
        except (KeyError, ValueError) as exc:
            logger.error(f"records.json: unreadable store {path}: {exc}")
            raise InfrastructureError("storage_unreadable", context={"kind": kind}) from exc

    def _save(self, kind: str, records: list[Record]) -> None:
        write_json_list(self._path(kind), [_serialize(r) for r in records])

    def add(self, record: Record) -> Record:
        with self._lock:
            records = self._load(record.kind)
            records.append(record)
            self._save(record.kind, records)
        return record

    def list(self, kind: str, *, newest_first: bool = True) -> list[Record]:
        with self._lock:
            records = self._load(kind)
        # Insertion order breaks ties between equal timestamps.
        indexed = sorted(enumerate(records), key=lambda pair: (pair[1].created_at, pair[0]))
        ordered = [record for _, record in indexed]
        if newest_first:
            ordered.reverse()
        return ordered

    def get(self, kind: str, record_id: str) -> Record | None:
        with self._lock:
            for record in self._load(kind):
                if record.id == record_id:
                    return record
        return None

    def replace(self, kind: str, record_id: str, fields: Mapping[str, Any]) -> Record | None:
        with self._lock:
            records = self._load(kind)
            for position, record in enumerate(records):
                if record.id != record_id:
                    continue
                updated = Record(
                    id=record.id,
                    kind=record.kind,
                    fields=dict(fields),
                    created_at=record.created_at,
                    ip_address=record.ip_address,
                    updated_at=datetime.now(UTC),
                )
                records[position] = updated
                self._save(kind, records)
                return updated
        return None

    def delete(self, kind: str, record_id: str) -> bool:
        with self._lock:
            records = self._load(kind)
            remaining = [record for record in records if record.id != record_id]
            if len(remaining) == len(records):
                return False
            self._save(kind, remaining)
            return True
