# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from contactdesk.domain.records.entities import Record
from contactdesk.domain.records.repositories import RecordRepository
from contactdesk.infrastructure.db.models import RecordRow
from contactdesk.infrastructure.db.session import SessionFactory, session_scope


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: RecordRow) -> Record:
    return Record(
        id=row.record_id,
        kind=row.kind,
        fields=dict(row.payload or {}),
        created_at=_as_utc(row.created_at),
        ip_address=row.ip_address,
        updated_at=_as_utc(row.updated_at),
    )


class SqlAlchemyRecordRepository(RecordRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(self, record: Record) -> Record:
        with session_scope(self._session_factory) as session:
            row = RecordRow(
                record_id=record.id,
                kind=record.kind,
                payload=dict(record.fields),
                ip_address=record.ip_address,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            session.add(row)
            session.flush()
            return _to_domain(row)

    def list(self, kind: str, *, newest_first: bool = True) -> list[Record]:
        with session_scope(self._session_factory) as session:
            query = session.query(RecordRow).filter(RecordRow.kind == kind)
            if newest_first:
                query = query.order_by(RecordRow.created_at.desc(), RecordRow.pk.desc())
            else:
                query = query.order_by(RecordRow.created_at.asc(), RecordRow.pk.asc())
            return [_to_domain(row) for row in query.all()]

    def get(self, kind: str, record_id: str) -> Record | None:
        with session_scope(self._session_factory) as session:
            row = self._find(session, kind, record_id)
            return _to_domain(row) if row else None

    def replace(self, kind: str, record_id: str, fields: Mapping[str, Any]) -> Record | None:
        with session_scope(self._session_factory) as session:
            row = self._find(session, kind, record_id)
            if not row:
                return None
            row.payload = dict(fields)
            row.updated_at = datetime.now(UTC)
            session.flush()
            return _to_domain(row)

    def delete(self, kind: str, record_id: str) -> bool:
        with session_scope(self._session_factory) as session:
            deleted = (
                session.query(RecordRow)
                .filter(RecordRow.kind == kind, RecordRow.record_id == record_id)
                .delete()
            )
            return deleted > 0

    @staticmethod
    def _find(session, kind: str, record_id: str) -> RecordRow | None:
        return (
            session.query(RecordRow)
            .filter(RecordRow.kind == kind, RecordRow.record_id == record_id)
            .first()
        )
