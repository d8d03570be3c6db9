# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from contactdesk.domain.admins.entities import AdminCredential
from contactdesk.domain.admins.exceptions import CredentialAlreadyExistsError
from contactdesk.domain.admins.repositories import WritableCredentialStore
from contactdesk.infrastructure.db.models import AdminCredentialRow
from contactdesk.infrastructure.db.session import SessionFactory, session_scope


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: AdminCredentialRow) -> AdminCredential:
    return AdminCredential(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        last_login=_as_utc(row.last_login),
    )


class SqlAlchemyCredentialStore(WritableCredentialStore):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> AdminCredential | None:
        with session_scope(self._session_factory) as session:
            row = (
                session.query(AdminCredentialRow)
                .filter(AdminCredentialRow.username == username)
                .first()
            )
            return _to_domain(row) if row else None

    def record_login(self, credential_id: str, when: datetime) -> None:
        with session_scope(self._session_factory) as session:
            session.query(AdminCredentialRow).filter(
                AdminCredentialRow.id == credential_id
            ).update({AdminCredentialRow.last_login: when})

    def add(self, username: str, password_hash: str) -> AdminCredential:
        with session_scope(self._session_factory) as session:
            exists = (
                session.query(AdminCredentialRow.id)
                .filter(AdminCredentialRow.username == username)
                .first()
            )
            if exists:
                raise CredentialAlreadyExistsError(context={"username": username})
            row = AdminCredentialRow(
                id=str(uuid.uuid4()), username=username, password_hash=password_hash
            )
            session.add(row)
            session.flush()
            return _to_domain(row)
