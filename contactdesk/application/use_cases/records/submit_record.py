# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from contactdesk.domain.records.entities import Record
from contactdesk.domain.records.repositories import RecordRepository
from contactdesk.shared.logging import logger


def _new_id() -> str:
    return str(uuid.uuid4())


class SubmitRecordUseCase:
    def __init__(
        self,
        *,
        records: RecordRepository,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._records = records
        self._id_factory = id_factory
        self._clock = clock

    def execute(
        self, kind: str, fields: Mapping[str, Any], ip_address: str | None = None
    ) -> Record:
        record = Record(
            id=self._id_factory(),
            kind=kind,
            fields=dict(fields),
            created_at=self._clock(),
            ip_address=ip_address,
        )
        persisted = self._records.add(record)
        logger.info(f"records.submit: ok kind={kind} id={persisted.id}")
        return persisted
