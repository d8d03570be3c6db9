# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contactdesk.domain.records.entities import Record
from contactdesk.domain.records.exceptions import RecordNotFoundError
from contactdesk.domain.records.repositories import RecordRepository
from contactdesk.shared.logging import logger


class UpdateRecordUseCase:
    def __init__(self, *, records: RecordRepository) -> None:
        self._records = records

    def execute(self, kind: str, record_id: str, fields: Mapping[str, Any]) -> Record:
        updated = self._records.replace(kind, record_id, dict(fields))
        if updated is None:
            raise RecordNotFoundError(kind, record_id)
        logger.info(f"records.update: ok kind={kind} id={record_id}")
        return updated
