# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactdesk.domain.records.exceptions import RecordNotFoundError
from contactdesk.domain.records.repositories import RecordRepository
from contactdesk.shared.logging import logger


class DeleteRecordUseCase:
    def __init__(self, *, records: RecordRepository) -> None:
        self._records = records

    def execute(self, kind: str, record_id: str) -> None:
        if not self._records.delete(kind, record_id):
            raise RecordNotFoundError(kind, record_id)
        logger.info(f"records.delete: ok kind={kind} id={record_id}")
