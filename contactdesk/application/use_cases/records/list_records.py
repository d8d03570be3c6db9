# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactdesk.domain.records.entities import Record
from contactdesk.domain.records.exceptions import RecordNotFoundError
from contactdesk.domain.records.repositories import RecordRepository


class ListRecordsUseCase:
    def __init__(self, *, records: RecordRepository) -> None:
        self._records = records

    def execute(self, kind: str, *, newest_first: bool = True) -> list[Record]:
        return self._records.list(kind, newest_first=newest_first)


class GetRecordUseCase:
    def __init__(self, *, records: RecordRepository) -> None:
        self._records = records

    def execute(self, kind: str, record_id: str) -> Record:
        record = self._records.get(kind, record_id)
        if record is None:
            raise RecordNotFoundError(kind, record_id)
        return record
