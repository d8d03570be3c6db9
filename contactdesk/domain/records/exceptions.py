# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from contactdesk.shared.errors.base import DomainError


class RecordNotFoundError(DomainError):
    code = "record_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Record not found"

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(context={"kind": kind, "id": record_id})
