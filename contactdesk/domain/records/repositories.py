# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .entities import Record


class RecordRepository(Protocol):
    def add(self, record: Record) -> Record: ...
    def list(self, kind: str, *, newest_first: bool = True) -> list[Record]: ...
    def get(self, kind: str, record_id: str) -> Record | None: ...
    def replace(self, kind: str, record_id: str, fields: Mapping[str, Any]) -> Record | None: ...
    def delete(self, kind: str, record_id: str) -> bool: ...
