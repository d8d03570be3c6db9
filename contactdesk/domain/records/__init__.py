# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Record
from .exceptions import RecordNotFoundError
from .repositories import RecordRepository

__all__ = ["Record", "RecordNotFoundError", "RecordRepository"]
