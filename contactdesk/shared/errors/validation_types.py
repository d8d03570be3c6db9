# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    EMPTY = "empty"
    EMAIL_INVALID = "email_invalid"


__all__ = ["ValidationErrorType"]
