# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(jwt[_-]?secret\s*[:=]\s*['\"]?)[^\s'\"]{8,}", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(bearer\s+)[\w\-.]{20,}", re.I), rf"\1{_REDACTED}"),
    # Bare JWTs: header.payload.signature
    (re.compile(r"\beyJ[\w\-]+\.[\w\-]+\.[\w\-]+"), "***JWT***"),
    (re.compile(r"(token\s*[:=]\s*['\"]?)[\w\-.]{20,}", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(password(?:_hash)?\s*[:=]\s*['\"]?)[^'\"\s]{6,}", re.I), rf"\1{_REDACTED}"),
    (re.compile(r"(authorization\s*:\s*['\"]?)[^'\"]{10,}", re.I), rf"\1{_REDACTED}"),
    (
        re.compile(r"\b(postgresql|postgres|mysql)(\+\w+)?://([^:/@\s]+):[^@\s]+@"),
        rf"\1\2://\3:{_REDACTED}@",
    ),
    # E-mail: mask the local part.
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,})"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    record["message"] = sanitize_message(record["message"])
    return True
