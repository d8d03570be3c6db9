# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ADMIN_ROLE = "admin"


@dataclass(slots=True, frozen=True)
class AdminCredential:

    id: str
    username: str
    password_hash: str
    last_login: datetime | None = None


@dataclass(slots=True, frozen=True)
class SessionClaims:
    """Identity carried by a signed session token."""

    subject: str
    role: str
    issued_at: datetime
    expires_at: datetime
    username: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


@dataclass(slots=True, frozen=True)
class IssuedSession:

    token: str
    claims: SessionClaims
