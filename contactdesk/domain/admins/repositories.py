# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import AdminCredential, SessionClaims


class CredentialStore(Protocol):
    def find_by_username(self, username: str) -> AdminCredential | None: ...
    def record_login(self, credential_id: str, when: datetime) -> None: ...


class WritableCredentialStore(CredentialStore, Protocol):
    def add(self, username: str, password_hash: str) -> AdminCredential: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenSigner(Protocol):
    def sign(self, claims: SessionClaims) -> str: ...
    def decode(self, token: str) -> SessionClaims: ...
