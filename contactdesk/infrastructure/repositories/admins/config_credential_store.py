# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hmac
from datetime import datetime

from contactdesk.domain.admins.entities import AdminCredential
from contactdesk.domain.admins.repositories import CredentialStore


class ConfigCredentialStore(CredentialStore):
    """A single fixed admin pair taken from configuration."""

    def __init__(self, username: str, password_hash: str) -> None:
        self._credential = AdminCredential(
            id=username, username=username, password_hash=password_hash
        )

    def find_by_username(self, username: str) -> AdminCredential | None:
        if hmac.compare_digest(username.encode(), self._credential.username.encode()):
            return self._credential
        return None

    def record_login(self, credential_id: str, when: datetime) -> None:
        # Configuration is read-only; nothing to record.
        return None
