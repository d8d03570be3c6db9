# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from contactdesk.domain.admins.entities import ADMIN_ROLE, IssuedSession, SessionClaims
from contactdesk.domain.admins.exceptions import InvalidCredentialsError
from contactdesk.domain.admins.repositories import CredentialStore, PasswordHasher, TokenSigner
from contactdesk.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LoginAdminUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        password_hasher: PasswordHasher,
        signer: TokenSigner,
        token_ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._credentials = credentials
        self._password_hasher = password_hasher
        self._signer = signer
        self._token_ttl = token_ttl
        self._clock = clock
        # Verified against when the username is unknown.
        self._decoy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def execute(self, username: str, password: str) -> IssuedSession:
        credential = self._credentials.find_by_username(username)
        if credential is None:
            self._password_hasher.verify(password, self._decoy_hash)
            password_valid = False
        else:
            password_valid = self._password_hasher.verify(password, credential.password_hash)

        if not password_valid:
            logger.warning(f"admin.login: rejected username={username!r}")
            raise InvalidCredentialsError()

        # Whole seconds: JWT NumericDate claims carry no sub-second part.
        now = self._clock().replace(microsecond=0)
        claims = SessionClaims(
            subject=credential.id,
            role=ADMIN_ROLE,
            issued_at=now,
            expires_at=now + self._token_ttl,
            username=credential.username,
        )
        token = self._signer.sign(claims)
        self._credentials.record_login(credential.id, now)

        logger.info(
            f"admin.login: ok subject={credential.id} exp={claims.expires_at.isoformat()}"
        )
        return IssuedSession(token=token, claims=claims)
