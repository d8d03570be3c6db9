# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for checking a presented session token."""

from __future__ import annotations

from contactdesk.domain.admins.entities import SessionClaims
from contactdesk.domain.admins.exceptions import AdminAccessDeniedError, MissingTokenError
from contactdesk.domain.admins.repositories import TokenSigner


class VerifySessionUseCase:
    def __init__(self, *, signer: TokenSigner) -> None:
        self._signer = signer

    def execute(self, token: str | None, *, require_admin: bool = True) -> SessionClaims:
        if not token:
            raise MissingTokenError()

        # Raises InvalidTokenError for bad signatures, malformed or expired tokens.
        claims = self._signer.decode(token)

        if require_admin and not claims.is_admin:
            raise AdminAccessDeniedError()
        return claims
