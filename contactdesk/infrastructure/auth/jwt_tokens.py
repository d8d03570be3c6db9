# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed session tokens (JWT, HMAC by default)."""

from __future__ import annotations

from datetime import UTC, datetime

import jwt

from contactdesk.domain.admins.entities import SessionClaims
from contactdesk.domain.admins.exceptions import InvalidTokenError
from contactdesk.domain.admins.repositories import TokenSigner

_REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


class JwtTokenSigner(TokenSigner):
    def __init__(self, secret: str, *, algorithm: str = "HS256", leeway: float = 0) -> None:
        if not secret:
            raise ValueError("JWT signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._leeway = leeway

    def sign(self, claims: SessionClaims) -> str:
        payload: dict[str, object] = {
            "sub": claims.subject,
            "role": claims.role,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        if claims.username:
            payload["username"] = claims.username
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> SessionClaims:
        try:
            decoded = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                leeway=self._leeway,
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("invalid") from exc

        return SessionClaims(
            subject=str(decoded["sub"]),
            role=str(decoded["role"]),
            issued_at=datetime.fromtimestamp(decoded["iat"], tz=UTC),
            expires_at=datetime.fromtimestamp(decoded["exp"], tz=UTC),
            username=decoded.get("username"),
        )


__all__ = ["JwtTokenSigner"]
