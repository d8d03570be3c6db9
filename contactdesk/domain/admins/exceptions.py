# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from contactdesk.shared.errors.base import DomainError


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials"


class MissingTokenError(DomainError):
    code = "token_missing"
    status = HTTPStatus.UNAUTHORIZED
    message = "Authentication token required"

    def __init__(self) -> None:
        super().__init__(context={"action": "login"})


class InvalidTokenError(DomainError):
    code = "token_invalid"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid or expired token"

    def __init__(self, reason: str = "invalid") -> None:
        super().__init__(context={"action": "reauthenticate", "reason": reason})

    @property
    def expired(self) -> bool:
        return bool(self.context) and self.context.get("reason") == "expired"


class AdminAccessDeniedError(DomainError):
    code = "admin_access_denied"
    status = HTTPStatus.FORBIDDEN
    message = "Admin role required"


class CredentialAlreadyExistsError(DomainError):
    code = "credential_already_exists"
    status = HTTPStatus.CONFLICT
