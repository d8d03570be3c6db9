# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import ADMIN_ROLE, AdminCredential, IssuedSession, SessionClaims
from .exceptions import (
    AdminAccessDeniedError,
    CredentialAlreadyExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)

__all__ = [
    "ADMIN_ROLE",
    "AdminAccessDeniedError",
    "AdminCredential",
    "CredentialAlreadyExistsError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "IssuedSession",
    "MissingTokenError",
    "SessionClaims",
]
