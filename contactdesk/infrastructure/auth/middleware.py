# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from contactdesk.application.use_cases.admins.verify_session import VerifySessionUseCase
from contactdesk.domain.admins.exceptions import InvalidTokenError, MissingTokenError
from contactdesk.shared.logging import logger


def extract_token(cookie_name: str) -> str | None:
    """Return the session token from the cookie, else from a Bearer header."""
    token_value = request.cookies.get(cookie_name)
    if token_value:
        return token_value

    auth_header = request.headers.get("Authorization", "")
    scheme, _, credentials = auth_header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


class SessionGate:
    """Decorator factory guarding views behind a valid admin session."""

    def __init__(self, *, verify: VerifySessionUseCase, cookie_name: str) -> None:
        self._verify = verify
        self._cookie_name = cookie_name

    def require_admin(self, func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            token = extract_token(self._cookie_name)
            try:
                claims = self._verify.execute(token)
            except MissingTokenError:
                logger.warning(f"Admin access denied: no token on {request.method} {request.path}")
                raise
            except InvalidTokenError as exc:
                logger.warning(
                    f"Admin access denied: {dict(exc.context or {}).get('reason')} token "
                    f"on {request.method} {request.path}"
                )
                raise

            g.session = claims
            g.user_id = claims.subject
            logger.debug(f"Admin access granted: subject={claims.subject} on {request.path}")
            return func(*args, **kwargs)

        return wrapper


__all__ = ["SessionGate", "extract_token"]
