# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from contactdesk.shared.logging import clear_correlation_id, logger, set_correlation_id
from contactdesk.utils.http import client_ip

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_REQUEST_ID_LENGTH = 64
_REDACTED_QUERY_KEYS = ("password", "token", "secret", "key", "auth")


def _request_id() -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if supplied and len(supplied) <= _MAX_REQUEST_ID_LENGTH and supplied.isprintable():
        return supplied
    return secrets.token_urlsafe(8)


def _query_summary() -> dict[str, str]:
    return {
        key: "<redacted>" if any(part in key.lower() for part in _REDACTED_QUERY_KEYS) else value
        for key, value in request.args.items()
    }


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """One line when a request arrives and one when its response leaves.

    The correlation id is taken from ``X-Request-ID`` when the caller sends a
    sane one, echoed back on the response, and attached to every log record
    emitted while the request is handled.
    """

    @app.before_request
    def _before_request() -> None:
        g.request_id = _request_id()
        g.request_started = time.perf_counter()
        set_correlation_id(g.request_id)

        if debug_mode:
            logger.debug(
                f"-> {request.method} {request.path} from {client_ip()} "
                f"query={_query_summary()} length={request.content_length or 0}"
            )
        else:
            logger.info(f"-> {request.method} {request.path} from {client_ip()}")

    @app.after_request
    def _after_request(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        user = g.get("user_id")
        logger.info(
            f"<- {request.method} {request.path} {response.status_code} "
            f"in {elapsed_ms:.1f} ms" + (f" user={user}" if user else "")
        )
        if "request_id" in g:
            response.headers.setdefault(REQUEST_ID_HEADER, g.request_id)
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
