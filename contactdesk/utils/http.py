# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import request


def client_ip() -> str | None:
    """Peer address; behind trusted proxies ProxyFix has already rewritten it."""
    return request.remote_addr
