# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from functools import wraps
from threading import Lock

from flask import current_app, request

from contactdesk.shared.errors import RateLimitedError
from contactdesk.shared.logging import logger
from contactdesk.utils.http import client_ip

RATE_LIMIT_ENABLED_KEY = "RATE_LIMIT_ENABLED"


class InMemoryRateLimiter:
    """Sliding window per key; keys idle for a full window are evicted."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._buckets: dict[str, deque[float]] = {}
        self._last_sweep = clock()
        self._lock = Lock()

    @property
    def bucket_count(self) -> int:
        with self._lock:
            return len(self._buckets)

    def _sweep(self, now: float) -> None:
        stale = [
            key
            for key, timestamps in self._buckets.items()
            if not timestamps or now - timestamps[-1] > self._window
        ]
        for key in stale:
            del self._buckets[key]
        self._last_sweep = now

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            if now - self._last_sweep > self._window:
                self._sweep(now)
            timestamps = self._buckets.setdefault(key, deque(maxlen=self._limit))
            while timestamps and now - timestamps[0] > self._window:
                timestamps.popleft()
            if len(timestamps) >= self._limit:
                return False
            timestamps.append(now)
            return True


def rate_limit(limit: int = 10, window_seconds: float = 60.0):
    limiter = InMemoryRateLimiter(limit, window_seconds)

    def decorator(f: Callable):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if current_app.config.get(RATE_LIMIT_ENABLED_KEY, True):
                key = f"{request.path}:{client_ip() or 'unknown'}"
                if not limiter.allow(key):
                    logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                    raise RateLimitedError()
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "RATE_LIMIT_ENABLED_KEY", "rate_limit"]
