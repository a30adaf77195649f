"""In-process fixed-window limiter for the unauthenticated user endpoints."""

from __future__ import annotations

import threading
import time
from typing import Dict, Tuple

from fastapi import Request

from .config import get_settings
from .errors import ApiError


class _RateLimiter:
    def __init__(self) -> None:
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, limit: int, window_seconds: int) -> int:
        """Count one request for `key` and return how many remain in the window."""
        now = time.time()
        with self._lock:
            self._prune(now)
            count, reset = self._hits.get(key, (0, now + window_seconds))
            count += 1
            self._hits[key] = (count, reset)
        return limit - count

    def _prune(self, now: float) -> None:
        # caller holds the lock
        expired = [key for key, (_, reset) in self._hits.items() if now > reset]
        for key in expired:
            del self._hits[key]

    def __len__(self) -> int:
        return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


_limiter = _RateLimiter()


def _client_ip(request: Request) -> str:
    """Peer address; X-Forwarded-For is honoured only when the peer is a trusted proxy."""
    peer = request.client.host if request.client and request.client.host else "unknown"
    if peer in get_settings().trusted_proxies:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return peer


def rate_limit_ip(request: Request, scope: str, *, limit: int | None = None) -> None:
    """Raise a 429 ApiError once the client exceeds `limit` hits for `scope`."""
    settings = get_settings()
    window = settings.rate_limit_window_seconds
    allowed = limit if limit is not None else settings.login_rate_limit
    remaining = _limiter.hit(f"{scope}:{_client_ip(request)}", allowed, window)
    if remaining < 0:
        raise ApiError(
            "Muitas requisições. Tente novamente em instantes.",
            429,
            "warning",
            category="USUARIOS",
            action=scope.upper(),
            headers={"Retry-After": str(window)},
        )


def reset_rate_limits() -> None:
    _limiter.reset()
