"""Redis-backed request throttling.

Clients are bucketed by a fingerprint of their remember token when they send
one, otherwise by the socket peer address.
"""

from __future__ import annotations

import hashlib
import logging
import time
from functools import lru_cache
from typing import Callable, Iterable, Protocol, runtime_checkable

from fastapi import status
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.types import ASGIApp

from core import settings

logger = logging.getLogger(__name__)

REMEMBER_COOKIE_NAME = "remember_token"
SESSIONS_PATH = "/api/v1/sessions"
SIGNUP_PATH = "/api/v1/users"


@runtime_checkable
class CounterBackend(Protocol):
    async def incr(self, key: str) -> int: ...

    async def expire(self, key: str, ttl: int) -> None: ...


def _presented_token(request: Request) -> str | None:
    token = request.cookies.get(REMEMBER_COOKIE_NAME)
    if not token:
        scheme, _, value = request.headers.get("authorization", "").partition(" ")
        token = value if scheme.lower() == "bearer" else None
    token = (token or "").strip()
    return token or None


def default_client_identifier(request: Request) -> str:
    """Bucket key for the request: session fingerprint, peer host or "anonymous"."""
    token = _presented_token(request)
    if token is not None:
        # Raw tokens never reach Redis keys.
        return "session:" + hashlib.sha256(token.encode("utf-8")).hexdigest()[:32]
    if request.client is not None and request.client.host:
        return request.client.host
    return "anonymous"


class RateLimiter:
    """Fixed-window counter: at most ``limit`` hits per key per window."""

    def __init__(
        self,
        backend: CounterBackend,
        limit: int,
        window_seconds: int,
        prefix: str = "microfeed:throttle",
    ) -> None:
        self.backend = backend
        self.limit = max(limit, 0)
        self.window_seconds = max(window_seconds, 0)
        self.prefix = prefix

    @property
    def enabled(self) -> bool:
        return self.limit > 0 and self.window_seconds > 0

    def window_key(self, client_key: str, now: float | None = None) -> str:
        window = int(time.time() if now is None else now) // self.window_seconds
        return f"{self.prefix}:{client_key}:{window}"

    async def allow(self, client_key: str) -> bool:
        if not self.enabled:
            return True
        key = self.window_key(client_key)
        hits = await self.backend.incr(key)
        if hits == 1:
            await self.backend.expire(key, self.window_seconds)
        return hits <= self.limit


@lru_cache
def get_redis_client() -> CounterBackend:
    return Redis.from_url(settings.redis_url)


_limiter_override: RateLimiter | None = None


@lru_cache
def _configured_limiter() -> RateLimiter:
    return RateLimiter(
        get_redis_client(),
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


def get_rate_limiter() -> RateLimiter:
    """The limiter installed with ``set_rate_limiter``, else the Redis-backed one."""
    if _limiter_override is not None:
        return _limiter_override
    return _configured_limiter()


def set_rate_limiter(limiter: RateLimiter | None) -> None:
    global _limiter_override
    _limiter_override = limiter


def is_credential_request(method: str, path: str) -> bool:
    """Sign-in, sign-out and signup requests."""
    normalized = path.rstrip("/") or "/"
    if normalized == SESSIONS_PATH:
        return True
    return method.upper() == "POST" and normalized == SIGNUP_PATH


def _json_error(detail: str, status_code: int) -> JSONResponse:
    return JSONResponse({"detail": detail}, status_code=status_code)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Throttles every path except ``exempt_paths``.

    When the counter backend fails, credential requests get 503 and every
    other request passes through unthrottled.
    """

    def __init__(
        self,
        app: ASGIApp,
        limiter_factory: Callable[[], RateLimiter],
        exempt_paths: Iterable[str] | None = None,
        client_identifier: Callable[[Request], str] | None = None,
    ) -> None:
        super().__init__(app)
        self.limiter_factory = limiter_factory
        self.exempt_paths = frozenset(exempt_paths or ())
        self.client_identifier = client_identifier or default_client_identifier

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        fail_closed = is_credential_request(request.method, request.url.path)
        try:
            allowed = await self.limiter_factory().allow(self.client_identifier(request))
        except Exception:
            logger.warning(
                "Rate limiter backend unavailable",
                extra={"path": request.url.path},
                exc_info=True,
            )
            if fail_closed:
                return _json_error("Service unavailable", status.HTTP_503_SERVICE_UNAVAILABLE)
            return await call_next(request)

        if not allowed:
            return _json_error("Too Many Requests", status.HTTP_429_TOO_MANY_REQUESTS)
        return await call_next(request)
