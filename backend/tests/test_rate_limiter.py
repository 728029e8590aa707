"""Tests for the Redis-backed rate limiter middleware."""

from __future__ import annotations

import pytest
from httpx import AsyncClient
from starlette.requests import Request

from services import RateLimiter, set_rate_limiter
from services.rate_limiter import default_client_identifier, is_credential_request


class InMemoryRedis:
    def __init__(self) -> None:
        self.data: dict[str, int] = {}

    async def incr(self, key: str) -> int:  # pragma: no cover - simple helper
        value = self.data.get(key, 0) + 1
        self.data[key] = value
        return value

    async def expire(self, key: str, ttl: int) -> None:  # pragma: no cover - noop
        return None


class UnavailableRedis:
    async def incr(self, key: str) -> int:
        raise ConnectionError("redis is down")

    async def expire(self, key: str, ttl: int) -> None:  # pragma: no cover - never reached
        return None


def _build_request(
    *,
    cookie_header: str | None = None,
    authorization: str | None = None,
    forwarded_for: str | None = None,
    client_host: str = "10.0.0.12",
) -> Request:
    headers: list[tuple[bytes, bytes]] = []
    if cookie_header is not None:
        headers.append((b"cookie", cookie_header.encode("ascii")))
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("ascii")))
    if forwarded_for is not None:
        headers.append((b"x-forwarded-for", forwarded_for.encode("ascii")))
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": headers,
        "query_string": b"",
        "client": (client_host, 1234),
        "app": None,
    }
    return Request(scope)


def test_default_client_identifier_prefers_remember_cookie() -> None:
    request = _build_request(cookie_header="remember_token=abc123")

    identifier = default_client_identifier(request)

    assert identifier.startswith("session:")
    assert "abc123" not in identifier


def test_default_client_identifier_matches_cookie_and_bearer_for_same_token() -> None:
    from_cookie = default_client_identifier(_build_request(cookie_header="remember_token=abc123"))
    from_bearer = default_client_identifier(_build_request(authorization="Bearer abc123"))
    other = default_client_identifier(_build_request(authorization="Bearer other"))

    assert from_cookie == from_bearer
    assert from_cookie != other


def test_default_client_identifier_falls_back_to_remote_ip() -> None:
    request = _build_request(authorization="Basic dXNlcjpwYXNz")

    assert default_client_identifier(request) == "10.0.0.12"


def test_default_client_identifier_ignores_forwarded_headers() -> None:
    request = _build_request(forwarded_for="203.0.113.9")

    assert default_client_identifier(request) == "10.0.0.12"


@pytest.mark.parametrize(
    ("method", "path", "expected"),
    [
        ("POST", "/api/v1/sessions", True),
        ("DELETE", "/api/v1/sessions/", True),
        ("POST", "/api/v1/users", True),
        ("GET", "/api/v1/users", False),
        ("POST", "/api/v1/microposts", False),
    ],
)
def test_is_credential_request(method: str, path: str, expected: bool) -> None:
    assert is_credential_request(method, path) is expected


@pytest.mark.asyncio
async def test_rate_limiter_blocks_after_threshold(async_client: AsyncClient) -> None:
    set_rate_limiter(RateLimiter(InMemoryRedis(), limit=2, window_seconds=60))

    first = await async_client.get("/api/v1/users/missing")
    second = await async_client.get("/api/v1/users/missing")
    third = await async_client.get("/api/v1/users/missing")

    assert first.status_code == 404
    assert second.status_code == 404
    assert third.status_code == 429
    assert third.json()["detail"] == "Too Many Requests"


@pytest.mark.asyncio
async def test_health_is_exempt(async_client: AsyncClient) -> None:
    set_rate_limiter(RateLimiter(InMemoryRedis(), limit=1, window_seconds=60))

    for _ in range(3):
        response = await async_client.get("/health")
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_rate_limiter_can_be_disabled(async_client: AsyncClient) -> None:
    set_rate_limiter(RateLimiter(InMemoryRedis(), limit=0, window_seconds=60))

    for _ in range(5):
        response = await async_client.get("/api/v1/users/missing")
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_sign_in_is_rate_limited(async_client: AsyncClient) -> None:
    set_rate_limiter(RateLimiter(InMemoryRedis(), limit=1, window_seconds=60))
    payload = {"email": "missing@example.com", "password": "password123"}

    first = await async_client.post("/api/v1/sessions", json=payload)
    second = await async_client.post("/api/v1/sessions", json=payload)

    assert first.status_code == 401
    assert second.status_code == 429


@pytest.mark.asyncio
async def test_backend_outage_fails_closed_for_credentials_only(async_client: AsyncClient) -> None:
    set_rate_limiter(RateLimiter(UnavailableRedis(), limit=5, window_seconds=60))

    sign_in = await async_client.post(
        "/api/v1/sessions",
        json={"email": "missing@example.com", "password": "password123"},
    )
    browse = await async_client.get("/api/v1/users/missing")

    assert sign_in.status_code == 503
    assert browse.status_code == 404


def test_window_key_rolls_over_per_window() -> None:
    limiter = RateLimiter(InMemoryRedis(), limit=5, window_seconds=60)

    assert limiter.window_key("client", now=120) == limiter.window_key("client", now=179)
    assert limiter.window_key("client", now=179) != limiter.window_key("client", now=180)
    assert limiter.window_key("client", now=120).startswith("microfeed:throttle:client:")
