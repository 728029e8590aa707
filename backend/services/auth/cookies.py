"""HTTP cookie helpers for the remember-token session."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from fastapi import Response

from core import settings

REMEMBER_COOKIE = "remember_token"
COOKIE_PATH = "/"
COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"
COOKIE_SECURE = not settings.is_local and not settings.allow_insecure_http_cookies


def _remember_ttl() -> timedelta:
    return timedelta(days=settings.remember_cookie_max_age_days)


def set_remember_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=REMEMBER_COOKIE,
        value=token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite=COOKIE_SAMESITE,
        max_age=int(_remember_ttl().total_seconds()),
        path=COOKIE_PATH,
    )


def clear_remember_cookie(response: Response) -> None:
    response.delete_cookie(
        key=REMEMBER_COOKIE,
        path=COOKIE_PATH,
        secure=COOKIE_SECURE,
        samesite=COOKIE_SAMESITE,
    )
