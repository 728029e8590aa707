"""Password hashing and remember-token helpers."""

from __future__ import annotations

import secrets
from functools import lru_cache

from passlib.context import CryptContext

REMEMBER_TOKEN_BYTES = 32

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a one-way digest for the plaintext password."""
    return pwd_context.hash(password)


def verify_password(password: str, password_digest: str | None) -> bool:
    """Return True when the password matches the stored digest.

    A missing or unreadable digest never matches.
    """
    if not password_digest:
        return False
    try:
        return pwd_context.verify(password, password_digest)
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_digest() -> str:
    """Digest verified against when no account matches the email."""
    return pwd_context.hash(secrets.token_urlsafe(REMEMBER_TOKEN_BYTES))


def needs_rehash(password_digest: str) -> bool:
    try:
        return pwd_context.needs_update(password_digest)
    except (ValueError, TypeError):
        return True


def generate_remember_token() -> str:
    return secrets.token_urlsafe(REMEMBER_TOKEN_BYTES)
