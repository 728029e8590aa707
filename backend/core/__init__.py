"""Core configuration and security primitives."""

from .config import Settings, get_settings, settings
from .security import (
    dummy_password_digest,
    generate_remember_token,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "dummy_password_digest",
    "generate_remember_token",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
