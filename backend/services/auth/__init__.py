"""Authentication domain services."""

from .cookies import (
    REMEMBER_COOKIE,
    clear_remember_cookie,
    set_remember_cookie,
)
from .session import (
    authenticate,
    current_user,
    destroy_user,
    is_admin,
    require_admin,
    require_correct_user,
    sign_out,
)

__all__ = [
    "REMEMBER_COOKIE",
    "clear_remember_cookie",
    "set_remember_cookie",
    "authenticate",
    "current_user",
    "destroy_user",
    "is_admin",
    "require_admin",
    "require_correct_user",
    "sign_out",
]
