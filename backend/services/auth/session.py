"""Credential checks, remember-token sessions and role gates.

Nothing here reads ambient request state: callers pass the session token or
the already-resolved user explicitly.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core import dummy_password_digest, hash_password, needs_rehash, verify_password
from models import User
from services.errors import AuthenticationFailure, AuthorizationDenied, NotFoundError
from services.users import UserStore

logger = logging.getLogger(__name__)


async def authenticate(session: AsyncSession, email: str, password: str) -> User:
    """Return the user owning ``email`` when ``password`` matches.

    Unknown emails and wrong passwords raise the same ``AuthenticationFailure``.
    """
    store = UserStore(session)
    user = await store.find_by_email(email)
    digest = user.password_digest if user is not None else dummy_password_digest()
    if not verify_password(password, digest) or user is None:
        logger.info("Failed sign-in attempt")
        raise AuthenticationFailure()

    if needs_rehash(user.password_digest):
        user.password_digest = hash_password(password)
        session.add(user)
        await session.commit()
    return user


def is_admin(user: User | None) -> bool:
    return bool(user is not None and user.admin)


async def current_user(session: AsyncSession, token: str | None) -> User | None:
    """Resolve the signed-in user from a remember token, or None."""
    if token is None or not token.strip():
        return None
    return await UserStore(session).find_by_remember_token(token.strip())


async def sign_out(session: AsyncSession, user: User) -> None:
    """Invalidate every outstanding copy of the user's remember token."""
    await UserStore(session).rotate_remember_token(user)


def require_correct_user(actor: User, target: User) -> None:
    if actor.id != target.id:
        raise AuthorizationDenied("You can only change your own profile")


def require_admin(actor: User) -> None:
    if not is_admin(actor):
        logger.warning("Admin-only operation refused", extra={"actor_id": actor.id})
        raise AuthorizationDenied("Admin privileges required")


async def destroy_user(session: AsyncSession, *, actor: User, target_id: str) -> None:
    """Privileged delete: admins only, and never their own account."""
    require_admin(actor)
    if actor.id == target_id:
        raise AuthorizationDenied("Admins cannot delete their own account")

    store = UserStore(session)
    target = await store.find_by_id(target_id)
    if target is None:
        raise NotFoundError("User", target_id)
    await store.delete(target)
    logger.info(
        "Admin deleted user",
        extra={"actor_id": actor.id, "target_id": target_id},
    )
