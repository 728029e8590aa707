"""Shared FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_session
from models import User
from services.auth import REMEMBER_COOKIE, current_user


async def get_db() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


def extract_session_token(request: Request) -> str | None:
    """Remember token from the session cookie, falling back to a bearer header."""
    token = request.cookies.get(REMEMBER_COOKIE)
    if token:
        return token

    authorization = request.headers.get("authorization")
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return value.strip() or None


async def get_optional_user(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> User | None:
    return await current_user(session, extract_session_token(request))


async def get_current_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please sign in.",
        )
    return user
