"""Follow graph helpers."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.errors import is_unique_violation
from models import Follow, User
from services.errors import ValidationError


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def _desc(column: Any) -> Any:
    return cast(Any, column).desc()


async def is_following(
    session: AsyncSession,
    *,
    follower_id: str,
    followee_id: str,
) -> bool:
    result = await session.execute(
        select(Follow).where(
            _eq(Follow.follower_id, follower_id),
            _eq(Follow.followee_id, followee_id),
        )
    )
    return result.scalar_one_or_none() is not None


async def follow(session: AsyncSession, *, follower: User, followee: User) -> bool:
    """Create the edge. Returns False when it already existed."""
    if follower.id == followee.id:
        raise ValidationError({"followee": ["can't be yourself"]})
    if await is_following(session, follower_id=follower.id, followee_id=followee.id):
        return False

    session.add(Follow(follower_id=follower.id, followee_id=followee.id))
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if is_unique_violation(exc):
            return False
        raise
    return True


async def unfollow(session: AsyncSession, *, follower: User, followee: User) -> bool:
    """Remove the edge. Returns False when there was nothing to remove."""
    existed = await is_following(session, follower_id=follower.id, followee_id=followee.id)
    await session.execute(
        delete(Follow).where(
            _eq(Follow.follower_id, follower.id),
            _eq(Follow.followee_id, followee.id),
        )
    )
    await session.commit()
    return existed


async def list_following(
    session: AsyncSession,
    user_id: str,
    *,
    limit: int | None = None,
    offset: int = 0,
) -> list[User]:
    query = (
        select(User)
        .join(Follow, _eq(Follow.followee_id, User.id))
        .where(_eq(Follow.follower_id, user_id))
        .order_by(_desc(Follow.created_at), User.id)
    )
    if offset > 0:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    result = await session.execute(query)
    return list(result.scalars().all())


async def list_followers(
    session: AsyncSession,
    user_id: str,
    *,
    limit: int | None = None,
    offset: int = 0,
) -> list[User]:
    query = (
        select(User)
        .join(Follow, _eq(Follow.follower_id, User.id))
        .where(_eq(Follow.followee_id, user_id))
        .order_by(_desc(Follow.created_at), User.id)
    )
    if offset > 0:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    result = await session.execute(query)
    return list(result.scalars().all())


async def follow_counts(session: AsyncSession, user_id: str) -> tuple[int, int]:
    """Return ``(following, followers)`` for the user."""
    following = await session.execute(
        select(func.count()).select_from(Follow).where(_eq(Follow.follower_id, user_id))
    )
    followers = await session.execute(
        select(func.count()).select_from(Follow).where(_eq(Follow.followee_id, user_id))
    )
    return int(following.scalar_one()), int(followers.scalar_one())
