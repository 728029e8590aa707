"""Status feed queries."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from models import Follow, Micropost, User


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def _desc(column: Any) -> Any:
    return cast(Any, column).desc()


def _newest_first(query: Select[Any]) -> Select[Any]:
    return query.order_by(_desc(Micropost.created_at), _desc(Micropost.id))


def feed_query(user_id: str) -> Select[Any]:
    """Statement for the user's own posts plus posts of everyone they follow.

    Nothing runs until the statement is executed, and every execution
    recomputes the result, so the same statement can be paged or re-run.
    """
    followee_ids = select(Follow.followee_id).where(_eq(Follow.follower_id, user_id))
    user_id_column = cast(Any, Micropost.user_id)
    return _newest_first(
        select(Micropost).where(
            or_(
                _eq(user_id_column, user_id),
                cast(ColumnElement[bool], user_id_column.in_(followee_ids)),
            )
        )
    )


def user_microposts_query(user_id: str) -> Select[Any]:
    return _newest_first(select(Micropost).where(_eq(Micropost.user_id, user_id)))


def _paginate(query: Select[Any], *, limit: int | None, offset: int) -> Select[Any]:
    if offset > 0:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query


async def feed(
    session: AsyncSession,
    user: User,
    *,
    limit: int | None = None,
    offset: int = 0,
) -> list[Micropost]:
    result = await session.execute(_paginate(feed_query(user.id), limit=limit, offset=offset))
    return list(result.scalars().all())


async def user_microposts(
    session: AsyncSession,
    user: User,
    *,
    limit: int | None = None,
    offset: int = 0,
) -> list[Micropost]:
    result = await session.execute(
        _paginate(user_microposts_query(user.id), limit=limit, offset=offset)
    )
    return list(result.scalars().all())
