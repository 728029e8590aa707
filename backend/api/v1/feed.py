"""Feed endpoint."""

from __future__ import annotations

from typing import Annotated, Any, cast

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from api.deps import get_current_user, get_db
from models import Micropost, User
from services.feed import feed_query
from .pagination import MAX_OFFSET, MAX_PAGE_SIZE, set_next_offset_header
from .schemas import MicropostResponse

router = APIRouter(prefix="/feed", tags=["feed"])


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


@router.get("", response_model=list[MicropostResponse])
async def home_feed(
    response: Response,
    limit: Annotated[int | None, Query(ge=1, le=MAX_PAGE_SIZE)] = None,
    offset: Annotated[int, Query(ge=0, le=MAX_OFFSET)] = 0,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[MicropostResponse]:
    author_name_column = cast(ColumnElement[str], User.name)
    query = (
        feed_query(current_user.id)
        .join(User, _eq(User.id, Micropost.user_id))
        .add_columns(author_name_column)
    )
    if offset > 0:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit + 1)

    result = await session.execute(query)
    rows = result.all()
    if limit is not None:
        has_more = len(rows) > limit
        if has_more:
            rows = rows[:limit]
        set_next_offset_header(response, offset=offset, limit=limit, has_more=has_more)

    return [
        MicropostResponse.from_micropost(micropost, author_name=author_name)
        for micropost, author_name in rows
    ]
