"""Micropost creation and removal."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core import settings
from models import Micropost, User
from services.errors import AuthorizationDenied, NotFoundError, ValidationError
from services.users.validation import BLANK, is_blank

logger = logging.getLogger(__name__)


class MicropostInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    content: str = ""


def validate_micropost(content: str | None) -> dict[str, list[str]]:
    max_length = settings.micropost_max_length
    if is_blank(content):
        return {"content": [BLANK]}
    if len(content.strip()) > max_length:  # type: ignore[union-attr]
        return {"content": [f"is too long (maximum is {max_length} characters)"]}
    return {}


async def create_micropost(
    session: AsyncSession,
    author: User,
    payload: MicropostInput,
) -> Micropost:
    errors = validate_micropost(payload.content)
    if errors:
        raise ValidationError(errors)

    micropost = Micropost(user_id=author.id, content=payload.content.strip())
    session.add(micropost)
    await session.commit()
    await session.refresh(micropost)
    return micropost


async def delete_micropost(
    session: AsyncSession,
    *,
    actor: User,
    micropost_id: int,
) -> None:
    micropost = await session.get(Micropost, micropost_id)
    if micropost is None:
        raise NotFoundError("Micropost", micropost_id)
    if micropost.user_id != actor.id:
        raise AuthorizationDenied("You can only delete your own microposts")

    await session.delete(micropost)
    await session.commit()
    logger.info(
        "Micropost deleted",
        extra={"micropost_id": micropost_id, "user_id": actor.id},
    )


async def count_microposts(session: AsyncSession, user_id: str) -> int:
    result = await session.execute(
        select(func.count()).select_from(Micropost).where(Micropost.user_id == user_id)
    )
    return int(result.scalar_one())
