"""Micropost creation and deletion endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user, get_db
from models import User
from services.microposts import MicropostInput, create_micropost, delete_micropost
from .schemas import DetailResponse, MicropostResponse

router = APIRouter(prefix="/microposts", tags=["microposts"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MicropostResponse)
async def create(
    payload: MicropostInput,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MicropostResponse:
    micropost = await create_micropost(session, current_user, payload)
    return MicropostResponse.from_micropost(micropost, author_name=current_user.name)


@router.delete("/{micropost_id}", response_model=DetailResponse)
async def destroy(
    micropost_id: int,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DetailResponse:
    await delete_micropost(session, actor=current_user, micropost_id=micropost_id)
    return DetailResponse(detail="Micropost deleted")
