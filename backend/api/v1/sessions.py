"""Sign-in and sign-out endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import extract_session_token, get_current_user, get_db
from models import User
from services.auth import (
    authenticate,
    clear_remember_cookie,
    current_user as resolve_current_user,
    set_remember_cookie,
    sign_out,
)
from .schemas import DetailResponse, UserPrivate

router = APIRouter(tags=["sessions"])


class SignInRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


@router.post("/sessions", response_model=UserPrivate)
async def sign_in(
    payload: SignInRequest,
    response: Response,
    session: AsyncSession = Depends(get_db),
) -> UserPrivate:
    user = await authenticate(session, payload.email, payload.password)
    set_remember_cookie(response, user.remember_token)
    return UserPrivate.model_validate(user)


@router.delete("/sessions", status_code=status.HTTP_200_OK, response_model=DetailResponse)
async def sign_out_session(
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_db),
) -> DetailResponse:
    user = await resolve_current_user(session, extract_session_token(request))
    if user is not None:
        await sign_out(session, user)
    clear_remember_cookie(response)
    return DetailResponse(detail="Signed out")


@router.get("/me", response_model=UserPrivate)
async def get_me(current_user: User = Depends(get_current_user)) -> UserPrivate:
    """Return the signed-in user's full profile."""
    return UserPrivate.model_validate(current_user)
