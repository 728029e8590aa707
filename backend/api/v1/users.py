"""User signup, profile, listing and admin destroy endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user, get_db
from core import settings
from models import User
from services.auth import destroy_user, require_correct_user, set_remember_cookie
from services.feed import user_microposts
from services.follows import follow, follow_counts, list_followers, list_following, unfollow
from services.microposts import count_microposts
from services.users import ProfileUpdateInput, SignupInput, UserStore
from .pagination import (
    MAX_OFFSET,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    set_next_offset_header,
    set_page_headers,
)
from .schemas import DetailResponse, MicropostResponse, UserPrivate, UserProfile, UserPublic

router = APIRouter(tags=["users"])
logger = logging.getLogger(__name__)
WELCOME_MESSAGE = "Welcome to microfeed!"


class SignupResponse(BaseModel):
    user: UserPrivate
    message: str = WELCOME_MESSAGE


class FollowMutationResponse(BaseModel):
    detail: str
    following: bool


def _raise_user_not_found() -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found",
    )


async def _get_user_or_404(session: AsyncSession, user_id: str) -> User:
    user = await UserStore(session).find_by_id(user_id)
    if user is None:
        _raise_user_not_found()
    return user


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=SignupResponse)
async def signup(
    payload: SignupInput,
    response: Response,
    session: AsyncSession = Depends(get_db),
) -> SignupResponse:
    """Create an account and sign the new user in."""
    user = await UserStore(session).create(payload)
    set_remember_cookie(response, user.remember_token)
    return SignupResponse(user=UserPrivate.model_validate(user))


@router.get("/users", response_model=list[UserPublic])
async def list_users(
    response: Response,
    page: Annotated[int, Query(ge=1, le=MAX_PAGE)] = 1,
    per_page: Annotated[int | None, Query(ge=1, le=MAX_PAGE_SIZE)] = None,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[UserPublic]:
    """Paginated user index, visible to signed-in users only."""
    page_size = per_page or settings.users_per_page
    users_page = await UserStore(session).list_page(page, page_size)
    set_page_headers(
        response,
        page=users_page.page,
        per_page=users_page.page_size,
        total=users_page.total,
        total_pages=users_page.pages,
    )
    return [UserPublic.model_validate(user) for user in users_page.items]


@router.get("/users/{user_id}", response_model=UserProfile)
async def get_user_profile(
    user_id: str,
    session: AsyncSession = Depends(get_db),
) -> UserProfile:
    user = await _get_user_or_404(session, user_id)
    following_count, followers_count = await follow_counts(session, user.id)
    return UserProfile(
        id=user.id,
        name=user.name,
        admin=user.admin,
        created_at=user.created_at,
        micropost_count=await count_microposts(session, user.id),
        following_count=following_count,
        followers_count=followers_count,
    )


@router.patch("/users/{user_id}", response_model=UserPrivate)
async def update_user(
    user_id: str,
    payload: ProfileUpdateInput,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserPrivate:
    """Edit the signed-in user's own profile."""
    target = await _get_user_or_404(session, user_id)
    require_correct_user(current_user, target)
    updated = await UserStore(session).update(target, payload)
    return UserPrivate.model_validate(updated)


@router.delete("/users/{user_id}", response_model=DetailResponse)
async def delete_user(
    user_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DetailResponse:
    await destroy_user(session, actor=current_user, target_id=user_id)
    return DetailResponse(detail="User destroyed.")


@router.get("/users/{user_id}/microposts", response_model=list[MicropostResponse])
async def list_user_microposts(
    user_id: str,
    response: Response,
    limit: Annotated[int | None, Query(ge=1, le=MAX_PAGE_SIZE)] = None,
    offset: Annotated[int, Query(ge=0, le=MAX_OFFSET)] = 0,
    session: AsyncSession = Depends(get_db),
) -> list[MicropostResponse]:
    author = await _get_user_or_404(session, user_id)
    posts = await user_microposts(
        session,
        author,
        limit=limit + 1 if limit is not None else None,
        offset=offset,
    )
    if limit is not None:
        has_more = len(posts) > limit
        if has_more:
            posts = posts[:limit]
        set_next_offset_header(response, offset=offset, limit=limit, has_more=has_more)
    return [MicropostResponse.from_micropost(post, author_name=author.name) for post in posts]


@router.get("/users/{user_id}/following", response_model=list[UserPublic])
async def get_following(
    user_id: str,
    limit: Annotated[int | None, Query(ge=1, le=MAX_PAGE_SIZE)] = None,
    offset: Annotated[int, Query(ge=0, le=MAX_OFFSET)] = 0,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[UserPublic]:
    user = await _get_user_or_404(session, user_id)
    users = await list_following(session, user.id, limit=limit, offset=offset)
    return [UserPublic.model_validate(item) for item in users]


@router.get("/users/{user_id}/followers", response_model=list[UserPublic])
async def get_followers(
    user_id: str,
    limit: Annotated[int | None, Query(ge=1, le=MAX_PAGE_SIZE)] = None,
    offset: Annotated[int, Query(ge=0, le=MAX_OFFSET)] = 0,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[UserPublic]:
    user = await _get_user_or_404(session, user_id)
    users = await list_followers(session, user.id, limit=limit, offset=offset)
    return [UserPublic.model_validate(item) for item in users]


@router.post("/users/{user_id}/follow", response_model=FollowMutationResponse)
async def follow_user(
    user_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FollowMutationResponse:
    followee = await _get_user_or_404(session, user_id)
    created = await follow(session, follower=current_user, followee=followee)
    return FollowMutationResponse(
        detail="Followed" if created else "Already following",
        following=True,
    )


@router.delete("/users/{user_id}/follow", response_model=FollowMutationResponse)
async def unfollow_user(
    user_id: str,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FollowMutationResponse:
    followee = await _get_user_or_404(session, user_id)
    removed = await unfollow(session, follower=current_user, followee=followee)
    return FollowMutationResponse(
        detail="Unfollowed" if removed else "Not following",
        following=False,
    )
