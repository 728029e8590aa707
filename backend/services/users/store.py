"""Persistence for user records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, cast

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from core import generate_remember_token, hash_password
from db.errors import is_unique_violation
from models import Follow, Micropost, User
from services.errors import ValidationError
from .schemas import ProfileUpdateInput, SignupInput
from .validation import TAKEN, normalize_email, validate_user

logger = logging.getLogger(__name__)


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def _asc(column: Any) -> Any:
    return cast(Any, column).asc()


@dataclass(slots=True)
class UserPage:
    items: list[User]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        if self.total == 0:
            return 1
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


class UserStore:
    """Reads and writes users through one ``AsyncSession``.

    Writes commit before returning. A write that fails validation raises
    ``ValidationError`` and leaves the database untouched.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: str) -> User | None:
        return await self.session.get(User, user_id)

    async def find_by_email(self, email: str) -> User | None:
        normalized = normalize_email(email)
        result = await self.session.execute(
            select(User).where(_eq(User.email, normalized)).limit(1)
        )
        return result.scalar_one_or_none()

    async def find_by_remember_token(self, token: str) -> User | None:
        result = await self.session.execute(
            select(User).where(_eq(User.remember_token, token)).limit(1)
        )
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return int(result.scalar_one())

    async def list_page(self, page: int, page_size: int) -> UserPage:
        page = max(page, 1)
        page_size = max(page_size, 1)
        total = await self.count()
        result = await self.session.execute(
            select(User)
            .order_by(_asc(User.created_at), _asc(User.id))
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return UserPage(
            items=list(result.scalars().all()),
            total=total,
            page=page,
            page_size=page_size,
        )

    async def create(self, payload: SignupInput) -> User:
        errors = validate_user(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            password_confirmation=payload.password_confirmation,
        )
        normalized_email = normalize_email(payload.email)
        if "email" not in errors and await self._email_taken(normalized_email):
            errors.setdefault("email", []).append(TAKEN)
        if errors:
            raise ValidationError(errors)

        user = User(
            name=payload.name.strip(),
            email=normalized_email,
            password_digest=hash_password(payload.password),
            remember_token=generate_remember_token(),
        )
        self.session.add(user)
        await self._commit()
        await self.session.refresh(user)
        logger.info("User signed up", extra={"user_id": user.id})
        return user

    async def update(self, user: User, payload: ProfileUpdateInput) -> User:
        name = payload.name if payload.name is not None else user.name
        email = payload.email if payload.email is not None else user.email
        errors = validate_user(
            name=name,
            email=email,
            password=payload.password,
            password_confirmation=payload.password_confirmation,
            require_password=False,
        )
        normalized_email = normalize_email(email)
        if "email" not in errors and await self._email_taken(
            normalized_email, exclude_user_id=user.id
        ):
            errors.setdefault("email", []).append(TAKEN)
        if errors:
            raise ValidationError(errors)

        user.name = name.strip()
        user.email = normalized_email
        if payload.password is not None:
            user.password_digest = hash_password(payload.password)
        self.session.add(user)
        await self._commit()
        await self.session.refresh(user)
        return user

    async def set_admin(self, user: User, admin: bool) -> User:
        """Privileged write path: changes the admin flag and nothing else."""
        user.admin = admin
        self.session.add(user)
        await self._commit()
        await self.session.refresh(user)
        logger.info("Admin flag changed", extra={"user_id": user.id, "admin": admin})
        return user

    async def toggle_admin(self, user: User) -> User:
        return await self.set_admin(user, not user.admin)

    async def rotate_remember_token(self, user: User) -> str:
        token = generate_remember_token()
        user.remember_token = token
        self.session.add(user)
        await self._commit()
        return token

    async def delete(self, user: User) -> None:
        """Delete the user together with every micropost and follow edge they own."""
        user_id = user.id
        try:
            await self.session.execute(
                delete(Micropost).where(_eq(Micropost.user_id, user_id))
            )
            await self.session.execute(
                delete(Follow).where(
                    or_(
                        _eq(Follow.follower_id, user_id),
                        _eq(Follow.followee_id, user_id),
                    )
                )
            )
            await self.session.delete(user)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("User deleted", extra={"user_id": user_id})

    async def _email_taken(
        self,
        normalized_email: str,
        *,
        exclude_user_id: str | None = None,
    ) -> bool:
        stmt = select(User.id).where(_eq(User.email, normalized_email))
        if exclude_user_id is not None:
            stmt = stmt.where(~_eq(User.id, exclude_user_id))
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            if is_unique_violation(exc):
                # The pre-check lost a race with a concurrent writer.
                raise ValidationError({"email": [TAKEN]}) from exc
            raise
