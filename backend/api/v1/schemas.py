"""Response models shared by the v1 routers."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from models import Micropost


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    admin: bool = False
    created_at: datetime


class UserPrivate(UserPublic):
    email: str


class UserProfile(UserPublic):
    micropost_count: int = 0
    following_count: int = 0
    followers_count: int = 0


class MicropostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    content: str
    created_at: datetime
    author_name: str | None = None

    @classmethod
    def from_micropost(
        cls,
        micropost: Micropost,
        author_name: str | None = None,
    ) -> "MicropostResponse":
        if micropost.id is None:
            raise ValueError("Micropost record missing identifier")
        return cls(
            id=micropost.id,
            user_id=micropost.user_id,
            content=micropost.content,
            created_at=micropost.created_at,
            author_name=author_name,
        )


class DetailResponse(BaseModel):
    detail: str
