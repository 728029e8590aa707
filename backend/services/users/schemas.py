"""Typed write inputs, one per write path.

Each model forbids unknown fields, so attributes such as ``admin`` can never
ride along with ordinary signup or profile input.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SignupInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = ""
    email: str = ""
    password: str = ""
    password_confirmation: str | None = None


class ProfileUpdateInput(BaseModel):
    """Partial profile edit; omitted fields keep their current value."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None
