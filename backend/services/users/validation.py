"""Field validation for user records."""

from __future__ import annotations

import re

from core import settings

VALID_EMAIL_PATTERN = re.compile(
    r"[\w+\-.]+@[a-z\d\-]+(?:\.[a-z\d\-]+)*\.[a-z]+",
    re.IGNORECASE | re.ASCII,
)

BLANK = "can't be blank"
INVALID = "is invalid"
TAKEN = "has already been taken"
CONFIRMATION_MISMATCH = "doesn't match Password"


def normalize_email(value: str) -> str:
    return value.lower()


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_email(value: str) -> bool:
    return VALID_EMAIL_PATTERN.fullmatch(value) is not None


def validate_user(
    *,
    name: str | None,
    email: str | None,
    password: str | None,
    password_confirmation: str | None,
    require_password: bool = True,
    name_max_length: int | None = None,
    password_min_length: int | None = None,
) -> dict[str, list[str]]:
    """Return field -> messages for every rule the candidate breaks.

    Every rule is evaluated, so one field can collect several messages and
    a failing field never hides errors on another.
    """
    max_name = name_max_length or settings.name_max_length
    min_password = password_min_length or settings.password_min_length
    errors: dict[str, list[str]] = {}

    def add(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    if is_blank(name):
        add("name", BLANK)
    elif len(name.strip()) > max_name:  # type: ignore[union-attr]
        add("name", f"is too long (maximum is {max_name} characters)")

    if is_blank(email):
        add("email", BLANK)
    elif not is_valid_email(email):  # type: ignore[arg-type]
        add("email", INVALID)

    if require_password or password is not None or password_confirmation is not None:
        if is_blank(password):
            add("password", BLANK)
        if len(password or "") < min_password:
            add("password", f"is too short (minimum is {min_password} characters)")
        if password_confirmation is None:
            add("password_confirmation", BLANK)
        elif password_confirmation != password:
            add("password_confirmation", CONFIRMATION_MISMATCH)

    return errors


__all__ = [
    "BLANK",
    "CONFIRMATION_MISMATCH",
    "INVALID",
    "TAKEN",
    "VALID_EMAIL_PATTERN",
    "is_blank",
    "is_valid_email",
    "normalize_email",
    "validate_user",
]
