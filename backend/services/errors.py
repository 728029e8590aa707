"""Domain errors surfaced by the service layer.

Request handlers translate these into HTTP responses; anything that is not a
``ServiceError`` (for example an unreachable database) propagates unchanged.
"""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base class for recoverable domain errors."""

    status_code = 400

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code, **self.details}


class ValidationError(ServiceError):
    """One or more fields failed validation."""

    status_code = 422

    def __init__(self, errors: dict[str, list[str]]) -> None:
        count = sum(len(messages) for messages in errors.values())
        noun = "error" if count == 1 else "errors"
        super().__init__(
            f"The form contains {count} {noun}",
            code="validation_failed",
            details={"errors": errors},
        )
        self.errors = errors

    def full_messages(self) -> list[str]:
        """Human readable messages, e.g. ``"Name can't be blank"``."""
        return [
            f"{field.replace('_', ' ').capitalize()} {message}"
            for field, messages in self.errors.items()
            for message in messages
        ]


class AuthenticationFailure(ServiceError):
    """Credentials did not match; never says which part was wrong."""

    status_code = 401

    def __init__(self, message: str = "Invalid email/password combination") -> None:
        super().__init__(message, code="authentication_failed")


class AuthorizationDenied(ServiceError):
    status_code = 403

    def __init__(self, message: str = "You are not allowed to do that") -> None:
        super().__init__(message, code="authorization_denied")


class NotFoundError(ServiceError):
    status_code = 404

    def __init__(self, resource: str, identifier: Any) -> None:
        super().__init__(
            f"{resource} not found",
            code="not_found",
            details={"resource": resource, "id": str(identifier)},
        )


__all__ = [
    "ServiceError",
    "ValidationError",
    "AuthenticationFailure",
    "AuthorizationDenied",
    "NotFoundError",
]
