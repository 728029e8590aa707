"""Business logic services."""

from .errors import (
    AuthenticationFailure,
    AuthorizationDenied,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from .rate_limiter import (
    RateLimitMiddleware,
    RateLimiter,
    get_rate_limiter,
    set_rate_limiter,
)

__all__ = [
    "AuthenticationFailure",
    "AuthorizationDenied",
    "NotFoundError",
    "ServiceError",
    "ValidationError",
    "RateLimiter",
    "RateLimitMiddleware",
    "get_rate_limiter",
    "set_rate_limiter",
]
