"""User records: write inputs, validation and persistence."""

from .schemas import ProfileUpdateInput, SignupInput
from .store import UserPage, UserStore
from .validation import is_valid_email, normalize_email, validate_user

__all__ = [
    "ProfileUpdateInput",
    "SignupInput",
    "UserPage",
    "UserStore",
    "is_valid_email",
    "normalize_email",
    "validate_user",
]
