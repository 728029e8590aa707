"""SQLModel models package."""

from .follow import Follow
from .micropost import Micropost
from .user import User

__all__ = [
    "User",
    "Follow",
    "Micropost",
]
