"""Version 1 of the HTTP API."""

from fastapi import APIRouter

from . import feed, microposts, sessions, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(users.router)
api_router.include_router(sessions.router)
api_router.include_router(microposts.router)
api_router.include_router(feed.router)

__all__ = ["api_router"]
