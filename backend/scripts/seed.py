"""Database seed script for local development.

Usage:
    uv run python scripts/seed.py

Creates an admin account, a batch of sample users, sample microposts and a
follow graph. Running it again skips anything that already exists.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from db.session import AsyncSessionMaker  # noqa: E402
from models import User  # noqa: E402
from services.follows import follow  # noqa: E402
from services.microposts import MicropostInput, count_microposts, create_micropost  # noqa: E402
from services.users import SignupInput, UserStore  # noqa: E402

DEFAULT_PASSWORD = "foobar"
SAMPLE_USER_COUNT = 99
POSTING_USERS = 6
POSTS_PER_USER = 50

SAMPLE_SENTENCES: Sequence[str] = (
    "Trying out microfeed for the first time.",
    "Coffee first, then code.",
    "Shipped a small fix today and it felt great.",
    "Reading about database indexes again.",
    "Weekend plans: hiking, then more hiking.",
    "Short posts are harder to write than long ones.",
    "Pair programming session went well.",
    "Learning something new every day.",
)


@dataclass(frozen=True)
class SeedUser:
    name: str
    email: str
    admin: bool = False


def build_seed_users() -> list[SeedUser]:
    users = [SeedUser(name="Example User", email="example@microfeed.dev", admin=True)]
    for index in range(1, SAMPLE_USER_COUNT + 1):
        users.append(
            SeedUser(
                name=f"Sample User {index}",
                email=f"example-{index}@microfeed.dev",
            )
        )
    return users


def build_seed_follows(user_count: int) -> list[tuple[int, int]]:
    """Index pairs ``(follower, followee)``: the first user follows 2..50
    and is followed by 3..40."""
    follows: list[tuple[int, int]] = []
    follows.extend((0, index) for index in range(2, min(51, user_count)))
    follows.extend((index, 0) for index in range(3, min(41, user_count)))
    return follows


async def get_or_create_user(store: UserStore, payload: SeedUser) -> User:
    user = await store.find_by_email(payload.email)
    if user is None:
        user = await store.create(
            SignupInput(
                name=payload.name,
                email=payload.email,
                password=DEFAULT_PASSWORD,
                password_confirmation=DEFAULT_PASSWORD,
            )
        )
    if user.admin != payload.admin:
        user = await store.set_admin(user, payload.admin)
    return user


async def seed() -> None:
    seed_users = build_seed_users()
    async with AsyncSessionMaker() as session:
        store = UserStore(session)
        users = [await get_or_create_user(store, payload) for payload in seed_users]

        created_posts = 0
        for user in users[:POSTING_USERS]:
            if await count_microposts(session, user.id) > 0:
                continue
            for index in range(POSTS_PER_USER):
                content = SAMPLE_SENTENCES[index % len(SAMPLE_SENTENCES)]
                await create_micropost(session, user, MicropostInput(content=content))
                created_posts += 1

        created_follows = 0
        for follower_index, followee_index in build_seed_follows(len(users)):
            if await follow(
                session,
                follower=users[follower_index],
                followee=users[followee_index],
            ):
                created_follows += 1

    print("Seed data inserted.")
    print("   Users:", len(users), f"(admin: {seed_users[0].email})")
    print("   Default password:", DEFAULT_PASSWORD)
    print("   New microposts:", created_posts)
    print("   New follows:", created_follows)


if __name__ == "__main__":
    asyncio.run(seed())
