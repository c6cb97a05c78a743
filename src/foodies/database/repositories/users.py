"""User and follow-edge data access."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from sqlalchemy import delete, func, select

from foodies.database.models import FavoriteRecipe, Recipe, User, UserFollower
from foodies.database.repositories.base import SqlRepository


if TYPE_CHECKING:
    from collections.abc import Sequence


class UserStats(NamedTuple):
    """Aggregate counters shown on the current user's profile."""

    recipes: int
    followers: int
    followings: int
    favorite_recipes: int


class UserRepository(SqlRepository):
    """Repository for users and the follow graph."""

    async def get(self, user_id: str) -> User | None:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists(self, user_id: str) -> bool:
        result = await self.session.execute(
            select(User.id).where(User.id == user_id)
        )
        return result.scalar_one_or_none() is not None

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        avatar: str | None = None,
    ) -> User:
        """Stage a new user and flush it so its id is assigned."""
        user = User(name=name, email=email, password=password_hash, avatar=avatar)
        self.session.add(user)
        await self.session.flush()
        return user

    async def list_all(self) -> Sequence[User]:
        """All users, newest first."""
        result = await self.session.execute(
            select(User).order_by(User.created_at.desc(), User.id)
        )
        return result.scalars().all()

    async def set_avatar(self, user: User, avatar: str) -> None:
        user.avatar = avatar
        await self.session.flush()

    async def stats(self, user_id: str) -> UserStats:
        """Compute the four profile counters in a single statement."""
        recipes = (
            select(func.count())
            .select_from(Recipe)
            .where(Recipe.owner_id == user_id)
            .scalar_subquery()
        )
        followers = (
            select(func.count())
            .select_from(UserFollower)
            .where(UserFollower.user_id == user_id)
            .scalar_subquery()
        )
        followings = (
            select(func.count())
            .select_from(UserFollower)
            .where(UserFollower.follower_id == user_id)
            .scalar_subquery()
        )
        favorites = (
            select(func.count())
            .select_from(FavoriteRecipe)
            .where(FavoriteRecipe.user_id == user_id)
            .scalar_subquery()
        )
        row = (
            await self.session.execute(select(recipes, followers, followings, favorites))
        ).one()
        return UserStats(*(int(value or 0) for value in row))

    # =========================================================================
    # Follow graph
    # =========================================================================

    async def follow(self, follower_id: str, user_id: str) -> bool:
        """Record that ``follower_id`` follows ``user_id``. Idempotent."""
        return await self.insert_ignore(
            UserFollower,
            {"user_id": user_id, "follower_id": follower_id},
        )

    async def unfollow(self, follower_id: str, user_id: str) -> bool:
        """Remove the follow edge. Returns False if there was none."""
        result = await self.session.execute(
            delete(UserFollower).where(
                UserFollower.user_id == user_id,
                UserFollower.follower_id == follower_id,
            )
        )
        return bool(result.rowcount)

    async def followers_of(self, user_id: str) -> Sequence[User]:
        """Users following ``user_id``, most recent first."""
        result = await self.session.execute(
            select(User)
            .join(UserFollower, UserFollower.follower_id == User.id)
            .where(UserFollower.user_id == user_id)
            .order_by(UserFollower.created_at.desc(), User.id)
        )
        return result.scalars().all()

    async def followed_by(self, follower_id: str) -> Sequence[User]:
        """Users that ``follower_id`` follows, most recent first."""
        result = await self.session.execute(
            select(User)
            .join(UserFollower, UserFollower.user_id == User.id)
            .where(UserFollower.follower_id == follower_id)
            .order_by(UserFollower.created_at.desc(), User.id)
        )
        return result.scalars().all()
