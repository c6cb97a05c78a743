"""Data builders shared by unit and integration tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from foodies.auth.passwords import hash_password
from foodies.database.models import Area, Category, Ingredient, User


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


# Smallest valid PNG: 1x1 transparent pixel
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)

TEST_PASSWORD = "correct-horse-battery"  # noqa: S105


@dataclass
class ReferenceData:
    """Seeded categories, areas and ingredients."""

    category: Category
    other_category: Category
    area: Area
    ingredients: list[Ingredient] = field(default_factory=list)

    @property
    def ingredient_ids(self) -> list[str]:
        return [ingredient.id for ingredient in self.ingredients]


async def seed_reference_data(session: AsyncSession) -> ReferenceData:
    """Insert two categories, one area and three ingredients."""
    data = ReferenceData(
        category=Category(name="Dessert"),
        other_category=Category(name="Seafood"),
        area=Area(name="Ukrainian"),
        ingredients=[
            Ingredient(name="Flour", description="Wheat flour", img="/public/i/flour.png"),
            Ingredient(name="Sugar"),
            Ingredient(name="Butter"),
        ],
    )
    session.add_all([data.category, data.other_category, data.area, *data.ingredients])
    await session.commit()
    return data


async def create_user(
    session: AsyncSession,
    *,
    name: str = "Alice",
    email: str = "alice@example.com",
    password: str = TEST_PASSWORD,
    avatar: str | None = None,
) -> User:
    """Insert a user with a real password hash."""
    user = User(
        name=name,
        email=email,
        password=await hash_password(password),
        avatar=avatar,
    )
    session.add(user)
    await session.commit()
    return user


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a session token."""
    return {"Authorization": f"Bearer {token}"}
