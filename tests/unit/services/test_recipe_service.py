"""Unit tests for RecipeService.

Tests cover:
- Creation validation order and the no-write guarantee on failure
- Image relocation into the public recipes directory
- Filtering, pagination and popularity ranking
- Favorites idempotency
- Owner-only deletion
- Rollback and file cleanup when a move or commit fails
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from helpers import create_user
from sqlalchemy import func, select

from foodies.database.models import FavoriteRecipe, Recipe, RecipeIngredient
from foodies.database.repositories import RecipeFilters
from foodies.services import CreateRecipeData, IngredientLine, Pagination, RecipeService
from foodies.services import errors


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
async def owner(db_session):
    return await create_user(db_session, name="Olena", email="olena@example.com")


@pytest.fixture
async def other_user(db_session):
    return await create_user(db_session, name="Bob", email="bob@example.com")


@pytest.fixture
def service(db_session, storage) -> RecipeService:
    return RecipeService(db_session, storage)


@pytest.fixture
def recipe_data(owner, reference_data, make_image):
    """Factory for valid creation input; keyword arguments override fields."""
    counter = iter(range(1000))

    def _make(**overrides) -> CreateRecipeData:
        values = {
            "owner_id": owner.id,
            "name": "Honey cake",
            "description": "Layered cake",
            "instructions": "Bake the layers, then stack them.",
            "time": 90,
            "category_id": reference_data.category.id,
            "area_id": reference_data.area.id,
            "ingredients": [
                IngredientLine(reference_data.ingredients[0].id, "500 g"),
                IngredientLine(reference_data.ingredients[1].id, "200 g"),
            ],
            "img_temp_path": make_image(f"cake-{next(counter)}.png"),
        }
        values.update(overrides)
        return CreateRecipeData(**values)

    return _make


async def _count(db_session, model) -> int:
    return await db_session.scalar(select(func.count()).select_from(model))


# =============================================================================
# Creation
# =============================================================================


class TestCreateRecipe:
    """Tests for RecipeService.create_recipe."""

    async def test_creates_recipe_with_links_and_moves_image(
        self, service, recipe_data, settings, reference_data
    ):
        """Should persist the recipe, its ordered links and relocate the image."""
        data = recipe_data()

        recipe = await service.create_recipe(data)

        assert recipe.name == "Honey cake"
        assert recipe.img == f"/public/recipes/{data.img_temp_path.name}"
        assert [i.id for i in recipe.ingredients] == reference_data.ingredient_ids[:2]
        assert [i.measure for i in recipe.ingredients] == ["500 g", "200 g"]
        assert not data.img_temp_path.exists()
        assert (settings.recipes_dir / data.img_temp_path.name).is_file()

    async def test_duplicate_ingredient_lines_keep_first(
        self, service, recipe_data, reference_data, db_session
    ):
        """Should link a repeated ingredient once, with its first measure."""
        flour = reference_data.ingredients[0].id

        recipe = await service.create_recipe(
            recipe_data(
                ingredients=[IngredientLine(flour, "1 cup"), IngredientLine(flour, "2 cups")]
            )
        )

        assert [(i.id, i.measure) for i in recipe.ingredients] == [(flour, "1 cup")]
        assert await _count(db_session, RecipeIngredient) == 1

    @pytest.mark.parametrize(
        ("overrides", "expected"),
        [
            ({"img_temp_path": None}, errors.ImageRequiredError),
            ({"name": "   "}, errors.InvalidNameError),
            ({"time": 0}, errors.InvalidTimeError),
            ({"time": -5}, errors.InvalidTimeError),
            ({"category_id": "missing"}, errors.InvalidCategoryError),
            ({"area_id": "missing"}, errors.InvalidAreaError),
            (
                {"ingredients": [IngredientLine("missing-ingredient")]},
                errors.InvalidIngredientError,
            ),
        ],
    )
    async def test_rejects_invalid_input_without_writing(
        self, service, recipe_data, db_session, overrides, expected
    ):
        """Should raise the matching error and create no recipe."""
        with pytest.raises(expected):
            await service.create_recipe(recipe_data(**overrides))

        assert await _count(db_session, Recipe) == 0
        assert await _count(db_session, RecipeIngredient) == 0

    async def test_rejects_more_than_fifty_ingredients(
        self, service, recipe_data, reference_data, db_session
    ):
        """Should raise TooManyIngredientsError for 51 lines."""
        lines = [IngredientLine(reference_data.ingredients[0].id)] * 51

        with pytest.raises(errors.TooManyIngredientsError):
            await service.create_recipe(recipe_data(ingredients=lines))

        assert await _count(db_session, Recipe) == 0

    async def test_missing_image_file(self, service, recipe_data, settings):
        """Should raise ImageNotFoundError when the temp file is gone."""
        data = recipe_data(img_temp_path=settings.tmp_dir / "vanished.png")

        with pytest.raises(errors.ImageNotFoundError):
            await service.create_recipe(data)

    async def test_invalid_ingredient_names_the_id(self, service, recipe_data):
        """Should name the unknown ingredient id in the message."""
        with pytest.raises(errors.InvalidIngredientError) as exc_info:
            await service.create_recipe(
                recipe_data(ingredients=[IngredientLine("nope")])
            )

        assert '"nope"' in exc_info.value.message

    async def test_image_checked_before_name(self, service, recipe_data):
        """Should report the missing image before an invalid name."""
        with pytest.raises(errors.ImageRequiredError):
            await service.create_recipe(recipe_data(img_temp_path=None, name=""))

    async def test_failed_image_move_rolls_back(
        self, service, storage, recipe_data, db_session
    ):
        """Should leave no recipe or ingredient rows when the image cannot be moved."""
        data = recipe_data()

        with (
            patch.object(storage, "move", AsyncMock(side_effect=OSError("disk full"))),
            pytest.raises(OSError, match="disk full"),
        ):
            await service.create_recipe(data)

        assert await _count(db_session, Recipe) == 0
        assert await _count(db_session, RecipeIngredient) == 0
        assert data.img_temp_path.is_file()

    async def test_failed_commit_removes_moved_image(
        self, service, recipe_data, db_session, settings
    ):
        """Should delete the relocated image and keep no rows when commit fails."""
        data = recipe_data()

        with (
            patch.object(
                db_session, "commit", AsyncMock(side_effect=RuntimeError("commit failed"))
            ),
            pytest.raises(RuntimeError, match="commit failed"),
        ):
            await service.create_recipe(data)

        assert not (settings.recipes_dir / data.img_temp_path.name).exists()
        assert await _count(db_session, Recipe) == 0
        assert await _count(db_session, RecipeIngredient) == 0


# =============================================================================
# Retrieval
# =============================================================================


class TestGetAllRecipes:
    """Tests for RecipeService.get_all_recipes."""

    async def test_filters_and_counts_before_pagination(
        self, service, recipe_data, reference_data
    ):
        """Should return the total of all matches and one page of rows."""
        for index in range(3):
            await service.create_recipe(recipe_data(name=f"Cake {index}"))
        await service.create_recipe(
            recipe_data(name="Fish", category_id=reference_data.other_category.id)
        )

        page = await service.get_all_recipes(
            RecipeFilters(category_id=reference_data.category.id),
            Pagination(page=1, limit=2),
        )

        assert page.count == 3
        assert len(page.rows) == 2
        assert all(r.category_id == reference_data.category.id for r in page.rows)

    async def test_ingredient_filter_keeps_full_ingredient_list(
        self, service, recipe_data, reference_data
    ):
        """Should select by ingredient but list every ingredient of each match."""
        butter = reference_data.ingredients[2].id
        await service.create_recipe(
            recipe_data(
                ingredients=[
                    IngredientLine(reference_data.ingredients[0].id),
                    IngredientLine(butter),
                ]
            )
        )
        await service.create_recipe(recipe_data(name="No butter"))

        page = await service.get_all_recipes(
            RecipeFilters(ingredient_id=butter), Pagination()
        )

        assert page.count == 1
        assert len(page.rows[0].ingredients) == 2

    async def test_newest_first(self, service, recipe_data):
        """Should order recipes by creation time, newest first."""
        first = await service.create_recipe(recipe_data(name="First"))
        second = await service.create_recipe(recipe_data(name="Second"))

        page = await service.get_all_recipes(RecipeFilters(), Pagination())

        assert [r.id for r in page.rows] == [second.id, first.id]


class TestGetPopularRecipes:
    """Tests for RecipeService.get_popular_recipes."""

    async def test_ranks_by_favorite_count(
        self, service, recipe_data, owner, other_user
    ):
        """Should rank by favorites and flag the caller's favorites."""
        plain = await service.create_recipe(recipe_data(name="Plain"))
        liked = await service.create_recipe(recipe_data(name="Liked"))
        loved = await service.create_recipe(recipe_data(name="Loved"))
        await service.add_favorite(owner.id, loved.id)
        await service.add_favorite(other_user.id, loved.id)
        await service.add_favorite(other_user.id, liked.id)

        cards = await service.get_popular_recipes(3, caller_id=owner.id)

        assert [c.id for c in cards] == [loved.id, liked.id, plain.id]
        assert [c.favorites_count for c in cards] == [2, 1, 0]
        assert [c.is_favorite for c in cards] == [True, False, False]

    async def test_limit_is_clamped(self, service, reference_data, db_session, owner):
        """Should never return more than 50 items."""
        for index in range(55):
            db_session.add(
                Recipe(
                    name=f"Recipe {index}",
                    description="",
                    instructions="",
                    time=10,
                    img=f"/public/recipes/{index}.png",
                    category_id=reference_data.category.id,
                    area_id=reference_data.area.id,
                    owner_id=owner.id,
                )
            )
        await db_session.commit()

        assert len(await service.get_popular_recipes(100)) == 50
        assert len(await service.get_popular_recipes(0)) == 1

    async def test_anonymous_caller_has_no_favorites(self, service, recipe_data, owner):
        """Should report is_favorite False without a caller."""
        recipe = await service.create_recipe(recipe_data())
        await service.add_favorite(owner.id, recipe.id)

        cards = await service.get_popular_recipes(4)

        assert cards[0].is_favorite is False
        assert cards[0].favorites_count == 1


class TestGetRecipe:
    """Tests for RecipeService.get_recipe."""

    async def test_returns_detail_with_caller_status(self, service, recipe_data, owner):
        """Should include the favorite count and the caller's status."""
        created = await service.create_recipe(recipe_data())
        await service.add_favorite(owner.id, created.id)

        detail = await service.get_recipe(created.id, caller_id=owner.id)

        assert detail.title == "Honey cake"
        assert detail.favorites_count == 1
        assert detail.is_favorite is True
        assert detail.author.id == owner.id

    async def test_unknown_recipe(self, service):
        """Should raise RecipeNotFoundError."""
        with pytest.raises(errors.RecipeNotFoundError):
            await service.get_recipe("missing")


# =============================================================================
# Favorites
# =============================================================================


class TestFavorites:
    """Tests for add_favorite, remove_favorite and get_favorite_recipes."""

    async def test_double_add_keeps_one_row(self, service, recipe_data, owner, db_session):
        """Should store a single favorite and report it both times."""
        recipe = await service.create_recipe(recipe_data())

        first = await service.add_favorite(owner.id, recipe.id)
        second = await service.add_favorite(owner.id, recipe.id)

        assert first.is_favorite is True
        assert second.is_favorite is True
        assert await _count(db_session, FavoriteRecipe) == 1

    async def test_add_unknown_recipe(self, service, owner):
        """Should raise RecipeNotFoundError."""
        with pytest.raises(errors.RecipeNotFoundError):
            await service.add_favorite(owner.id, "missing")

    async def test_remove_is_harmless_when_absent(self, service, recipe_data, owner):
        """Should not fail when the recipe is not a favorite."""
        recipe = await service.create_recipe(recipe_data())

        await service.remove_favorite(owner.id, recipe.id)

    async def test_favorites_page(self, service, recipe_data, owner, other_user):
        """Should list the user's favorites with global counts."""
        first = await service.create_recipe(recipe_data(name="First"))
        second = await service.create_recipe(recipe_data(name="Second"))
        await service.add_favorite(owner.id, first.id)
        await service.add_favorite(other_user.id, first.id)
        await service.add_favorite(owner.id, second.id)

        page = await service.get_favorite_recipes(owner.id, Pagination(page=1, limit=1))

        assert page.count == 2
        assert len(page.rows) == 1
        assert page.rows[0].is_favorite is True

        await service.remove_favorite(owner.id, second.id)
        page = await service.get_favorite_recipes(owner.id, Pagination())
        assert [(c.id, c.favorites_count) for c in page.rows] == [(first.id, 2)]


# =============================================================================
# Deletion
# =============================================================================


class TestDeleteOwnRecipe:
    """Tests for RecipeService.delete_own_recipe."""

    async def test_deletes_recipe_links_favorites_and_image(
        self, service, recipe_data, owner, settings, db_session
    ):
        """Should remove the recipe, everything that references it and the image."""
        recipe = await service.create_recipe(recipe_data())
        await service.add_favorite(owner.id, recipe.id)
        image = settings.public_dir / recipe.img.removeprefix("/public/")

        await service.delete_own_recipe(recipe.id, owner.id)

        assert await _count(db_session, Recipe) == 0
        assert await _count(db_session, RecipeIngredient) == 0
        assert await _count(db_session, FavoriteRecipe) == 0
        assert not image.exists()

    async def test_other_users_recipe_is_untouched(
        self, service, recipe_data, other_user, settings, db_session
    ):
        """Should raise RecipeNotFoundError and leave recipe, links and image."""
        recipe = await service.create_recipe(recipe_data())
        image = settings.public_dir / recipe.img.removeprefix("/public/")

        with pytest.raises(errors.RecipeNotFoundError):
            await service.delete_own_recipe(recipe.id, other_user.id)

        assert await _count(db_session, Recipe) == 1
        assert await _count(db_session, RecipeIngredient) == 2
        assert image.is_file()

    async def test_succeeds_when_image_already_gone(
        self, service, recipe_data, owner, settings, db_session
    ):
        """Should delete the recipe even if its image file was removed earlier."""
        recipe = await service.create_recipe(recipe_data())
        (settings.public_dir / recipe.img.removeprefix("/public/")).unlink()

        await service.delete_own_recipe(recipe.id, owner.id)

        assert await _count(db_session, Recipe) == 0
        assert await _count(db_session, RecipeIngredient) == 0

    async def test_succeeds_when_image_cannot_be_removed(
        self, service, recipe_data, owner, settings, db_session
    ):
        """Should keep the deletion when removing the image file fails."""
        recipe = await service.create_recipe(recipe_data())
        image = settings.public_dir / recipe.img.removeprefix("/public/")

        with patch(
            "foodies.storage.files.Path.unlink",
            side_effect=PermissionError("read-only filesystem"),
        ):
            await service.delete_own_recipe(recipe.id, owner.id)

        assert await _count(db_session, Recipe) == 0
        assert await _count(db_session, RecipeIngredient) == 0
        assert image.is_file()

    async def test_own_recipes_listing(self, service, recipe_data, owner, other_user):
        """Should list only the owner's recipes."""
        await service.create_recipe(recipe_data())
        await service.create_recipe(recipe_data(owner_id=other_user.id))

        own = await service.get_own_recipes(owner.id)

        assert len(own) == 1
        assert own[0].owner_id == owner.id
