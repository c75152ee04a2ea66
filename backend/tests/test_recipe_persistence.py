"""
Tests for saving generated recipes, cascading deletes and the full
generate-and-save flow.
"""
import asyncio

import pytest

from mixr.core.exceptions import (
    CatalogSelectionError, GenerationUnavailable, ParseErrorCause, PersistenceError, RecipeParseError
)
from mixr.db import crud_recipes, crud_ratings, crud_users
from mixr.db.models import (
    RecipeModel, RecipeIngredientModel, RecipeStepModel, RecipeEquipmentModel,
    RecipeRatingModel, UserFavoriteModel
)
from mixr.db.schema import (
    AuthUser, EquipmentItem, GeneratedRecipe, GenerateRecipeRequest, IngredientItem, RecipeIngredient
)
from mixr.services.recipe_service import generate_and_save_recipe

from conftest import FakeLLMClient


def _recipe(**overrides):
    fields = dict(
        name="Sunrise",
        description="A bright vodka sour.",
        ingredients=(
            RecipeIngredient(name="VODKA", amount="2 oz"),
            RecipeIngredient(name="Tequila", amount="1 oz"),
        ),
        steps=("Fill shaker with ice", "Add vodka", "Shake and strain"),
        equipment_used=("Shaker", "shaker", "Blender"),
    )
    fields.update(overrides)
    return GeneratedRecipe(**fields)


def _offered(catalog, equipment_names, ingredient_names):
    equipment = [EquipmentItem.model_validate(catalog["equipment"][n]) for n in equipment_names]
    ingredients = [IngredientItem.model_validate(catalog["ingredients"][n]) for n in ingredient_names]
    return equipment, ingredients


def _counts(db):
    return {
        "recipes": db.query(RecipeModel).count(),
        "ingredients": db.query(RecipeIngredientModel).count(),
        "steps": db.query(RecipeStepModel).count(),
        "equipment": db.query(RecipeEquipmentModel).count(),
    }


class TestPersistRecipe:

    def test_matched_names_are_saved(self, db, catalog):
        equipment, ingredients = _offered(catalog, ["Shaker", "Jigger"], ["Vodka", "Lime"])
        mood_id = catalog["moods"]["Happy"].id

        recipe_id = crud_recipes.persist_recipe(db, _recipe(), mood_id, equipment, ingredients, None)

        row = crud_recipes.get_recipe(db, recipe_id)
        assert row.name == "Sunrise"
        assert row.mood_id == mood_id

        links = db.query(RecipeIngredientModel).filter_by(recipe_id=recipe_id).all()
        assert [(l.ingredient_id, l.amount) for l in links] == [(catalog["ingredients"]["Vodka"].id, "2 oz")]

        steps = db.query(RecipeStepModel).filter_by(recipe_id=recipe_id).order_by(RecipeStepModel.step_number).all()
        assert [s.step_number for s in steps] == [1, 2, 3]
        assert steps[1].instruction == "Add vodka"

        # "Shaker" and "shaker" collapse into one row; "Blender" was never offered
        equipment_links = db.query(RecipeEquipmentModel).filter_by(recipe_id=recipe_id).all()
        assert [e.equipment_id for e in equipment_links] == [catalog["equipment"]["Shaker"].id]

    def test_failed_step_insert_leaves_nothing(self, db, catalog, monkeypatch):
        equipment, ingredients = _offered(catalog, ["Shaker"], ["Vodka"])

        def broken_steps(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(crud_recipes, "_stage_steps", broken_steps)

        with pytest.raises(PersistenceError) as exc_info:
            crud_recipes.persist_recipe(db, _recipe(), None, equipment, ingredients, None)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert _counts(db) == {"recipes": 0, "ingredients": 0, "steps": 0, "equipment": 0}

    def test_recipe_without_matches_is_still_saved(self, db, catalog):
        equipment, ingredients = _offered(catalog, ["Jigger"], ["Lime"])

        recipe_id = crud_recipes.persist_recipe(db, _recipe(), None, equipment, ingredients, None)

        assert crud_recipes.get_recipe(db, recipe_id) is not None
        assert _counts(db) == {"recipes": 1, "ingredients": 0, "steps": 3, "equipment": 0}


class TestDeleteRecipe:

    def test_delete_removes_owned_rows(self, db, catalog):
        user = crud_users.get_or_create_user(db, AuthUser(uid="u1", email="ann@example.com"))
        equipment, ingredients = _offered(catalog, ["Shaker"], ["Vodka"])
        recipe_id = crud_recipes.persist_recipe(db, _recipe(), None, equipment, ingredients, user.id)
        crud_ratings.upsert_rating(db, recipe_id, user.id, 5, "Great")
        crud_users.add_favorite(db, user.id, recipe_id)

        crud_recipes.delete_recipe(db, crud_recipes.get_recipe(db, recipe_id))

        assert _counts(db) == {"recipes": 0, "ingredients": 0, "steps": 0, "equipment": 0}
        assert db.query(RecipeRatingModel).count() == 0
        assert db.query(UserFavoriteModel).count() == 0


class TestGenerateAndSave:

    def test_sunrise_end_to_end(self, db, catalog):
        request = GenerateRecipeRequest(
            equipment_ids=[catalog["equipment"]["Shaker"].id, catalog["equipment"]["Jigger"].id],
            ingredient_ids=[catalog["ingredients"]["Vodka"].id, catalog["ingredients"]["Lime Juice"].id],
            mood_id=catalog["moods"]["Happy"].id
        )
        llm = FakeLLMClient()

        view = asyncio.run(generate_and_save_recipe(db, request, None, client=llm))

        assert view.name == "Sunrise"
        assert view.mood.name == "Happy"
        assert [i.name for i in view.ingredients] == ["Vodka"]
        assert view.ingredients[0].amount == "2 oz"
        assert view.steps == ["Add ice to the shaker", "Pour in vodka and lime", "Shake and strain"]
        assert [e.name for e in view.equipment] == ["Shaker"]

        steps = db.query(RecipeStepModel).filter_by(recipe_id=view.id).all()
        assert sorted(s.step_number for s in steps) == [1, 2, 3]
        assert _counts(db) == {"recipes": 1, "ingredients": 1, "steps": 3, "equipment": 1}

        prompt = llm.calls[0]["prompt"]
        assert "Shaker, Jigger" in prompt
        assert "Vodka, Lime Juice" in prompt
        assert "MOOD: Happy" in prompt

    def test_empty_selection_uses_saved_preferences(self, db, catalog):
        user = crud_users.get_or_create_user(db, AuthUser(uid="u1", email="ann@example.com"))
        crud_users.upsert_preferences(
            db, user.id,
            [catalog["equipment"]["Shaker"].id],
            [catalog["ingredients"]["Vodka"].id]
        )
        request = GenerateRecipeRequest(mood_id=catalog["moods"]["Happy"].id)

        view = asyncio.run(generate_and_save_recipe(db, request, user, client=FakeLLMClient()))

        assert view.user_id == "u1"
        assert [i.name for i in view.ingredients] == ["Vodka"]

    def test_empty_selection_without_preferences(self, db, catalog):
        request = GenerateRecipeRequest(
            ingredient_ids=[catalog["ingredients"]["Vodka"].id],
            mood_id=catalog["moods"]["Happy"].id
        )

        with pytest.raises(CatalogSelectionError) as exc_info:
            asyncio.run(generate_and_save_recipe(db, request, None, client=FakeLLMClient()))

        assert exc_info.value.message == "equipment_ids must be a non-empty array"
        assert exc_info.value.status_code == 400

    def test_unknown_ids_are_rejected(self, db, catalog):
        request = GenerateRecipeRequest(
            equipment_ids=[9999],
            ingredient_ids=[catalog["ingredients"]["Vodka"].id],
            mood_id=catalog["moods"]["Happy"].id
        )

        with pytest.raises(CatalogSelectionError) as exc_info:
            asyncio.run(generate_and_save_recipe(db, request, None, client=FakeLLMClient()))

        assert exc_info.value.message == "No valid equipment found"

    def test_unknown_mood_is_not_found(self, db, catalog):
        request = GenerateRecipeRequest(
            equipment_ids=[catalog["equipment"]["Shaker"].id],
            ingredient_ids=[catalog["ingredients"]["Vodka"].id],
            mood_id=9999
        )
        llm = FakeLLMClient()

        with pytest.raises(CatalogSelectionError) as exc_info:
            asyncio.run(generate_and_save_recipe(db, request, None, client=llm))

        assert exc_info.value.status_code == 404
        assert llm.calls == []

    def test_generation_failures_save_nothing(self, db, catalog):
        request = GenerateRecipeRequest(
            equipment_ids=[catalog["equipment"]["Shaker"].id],
            ingredient_ids=[catalog["ingredients"]["Vodka"].id],
            mood_id=catalog["moods"]["Happy"].id
        )

        with pytest.raises(GenerationUnavailable):
            asyncio.run(generate_and_save_recipe(
                db, request, None, client=FakeLLMClient(error=GenerationUnavailable("backend down"))
            ))

        with pytest.raises(RecipeParseError) as exc_info:
            asyncio.run(generate_and_save_recipe(
                db, request, None, client=FakeLLMClient(response='{"name": "Mojito"}')
            ))

        assert exc_info.value.cause == ParseErrorCause.MISSING_INGREDIENTS
        assert _counts(db)["recipes"] == 0
