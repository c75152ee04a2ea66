"""
Recipe service for business logic.
Resolves a user's selection, generates a recipe, saves it and returns the
complete view.
"""
from typing import Optional
from sqlalchemy.orm import Session

from mixr.core.exceptions import CatalogSelectionError
from mixr.core.llm_client import LLMClient
from mixr.core.logging import get_logger
from mixr.db import crud_catalog
from mixr.db.crud_recipes import persist_recipe
from mixr.db.crud_users import get_preferences
from mixr.db.models import UserModel
from mixr.db.schema import GenerateRecipeRequest, RecipeView
from mixr.services.recipe_assembler import get_complete_recipe
from mixr.services.recipe_generator import generate_recipe

logger = get_logger("services.recipe_service")


async def generate_and_save_recipe(
    db: Session,
    request: GenerateRecipeRequest,
    user: Optional[UserModel],
    client: Optional[LLMClient] = None
) -> RecipeView:
    """
    Generate a recipe for the requested selection and persist it.

    Empty equipment or ingredient lists fall back to the user's saved
    preferences.

    Args:
        db: Database session
        request: Equipment, ingredient and mood selection
        user: Requesting user, owner of the new recipe
        client: Generation client, defaults to the global one

    Returns:
        The saved recipe

    Raises:
        CatalogSelectionError: If the selection is empty or does not resolve
        GenerationUnavailable: If the backend call fails
        RecipeParseError: If the backend reply is not a usable recipe
        PersistenceError: If saving fails
    """
    equipment_ids = list(request.equipment_ids)
    ingredient_ids = list(request.ingredient_ids)

    if user and (not equipment_ids or not ingredient_ids):
        prefs = get_preferences(db, user.id)
        if prefs:
            equipment_ids = equipment_ids or list(prefs.equipment_ids or [])
            ingredient_ids = ingredient_ids or list(prefs.ingredient_ids or [])

    if not equipment_ids:
        raise CatalogSelectionError("equipment_ids must be a non-empty array")
    if not ingredient_ids:
        raise CatalogSelectionError("ingredient_ids must be a non-empty array")

    equipment = crud_catalog.fetch_equipment_by_ids(db, equipment_ids)
    if not equipment:
        raise CatalogSelectionError("No valid equipment found")

    ingredients = crud_catalog.fetch_ingredients_by_ids(db, ingredient_ids)
    if not ingredients:
        raise CatalogSelectionError("No valid ingredients found")

    mood = crud_catalog.fetch_mood_by_id(db, request.mood_id)
    if not mood:
        raise CatalogSelectionError("Mood not found", status_code=404)

    recipe = await generate_recipe(
        [item.name for item in equipment],
        [item.name for item in ingredients],
        mood.name,
        mood.description,
        mood.example_drinks,
        client=client
    )

    recipe_id = persist_recipe(
        db,
        recipe,
        mood.id,
        equipment,
        ingredients,
        owner_id=user.id if user else None
    )

    return get_complete_recipe(db, recipe_id)
