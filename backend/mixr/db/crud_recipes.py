"""
CRUD operations for recipes.
"""
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session

from mixr.core.exceptions import PersistenceError
from mixr.core.logging import get_logger
from mixr.db.models import (
    RecipeModel, RecipeIngredientModel, RecipeStepModel, RecipeEquipmentModel
)
from mixr.db.schema import GeneratedRecipe, RecipeIngredient, EquipmentItem, IngredientItem
from mixr.services.reconciler import ReconciledName, reconcile_names

logger = get_logger("db.crud_recipes")


def _stage_recipe(
    db: Session,
    recipe: GeneratedRecipe,
    mood_id: Optional[int],
    owner_id: Optional[str]
) -> RecipeModel:
    recipe_row = RecipeModel(
        name=recipe.name,
        description=recipe.description,
        mood_id=mood_id,
        user_id=owner_id
    )
    db.add(recipe_row)
    db.flush()  # Get recipe_row.id
    return recipe_row


def _stage_ingredients(
    db: Session,
    recipe_id: int,
    ingredients: Sequence[RecipeIngredient],
    links: Sequence[ReconciledName]
) -> int:
    staged = 0
    for ingredient, link in zip(ingredients, links):
        if not link.matched:
            continue
        db.add(RecipeIngredientModel(
            recipe_id=recipe_id,
            ingredient_id=link.catalog_id,
            amount=ingredient.amount
        ))
        staged += 1
    db.flush()
    return staged


def _stage_steps(db: Session, recipe_id: int, steps: Sequence[str]) -> int:
    for step_number, instruction in enumerate(steps, start=1):
        db.add(RecipeStepModel(
            recipe_id=recipe_id,
            step_number=step_number,
            instruction=instruction
        ))
    db.flush()
    return len(steps)


def _stage_equipment(db: Session, recipe_id: int, links: Sequence[ReconciledName]) -> int:
    seen = set()
    for link in links:
        if not link.matched or link.catalog_id in seen:
            continue
        seen.add(link.catalog_id)
        db.add(RecipeEquipmentModel(
            recipe_id=recipe_id,
            equipment_id=link.catalog_id
        ))
    db.flush()
    return len(seen)


def persist_recipe(
    db: Session,
    recipe: GeneratedRecipe,
    mood_id: Optional[int],
    equipment_catalog: Sequence[EquipmentItem],
    ingredient_catalog: Sequence[IngredientItem],
    owner_id: Optional[str]
) -> int:
    """
    Save a generated recipe with its ingredients, steps and equipment.

    All rows are written in one transaction. Ingredient and equipment names
    that do not match the offered catalog subset are skipped.

    Args:
        db: Database session
        recipe: Validated recipe
        mood_id: Mood the recipe was generated for
        equipment_catalog: Equipment offered to the generator
        ingredient_catalog: Ingredients offered to the generator
        owner_id: ID of the user who generated the recipe

    Returns:
        ID of the new recipe

    Raises:
        PersistenceError: If any insert fails; nothing is committed
    """
    ingredient_links = reconcile_names(
        [ingredient.name for ingredient in recipe.ingredients],
        ingredient_catalog,
        kind="ingredient"
    )
    equipment_links = reconcile_names(recipe.equipment_used, equipment_catalog, kind="equipment")

    try:
        recipe_id = _stage_recipe(db, recipe, mood_id, owner_id).id
        ingredient_count = _stage_ingredients(db, recipe_id, recipe.ingredients, ingredient_links)
        step_count = _stage_steps(db, recipe_id, recipe.steps)
        equipment_count = _stage_equipment(db, recipe_id, equipment_links)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to save recipe '{recipe.name}': {e}")
        raise PersistenceError(f"Failed to save recipe: {e}") from e

    logger.info(
        f"Saved recipe {recipe_id} '{recipe.name}' "
        f"({ingredient_count} ingredients, {step_count} steps, {equipment_count} equipment)"
    )
    return recipe_id


def get_recipe(db: Session, recipe_id: int) -> Optional[RecipeModel]:
    """Get a recipe by ID."""
    return db.query(RecipeModel).filter(RecipeModel.id == recipe_id).first()


def get_recipes(db: Session, skip: int = 0, limit: int = 10) -> List[RecipeModel]:
    """Get all recipes, newest first, with pagination."""
    return (
        db.query(RecipeModel)
        .order_by(RecipeModel.created_at.desc(), RecipeModel.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_recipes_by_user(db: Session, user_id: str, skip: int = 0, limit: int = 20) -> List[RecipeModel]:
    """Get recipes generated by a user, newest first."""
    return (
        db.query(RecipeModel)
        .filter(RecipeModel.user_id == user_id)
        .order_by(RecipeModel.created_at.desc(), RecipeModel.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_recipes_by_ids(db: Session, recipe_ids: Sequence[int]) -> List[RecipeModel]:
    """Get recipes by ID, in the order of the given IDs."""
    if not recipe_ids:
        return []
    rows = db.query(RecipeModel).filter(RecipeModel.id.in_(set(recipe_ids))).all()
    by_id = {row.id: row for row in rows}
    return [by_id[recipe_id] for recipe_id in recipe_ids if recipe_id in by_id]


def delete_recipe(db: Session, recipe: RecipeModel) -> None:
    """Delete a recipe together with everything it owns."""
    recipe_id = recipe.id
    db.delete(recipe)
    db.commit()
    logger.info(f"Deleted recipe {recipe_id}")
