"""
Batch assembly of persisted recipes into complete views.

A list of recipe rows is hydrated with a fixed number of bulk reads: moods,
ingredient links, steps and equipment links are each fetched once for the
whole batch and merged back per recipe.
"""
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from mixr.db.models import (
    RecipeModel, RecipeIngredientModel, RecipeStepModel, RecipeEquipmentModel,
    IngredientModel, EquipmentModel, MoodModel
)
from mixr.db.schema import (
    Mood, RecipeView, RecipeIngredientView, RecipeEquipmentView
)


def _load_moods(db: Session, mood_ids: Sequence[int]) -> Dict[int, Mood]:
    if not mood_ids:
        return {}
    rows = db.query(MoodModel).filter(MoodModel.id.in_(mood_ids)).all()
    return {row.id: Mood.model_validate(row) for row in rows}


def _load_ingredients(db: Session, recipe_ids: Sequence[int]) -> Dict[int, List[RecipeIngredientView]]:
    rows = (
        db.query(RecipeIngredientModel.recipe_id, IngredientModel, RecipeIngredientModel.amount)
        .join(IngredientModel, RecipeIngredientModel.ingredient_id == IngredientModel.id)
        .filter(RecipeIngredientModel.recipe_id.in_(recipe_ids))
        .order_by(RecipeIngredientModel.recipe_id, RecipeIngredientModel.id)
        .all()
    )
    grouped = defaultdict(list)
    for recipe_id, ingredient, amount in rows:
        grouped[recipe_id].append(RecipeIngredientView(
            id=ingredient.id,
            name=ingredient.name,
            icon=ingredient.icon,
            amount=amount
        ))
    return grouped


def _load_steps(db: Session, recipe_ids: Sequence[int]) -> Dict[int, List[str]]:
    rows = (
        db.query(RecipeStepModel.recipe_id, RecipeStepModel.instruction)
        .filter(RecipeStepModel.recipe_id.in_(recipe_ids))
        .order_by(RecipeStepModel.recipe_id, RecipeStepModel.step_number)
        .all()
    )
    grouped = defaultdict(list)
    for recipe_id, instruction in rows:
        grouped[recipe_id].append(instruction)
    return grouped


def _load_equipment(db: Session, recipe_ids: Sequence[int]) -> Dict[int, List[RecipeEquipmentView]]:
    rows = (
        db.query(RecipeEquipmentModel.recipe_id, EquipmentModel)
        .join(EquipmentModel, RecipeEquipmentModel.equipment_id == EquipmentModel.id)
        .filter(RecipeEquipmentModel.recipe_id.in_(recipe_ids))
        .order_by(RecipeEquipmentModel.recipe_id, RecipeEquipmentModel.id)
        .all()
    )
    grouped = defaultdict(list)
    for recipe_id, equipment in rows:
        grouped[recipe_id].append(RecipeEquipmentView(
            id=equipment.id,
            name=equipment.name,
            icon=equipment.icon
        ))
    return grouped


def assemble_recipes(db: Session, recipe_rows: Sequence[RecipeModel]) -> List[RecipeView]:
    """
    Build complete recipe views for a list of recipe rows.

    Args:
        db: Database session
        recipe_rows: Recipe rows as returned by a list query

    Returns:
        One RecipeView per row, in the same order
    """
    if not recipe_rows:
        return []

    recipe_ids = [row.id for row in recipe_rows]
    mood_ids = sorted({row.mood_id for row in recipe_rows if row.mood_id is not None})

    moods = _load_moods(db, mood_ids)
    ingredients = _load_ingredients(db, recipe_ids)
    steps = _load_steps(db, recipe_ids)
    equipment = _load_equipment(db, recipe_ids)

    return [
        RecipeView(
            id=row.id,
            name=row.name,
            description=row.description,
            mood_id=row.mood_id,
            user_id=row.user_id,
            created_at=row.created_at,
            mood=moods.get(row.mood_id) if row.mood_id is not None else None,
            ingredients=ingredients.get(row.id, []),
            steps=steps.get(row.id, []),
            equipment=equipment.get(row.id, [])
        )
        for row in recipe_rows
    ]


def get_complete_recipe(db: Session, recipe_id: int) -> Optional[RecipeView]:
    """Get one recipe with all its relations, or None if it does not exist."""
    row = db.query(RecipeModel).filter(RecipeModel.id == recipe_id).first()
    if not row:
        return None
    return assemble_recipes(db, [row])[0]
