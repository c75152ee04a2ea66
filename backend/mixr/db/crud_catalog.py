"""
Read operations for the equipment, ingredient and mood catalog.
"""
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session

from mixr.core.constants import EquipmentSubcategory, IngredientSubcategory
from mixr.db.models import EquipmentModel, IngredientModel, MoodModel
from mixr.db.schema import EquipmentItem, IngredientItem, Mood


def fetch_equipment_by_ids(db: Session, ids: Sequence[int]) -> List[EquipmentItem]:
    """Resolve an equipment ID set; unknown IDs are ignored."""
    if not ids:
        return []
    rows = (
        db.query(EquipmentModel)
        .filter(EquipmentModel.id.in_(set(ids)))
        .order_by(EquipmentModel.id)
        .all()
    )
    return [EquipmentItem.model_validate(row) for row in rows]


def fetch_ingredients_by_ids(db: Session, ids: Sequence[int]) -> List[IngredientItem]:
    """Resolve an ingredient ID set; unknown IDs are ignored."""
    if not ids:
        return []
    rows = (
        db.query(IngredientModel)
        .filter(IngredientModel.id.in_(set(ids)))
        .order_by(IngredientModel.id)
        .all()
    )
    return [IngredientItem.model_validate(row) for row in rows]


def fetch_mood_by_id(db: Session, mood_id: int) -> Optional[Mood]:
    """Get a mood by ID."""
    row = db.query(MoodModel).filter(MoodModel.id == mood_id).first()
    return Mood.model_validate(row) if row else None


def list_equipment(
    db: Session,
    subcategory: Optional[EquipmentSubcategory] = None
) -> List[EquipmentItem]:
    """List all equipment, optionally filtered by subcategory."""
    query = db.query(EquipmentModel)
    if subcategory:
        query = query.filter(EquipmentModel.subcategory == subcategory)
    return [EquipmentItem.model_validate(row) for row in query.order_by(EquipmentModel.id).all()]


def list_ingredients(
    db: Session,
    subcategory: Optional[IngredientSubcategory] = None
) -> List[IngredientItem]:
    """List all ingredients, optionally filtered by subcategory."""
    query = db.query(IngredientModel)
    if subcategory:
        query = query.filter(IngredientModel.subcategory == subcategory)
    return [IngredientItem.model_validate(row) for row in query.order_by(IngredientModel.id).all()]


def list_moods(db: Session) -> List[Mood]:
    """List all moods."""
    return [Mood.model_validate(row) for row in db.query(MoodModel).order_by(MoodModel.id).all()]


def get_equipment(db: Session, equipment_id: int) -> Optional[EquipmentItem]:
    row = db.query(EquipmentModel).filter(EquipmentModel.id == equipment_id).first()
    return EquipmentItem.model_validate(row) if row else None


def get_ingredient(db: Session, ingredient_id: int) -> Optional[IngredientItem]:
    row = db.query(IngredientModel).filter(IngredientModel.id == ingredient_id).first()
    return IngredientItem.model_validate(row) if row else None
