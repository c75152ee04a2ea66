"""
API routes for the equipment, ingredient and mood catalog.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mixr.api.responses import success_response
from mixr.core.constants import CatalogConstants, EquipmentSubcategory, IngredientSubcategory
from mixr.db import crud_catalog
from mixr.db.session import get_db

router = APIRouter(prefix="/api", tags=["Catalog"])


# Subcategory routes are declared before /{id} so they are not taken for an ID

@router.get("/equipment/subcategories")
async def list_equipment_subcategories():
    return success_response(CatalogConstants.EQUIPMENT_SUBCATEGORIES)


@router.get("/equipment")
async def list_equipment(
    subcategory: Optional[EquipmentSubcategory] = Query(None, description="Filter by subcategory"),
    db: Session = Depends(get_db)
):
    """List all equipment, optionally filtered by subcategory."""
    items = crud_catalog.list_equipment(db, subcategory)
    return success_response(items, count=len(items))


@router.get("/equipment/{equipment_id}")
async def get_equipment(equipment_id: int, db: Session = Depends(get_db)):
    item = crud_catalog.get_equipment(db, equipment_id)
    if not item:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return success_response(item)


@router.get("/ingredients/subcategories")
async def list_ingredient_subcategories():
    return success_response(CatalogConstants.INGREDIENT_SUBCATEGORIES)


@router.get("/ingredients")
async def list_ingredients(
    subcategory: Optional[IngredientSubcategory] = Query(None, description="Filter by subcategory"),
    db: Session = Depends(get_db)
):
    """List all ingredients, optionally filtered by subcategory."""
    items = crud_catalog.list_ingredients(db, subcategory)
    return success_response(items, count=len(items))


@router.get("/ingredients/{ingredient_id}")
async def get_ingredient(ingredient_id: int, db: Session = Depends(get_db)):
    item = crud_catalog.get_ingredient(db, ingredient_id)
    if not item:
        raise HTTPException(status_code=404, detail="Ingredient not found")
    return success_response(item)


@router.get("/moods")
async def list_moods(db: Session = Depends(get_db)):
    moods = crud_catalog.list_moods(db)
    return success_response(moods, count=len(moods))


@router.get("/moods/{mood_id}")
async def get_mood(mood_id: int, db: Session = Depends(get_db)):
    mood = crud_catalog.fetch_mood_by_id(db, mood_id)
    if not mood:
        raise HTTPException(status_code=404, detail="Mood not found")
    return success_response(mood)
