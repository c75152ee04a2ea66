"""
API routes for the current user's profile, preferences, recipes and favorites.
"""
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mixr.api.dependencies import get_current_user
from mixr.api.responses import success_response
from mixr.core.constants import LimitsConstants
from mixr.db import crud_recipes, crud_users
from mixr.db.models import UserModel
from mixr.db.schema import FavoriteCreate, Preferences, PreferencesUpdate, UserUpdate
from mixr.db.serializers import UserSerializer
from mixr.db.session import get_db
from mixr.services.recipe_assembler import assemble_recipes

router = APIRouter(prefix="/api/users/me", tags=["Users"])

_limit_query = Query(LimitsConstants.USER_LISTS_DEFAULT_LIMIT, ge=1, le=LimitsConstants.MAX_PAGE_LIMIT)


@router.get("")
async def get_me(user: UserModel = Depends(get_current_user)):
    return success_response(UserSerializer.to_schema(user))


@router.put("")
async def update_me(
    update: UserUpdate,
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    """Update the caller's display name."""
    user = crud_users.update_display_name(db, user, update.display_name)
    return success_response(UserSerializer.to_schema(user))


@router.get("/preferences")
async def get_preferences(
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    """Saved equipment and ingredient selections; empty when none were saved."""
    prefs = crud_users.get_preferences(db, user.id)
    if not prefs:
        return success_response(Preferences(updated_at=datetime.utcnow()))
    return success_response(UserSerializer.preferences_to_schema(prefs))


@router.put("/preferences")
async def update_preferences(
    update: PreferencesUpdate,
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    prefs = crud_users.upsert_preferences(db, user.id, update.equipment_ids, update.ingredient_ids)
    return success_response(UserSerializer.preferences_to_schema(prefs))


@router.get("/recipes")
async def list_my_recipes(
    limit: int = _limit_query,
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    """Recipes generated by the caller, newest first."""
    rows = crud_recipes.get_recipes_by_user(db, user.id, skip=offset, limit=limit)
    recipes = assemble_recipes(db, rows)
    return success_response(recipes, count=len(recipes))


@router.get("/favorites")
async def list_favorites(
    limit: int = _limit_query,
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    """Favorite recipes, most recently added first."""
    recipe_ids = crud_users.get_favorite_recipe_ids(db, user.id, skip=offset, limit=limit)
    recipes = assemble_recipes(db, crud_recipes.get_recipes_by_ids(db, recipe_ids))
    return success_response(recipes, count=len(recipes))


@router.post("/favorites")
async def add_favorite(
    favorite: FavoriteCreate,
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    if not crud_recipes.get_recipe(db, favorite.recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")

    crud_users.add_favorite(db, user.id, favorite.recipe_id)
    return success_response(message="Recipe added to favorites")


@router.delete("/favorites/{recipe_id}")
async def remove_favorite(
    recipe_id: int,
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    crud_users.remove_favorite(db, user.id, recipe_id)
    return success_response(message="Recipe removed from favorites")
