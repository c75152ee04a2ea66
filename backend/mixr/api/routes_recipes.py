"""
API routes for recipe generation, listing and ratings.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mixr.api.dependencies import get_current_user, get_generation_client
from mixr.api.responses import success_response
from mixr.core.constants import LimitsConstants, RatingSort
from mixr.core.llm_client import LLMClient
from mixr.core.logging import get_logger
from mixr.db import crud_ratings, crud_recipes
from mixr.db.models import UserModel
from mixr.db.schema import GenerateRecipeRequest, RatingCreate
from mixr.db.serializers import RatingSerializer
from mixr.db.session import get_db
from mixr.services.recipe_assembler import assemble_recipes, get_complete_recipe
from mixr.services.recipe_service import generate_and_save_recipe

logger = get_logger("api.routes_recipes")
router = APIRouter(prefix="/api/recipes", tags=["Recipes"])


def _require_recipe(db: Session, recipe_id: int):
    recipe = crud_recipes.get_recipe(db, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.post("/generate")
async def generate_recipe(
    request: GenerateRecipeRequest,
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user),
    client: LLMClient = Depends(get_generation_client)
):
    """
    Generate a cocktail recipe from the selected equipment, ingredients and mood.

    Empty equipment or ingredient lists fall back to the user's saved
    preferences. The recipe is saved and returned with all its relations.
    """
    recipe = await generate_and_save_recipe(db, request, user, client=client)
    logger.info(f"User {user.id} generated recipe {recipe.id}")
    return success_response(recipe)


@router.get("")
async def list_recipes(
    limit: int = Query(LimitsConstants.RECIPES_DEFAULT_LIMIT, ge=1, le=LimitsConstants.MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    """List recipes, newest first."""
    rows = crud_recipes.get_recipes(db, skip=offset, limit=limit)
    recipes = assemble_recipes(db, rows)
    return success_response(recipes, count=len(recipes))


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    recipe = get_complete_recipe(db, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return success_response(recipe)


@router.delete("/{recipe_id}")
async def delete_recipe(
    recipe_id: int,
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    """Delete a recipe owned by the caller, with its steps, links, ratings and favorites."""
    recipe = _require_recipe(db, recipe_id)
    if recipe.user_id != user.id:
        raise HTTPException(status_code=403, detail="You can only delete your own recipes")

    crud_recipes.delete_recipe(db, recipe)
    return success_response(message="Recipe deleted successfully")


@router.post("/{recipe_id}/ratings")
async def rate_recipe(
    recipe_id: int,
    rating: RatingCreate,
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    """Submit or update the caller's rating for a recipe."""
    _require_recipe(db, recipe_id)
    saved = crud_ratings.upsert_rating(db, recipe_id, user.id, rating.stars, rating.review)
    return success_response(RatingSerializer.to_schema(saved, user))


@router.get("/{recipe_id}/ratings")
async def list_ratings(
    recipe_id: int,
    limit: int = Query(LimitsConstants.RATINGS_DEFAULT_LIMIT, ge=1, le=LimitsConstants.MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    sort: RatingSort = Query(RatingSort.NEWEST, description="newest, oldest, highest or lowest"),
    db: Session = Depends(get_db)
):
    _require_recipe(db, recipe_id)
    rows = crud_ratings.get_ratings(db, recipe_id, skip=offset, limit=limit, sort=sort)
    return success_response(
        RatingSerializer.rows_to_schemas(rows),
        count=crud_ratings.count_ratings(db, recipe_id)
    )


@router.get("/{recipe_id}/ratings/aggregate")
async def get_rating_aggregate(recipe_id: int, db: Session = Depends(get_db)):
    """Average rating, number of ratings and distribution by stars."""
    _require_recipe(db, recipe_id)
    return success_response(crud_ratings.aggregate_ratings(db, recipe_id))


@router.delete("/{recipe_id}/ratings/{rating_id}")
async def delete_rating(
    recipe_id: int,
    rating_id: int,
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_user)
):
    rating = crud_ratings.get_rating(db, rating_id, recipe_id)
    if not rating or rating.user_id != user.id:
        raise HTTPException(
            status_code=404,
            detail="Rating not found or you do not have permission to delete it"
        )

    crud_ratings.delete_rating(db, rating)
    return success_response(message="Rating deleted successfully")
