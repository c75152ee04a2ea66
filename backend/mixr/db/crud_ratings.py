"""
CRUD operations for recipe ratings.
"""
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from datetime import datetime

from mixr.core.constants import LimitsConstants, RatingSort
from mixr.db.models import RecipeRatingModel, UserModel
from mixr.db.schema import RatingAggregate


_SORT_ORDER = {
    RatingSort.NEWEST: (RecipeRatingModel.created_at.desc(), RecipeRatingModel.id.desc()),
    RatingSort.OLDEST: (RecipeRatingModel.created_at.asc(), RecipeRatingModel.id.asc()),
    RatingSort.HIGHEST: (RecipeRatingModel.stars.desc(), RecipeRatingModel.id.desc()),
    RatingSort.LOWEST: (RecipeRatingModel.stars.asc(), RecipeRatingModel.id.asc()),
}


def upsert_rating(
    db: Session,
    recipe_id: int,
    user_id: str,
    stars: int,
    review: Optional[str] = None
) -> RecipeRatingModel:
    """Create the user's rating for a recipe, or update the existing one."""
    rating = (
        db.query(RecipeRatingModel)
        .filter(RecipeRatingModel.recipe_id == recipe_id, RecipeRatingModel.user_id == user_id)
        .first()
    )

    if rating:
        rating.stars = stars
        rating.review = review or None
        rating.updated_at = datetime.utcnow()
    else:
        rating = RecipeRatingModel(
            recipe_id=recipe_id,
            user_id=user_id,
            stars=stars,
            review=review or None
        )
        db.add(rating)

    db.commit()
    db.refresh(rating)
    return rating


def get_ratings(
    db: Session,
    recipe_id: int,
    skip: int = 0,
    limit: int = 20,
    sort: RatingSort = RatingSort.NEWEST
) -> List[Tuple[RecipeRatingModel, UserModel]]:
    """Get ratings for a recipe together with their authors."""
    return (
        db.query(RecipeRatingModel, UserModel)
        .join(UserModel, RecipeRatingModel.user_id == UserModel.id)
        .filter(RecipeRatingModel.recipe_id == recipe_id)
        .order_by(*_SORT_ORDER[sort])
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_ratings(db: Session, recipe_id: int) -> int:
    return (
        db.query(func.count(RecipeRatingModel.id))
        .filter(RecipeRatingModel.recipe_id == recipe_id)
        .scalar()
    ) or 0


def aggregate_ratings(db: Session, recipe_id: int) -> RatingAggregate:
    """Average, count and per-star distribution of a recipe's ratings."""
    rows = (
        db.query(RecipeRatingModel.stars, func.count(RecipeRatingModel.id))
        .filter(RecipeRatingModel.recipe_id == recipe_id)
        .group_by(RecipeRatingModel.stars)
        .all()
    )

    distribution = {
        str(stars): 0
        for stars in range(LimitsConstants.MIN_STARS, LimitsConstants.MAX_STARS + 1)
    }
    total = 0
    star_sum = 0
    for stars, count in rows:
        distribution[str(stars)] = count
        total += count
        star_sum += stars * count

    return RatingAggregate(
        recipe_id=recipe_id,
        average_rating=round(star_sum / total, 1) if total else 0,
        total_ratings=total,
        rating_distribution=distribution
    )


def get_rating(db: Session, rating_id: int, recipe_id: int) -> Optional[RecipeRatingModel]:
    """Get a rating only if it belongs to the given recipe."""
    return (
        db.query(RecipeRatingModel)
        .filter(RecipeRatingModel.id == rating_id, RecipeRatingModel.recipe_id == recipe_id)
        .first()
    )


def delete_rating(db: Session, rating: RecipeRatingModel) -> None:
    db.delete(rating)
    db.commit()
