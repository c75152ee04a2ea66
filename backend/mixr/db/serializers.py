"""
Serializers for converting database rows into response schemas.
Centralizes row-to-schema conversion so routes stay thin.
"""
from typing import List, Tuple

from mixr.db.models import RecipeRatingModel, UserModel, UserPreferenceModel
from mixr.db.schema import Rating, User, Preferences


class RatingSerializer:
    """Serializes ratings with their authors."""

    @staticmethod
    def to_schema(rating: RecipeRatingModel, author: UserModel = None) -> Rating:
        """
        Convert a rating row to a Rating schema.

        Args:
            rating: RecipeRatingModel instance
            author: Rating author, if it was loaded alongside

        Returns:
            Rating schema
        """
        return Rating(
            id=rating.id,
            recipe_id=rating.recipe_id,
            user_id=rating.user_id,
            user_name=author.display_name if author else None,
            user_email=author.email if author else None,
            stars=rating.stars,
            review=rating.review,
            created_at=rating.created_at,
            updated_at=rating.updated_at
        )

    @staticmethod
    def rows_to_schemas(rows: List[Tuple[RecipeRatingModel, UserModel]]) -> List[Rating]:
        return [RatingSerializer.to_schema(rating, author) for rating, author in rows]


class UserSerializer:
    """Serializes users and their saved preferences."""

    @staticmethod
    def to_schema(user: UserModel) -> User:
        return User.model_validate(user)

    @staticmethod
    def preferences_to_schema(prefs: UserPreferenceModel) -> Preferences:
        return Preferences(
            equipment_ids=list(prefs.equipment_ids or []),
            ingredient_ids=list(prefs.ingredient_ids or []),
            updated_at=prefs.updated_at
        )
