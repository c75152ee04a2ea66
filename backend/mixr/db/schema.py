"""
Pydantic schemas for API request/response models.
These define the structure of data flowing through the API and the pipeline.
"""
from typing import Optional, List, Dict, Tuple
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, PositiveInt

from mixr.core.constants import EquipmentSubcategory, IngredientSubcategory, LimitsConstants


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class EquipmentItem(BaseModel):
    """Equipment catalog entry."""
    id: int
    subcategory: EquipmentSubcategory
    name: str
    icon: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class IngredientItem(BaseModel):
    """Ingredient catalog entry."""
    id: int
    subcategory: IngredientSubcategory
    name: str
    icon: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class Mood(BaseModel):
    """Mood catalog entry."""
    id: int
    emoji: str
    name: str
    description: str
    example_drinks: str
    image_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

class RecipeIngredient(BaseModel):
    """A single ingredient line in a generated recipe."""
    name: str
    amount: str = ""

    model_config = ConfigDict(frozen=True)


class GeneratedRecipe(BaseModel):
    """Validated output of the recipe generator."""
    name: str = Field(min_length=1)
    description: str = ""
    ingredients: Tuple[RecipeIngredient, ...] = Field(min_length=1)
    steps: Tuple[str, ...] = Field(min_length=1)
    equipment_used: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class GenerateRecipeRequest(BaseModel):
    """Request schema for recipe generation."""
    equipment_ids: List[PositiveInt] = Field(default_factory=list)
    ingredient_ids: List[PositiveInt] = Field(default_factory=list)
    mood_id: int = Field(gt=0)


# ---------------------------------------------------------------------------
# Assembled recipe views
# ---------------------------------------------------------------------------

class RecipeIngredientView(BaseModel):
    id: int
    name: str
    icon: Optional[str] = None
    amount: str


class RecipeEquipmentView(BaseModel):
    id: int
    name: str
    icon: Optional[str] = None


class RecipeView(BaseModel):
    """Recipe with mood, ingredients, steps and equipment resolved."""
    id: int
    name: str
    description: Optional[str] = None
    mood_id: Optional[int] = None
    user_id: Optional[str] = None
    created_at: datetime
    mood: Optional[Mood] = None
    ingredients: List[RecipeIngredientView] = []
    steps: List[str] = []
    equipment: List[RecipeEquipmentView] = []


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------

class RatingCreate(BaseModel):
    """Request schema for submitting a rating."""
    stars: int = Field(ge=LimitsConstants.MIN_STARS, le=LimitsConstants.MAX_STARS)
    review: Optional[str] = Field(default=None, max_length=LimitsConstants.REVIEW_MAX_LENGTH)


class Rating(BaseModel):
    id: int
    recipe_id: int
    user_id: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    stars: int
    review: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RatingAggregate(BaseModel):
    recipe_id: int
    average_rating: float
    total_ratings: int
    rating_distribution: Dict[str, int]


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class AuthUser(BaseModel):
    """Identity handed over by the authentication layer."""
    uid: str
    email: Optional[str] = None


class User(BaseModel):
    id: str
    email: str
    display_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    display_name: str = Field(min_length=1, max_length=LimitsConstants.NAME_MAX_LENGTH)


class Preferences(BaseModel):
    equipment_ids: List[int] = []
    ingredient_ids: List[int] = []
    updated_at: datetime


class PreferencesUpdate(BaseModel):
    equipment_ids: List[PositiveInt]
    ingredient_ids: List[PositiveInt]


class FavoriteCreate(BaseModel):
    recipe_id: int = Field(gt=0)
