"""
SQLAlchemy database models.
These define the database schema and relationships.
"""
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Text, JSON,
    Enum as SAEnum, UniqueConstraint, CheckConstraint, Index
)
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime

from mixr.core.constants import EquipmentSubcategory, IngredientSubcategory, LimitsConstants

Base = declarative_base()


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class EquipmentModel(Base):
    """Equipment catalog entry (seeded, read-only)."""
    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True, index=True)
    subcategory = Column(
        SAEnum(EquipmentSubcategory, name="equipment_subcategory", values_callable=_enum_values),
        nullable=False
    )
    name = Column(String(255), nullable=False)
    icon = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class IngredientModel(Base):
    """Ingredient catalog entry (seeded, read-only)."""
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    subcategory = Column(
        SAEnum(IngredientSubcategory, name="ingredient_subcategory", values_callable=_enum_values),
        nullable=False
    )
    name = Column(String(255), nullable=False)
    icon = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class MoodModel(Base):
    """Mood catalog entry used to steer generation."""
    __tablename__ = "moods"

    id = Column(Integer, primary_key=True, index=True)
    emoji = Column(String(10), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    example_drinks = Column(Text, nullable=False)
    image_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class UserModel(Base):
    """User keyed by the identity provider's opaque ID."""
    __tablename__ = "users"

    id = Column(String(128), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    display_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    preferences = relationship("UserPreferenceModel", back_populates="user", uselist=False, cascade="all, delete-orphan")


class UserPreferenceModel(Base):
    """Saved equipment and ingredient selections."""
    __tablename__ = "user_preferences"

    user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    equipment_ids = Column(JSON, nullable=False, default=list)
    ingredient_ids = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("UserModel", back_populates="preferences")


class RecipeModel(Base):
    """Generated recipe."""
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    mood_id = Column(Integer, ForeignKey("moods.id"), nullable=True)
    user_id = Column(String(128), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships; every owned row goes away with the recipe
    ingredients = relationship("RecipeIngredientModel", back_populates="recipe", cascade="all, delete-orphan")
    steps = relationship("RecipeStepModel", back_populates="recipe", cascade="all, delete-orphan")
    equipment = relationship("RecipeEquipmentModel", back_populates="recipe", cascade="all, delete-orphan")
    ratings = relationship("RecipeRatingModel", back_populates="recipe", cascade="all, delete-orphan")
    favorites = relationship("UserFavoriteModel", back_populates="recipe", cascade="all, delete-orphan")


class RecipeIngredientModel(Base):
    """Recipe-ingredient junction with the amount as display text."""
    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    amount = Column(String(LimitsConstants.AMOUNT_MAX_LENGTH), nullable=False)

    # Relationships
    recipe = relationship("RecipeModel", back_populates="ingredients")


class RecipeStepModel(Base):
    """Recipe step model."""
    __tablename__ = "recipe_steps"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)

    # Relationships
    recipe = relationship("RecipeModel", back_populates="steps")


class RecipeEquipmentModel(Base):
    """Recipe-equipment junction."""
    __tablename__ = "recipe_equipment"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=False)

    # Relationships
    recipe = relationship("RecipeModel", back_populates="equipment")


class RecipeRatingModel(Base):
    """Star rating with optional review, one per user and recipe."""
    __tablename__ = "recipe_ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="unique_user_recipe"),
        CheckConstraint("stars >= 1 AND stars <= 5", name="stars_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    stars = Column(Integer, nullable=False)
    review = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    recipe = relationship("RecipeModel", back_populates="ratings")
    user = relationship("UserModel")


class UserFavoriteModel(Base):
    """User-recipe favorite link."""
    __tablename__ = "user_favorites"
    __table_args__ = (
        Index("user_favorites_recipe_id_idx", "recipe_id"),
    )

    user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    recipe = relationship("RecipeModel", back_populates="favorites")
