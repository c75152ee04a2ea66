"""
Application-wide constants.
Centralizes catalog enumerations and request limits.
"""
from enum import Enum
from typing import List


class EquipmentSubcategory(str, Enum):
    ESSENTIAL = "essential"
    GLASSWARE = "glassware"
    GARNISH = "garnish"
    ADVANCED = "advanced"


class IngredientSubcategory(str, Enum):
    SPIRIT = "spirit"
    WINE = "wine"
    OTHER_ALCOHOL = "other_alcohol"
    FRUIT = "fruit"
    SPICE = "spice"
    OTHER = "other"


class RatingSort(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    HIGHEST = "highest"
    LOWEST = "lowest"


class CatalogConstants:
    """Constants related to the equipment and ingredient catalog."""

    EQUIPMENT_SUBCATEGORIES: List[str] = [s.value for s in EquipmentSubcategory]
    INGREDIENT_SUBCATEGORIES: List[str] = [s.value for s in IngredientSubcategory]


class LimitsConstants:
    """Limits and thresholds used throughout the application."""

    # Pagination
    RECIPES_DEFAULT_LIMIT: int = 10
    USER_LISTS_DEFAULT_LIMIT: int = 20
    RATINGS_DEFAULT_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    # Ratings
    MIN_STARS: int = 1
    MAX_STARS: int = 5
    REVIEW_MAX_LENGTH: int = 500

    # Text columns
    NAME_MAX_LENGTH: int = 255
    AMOUNT_MAX_LENGTH: int = 100

    # Diagnostics
    LOG_EXCERPT_LENGTH: int = 500


__all__ = [
    'EquipmentSubcategory',
    'IngredientSubcategory',
    'RatingSort',
    'CatalogConstants',
    'LimitsConstants'
]
