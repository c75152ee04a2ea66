"""
Error taxonomy for the recipe pipeline.
Each error maps to one HTTP outcome in main.py.
"""
from enum import Enum


class MixrError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CatalogSelectionError(MixrError):
    """Equipment, ingredient or mood selection is empty or does not resolve."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class GenerationUnavailable(MixrError):
    """The generation backend could not produce a response."""


class ParseErrorCause(str, Enum):
    INVALID_JSON = "invalid_json"
    MISSING_NAME = "missing_name"
    MISSING_INGREDIENTS = "missing_ingredients"
    MISSING_STEPS = "missing_steps"


class RecipeParseError(MixrError):
    """The backend responded but its content is not a usable recipe."""

    def __init__(self, cause: ParseErrorCause, message: str):
        super().__init__(message)
        self.cause = cause


class PersistenceError(MixrError):
    """A recipe write was rolled back."""
