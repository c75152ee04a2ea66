"""
JSON extraction and recipe validation for LLM responses.
Recovers the JSON object from surrounding text, then turns the untyped tree
into a GeneratedRecipe in a single validation pass.
"""
import json
import re
from typing import Any, Dict, List, Optional
import logging

from mixr.core.constants import LimitsConstants
from mixr.core.exceptions import ParseErrorCause, RecipeParseError
from mixr.db.schema import GeneratedRecipe, RecipeIngredient

logger = logging.getLogger(__name__)

# First fenced block, optionally tagged json
_FENCE_PATTERN = re.compile(r'```(?:json)?\s*\n?([\s\S]*?)\n?\s*```')


def extract_json(raw: str) -> str:
    """
    Extract a JSON object string from an LLM response.

    Tries, in order:
    1. Content of the first ``` or ```json fenced block
    2. Span from the first '{' to the last '}'
    3. The trimmed input unchanged, so the caller's parse fails loudly

    Args:
        raw: Raw LLM response string

    Returns:
        Best-effort JSON string; never raises
    """
    match = _FENCE_PATTERN.search(raw)
    if match:
        return match.group(1).strip()

    json_start = raw.find('{')
    json_end = raw.rfind('}')
    if json_start >= 0 and json_end > json_start:
        return raw[json_start:json_end + 1].strip()

    return raw.strip()


def _invalid(cause: ParseErrorCause, detail: str) -> RecipeParseError:
    return RecipeParseError(cause, f"Invalid recipe format: {detail}")


def _normalize_amount(amount: Any) -> str:
    # Amounts are opaque display text
    if amount is None:
        return ""
    if not isinstance(amount, str):
        amount = str(amount)
    amount = amount.strip()
    if len(amount) > LimitsConstants.AMOUNT_MAX_LENGTH:
        logger.debug(
            f"Truncating amount of {len(amount)} chars to "
            f"{LimitsConstants.AMOUNT_MAX_LENGTH}: {amount[:40]}..."
        )
        amount = amount[:LimitsConstants.AMOUNT_MAX_LENGTH]
    return amount


def _normalize_ingredient(entry: Any) -> Optional[RecipeIngredient]:
    """Turn one ingredient entry into a RecipeIngredient, or None if it has no usable name."""
    if isinstance(entry, str):
        entry = {"name": entry}
    if not isinstance(entry, dict):
        return None
    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        return None

    return RecipeIngredient(name=name.strip(), amount=_normalize_amount(entry.get("amount")))


def _normalize_step(step: Any) -> str:
    if isinstance(step, str):
        return step
    if isinstance(step, dict):
        for key in ("instruction", "text", "step"):
            if isinstance(step.get(key), str):
                return step[key]
        return json.dumps(step)
    return str(step)


def _validate_recipe(data: Any) -> GeneratedRecipe:
    if not isinstance(data, dict):
        raise _invalid(ParseErrorCause.MISSING_NAME, 'expected a JSON object with a "name" field')

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise _invalid(ParseErrorCause.MISSING_NAME, 'missing or invalid "name" field')

    raw_ingredients = data.get("ingredients")
    if not isinstance(raw_ingredients, list) or not raw_ingredients:
        raise _invalid(ParseErrorCause.MISSING_INGREDIENTS, 'missing or empty "ingredients" array')

    ingredients: List[RecipeIngredient] = []
    dropped = []
    for entry in raw_ingredients:
        ingredient = _normalize_ingredient(entry)
        if ingredient is None:
            dropped.append(entry)
        else:
            ingredients.append(ingredient)

    if dropped:
        logger.info(f"Dropping {len(dropped)} ingredient entries without a usable name: {dropped}")
    if not ingredients:
        raise _invalid(ParseErrorCause.MISSING_INGREDIENTS, 'no usable entries in "ingredients" array')

    raw_steps = data.get("steps")
    if not isinstance(raw_steps, list) or not raw_steps:
        raise _invalid(ParseErrorCause.MISSING_STEPS, 'missing or empty "steps" array')
    steps = [_normalize_step(step) for step in raw_steps]

    # Cosmetic fields fall back to defaults instead of failing
    description = data.get("description")
    if not isinstance(description, str):
        description = ""

    raw_equipment = data.get("equipmentUsed")
    if isinstance(raw_equipment, list):
        equipment_used = [item for item in raw_equipment if isinstance(item, str)]
    else:
        equipment_used = []

    return GeneratedRecipe(
        name=name.strip(),
        description=description,
        ingredients=tuple(ingredients),
        steps=tuple(steps),
        equipment_used=tuple(equipment_used),
    )


def parse_recipe_response(content: str) -> GeneratedRecipe:
    """
    Parse and validate an AI-generated recipe response.

    Args:
        content: Raw LLM response text

    Returns:
        Immutable GeneratedRecipe

    Raises:
        RecipeParseError: With a cause identifying malformed JSON or the
            missing name, ingredients or steps
    """
    json_str = extract_json(content)

    try:
        data: Dict[str, Any] = json.loads(json_str)
    except json.JSONDecodeError as e:
        logger.debug(f"Unparseable recipe content: {json_str[:200]}")
        raise RecipeParseError(
            ParseErrorCause.INVALID_JSON,
            f"Failed to parse recipe JSON: {e}"
        ) from e

    return _validate_recipe(data)
