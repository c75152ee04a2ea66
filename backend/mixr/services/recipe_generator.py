"""
Recipe generator: builds the cocktail prompt, calls the generation backend
and turns its reply into a validated recipe.
"""
from typing import Optional, Sequence

from mixr.core.exceptions import RecipeParseError
from mixr.core.llm_client import LLMClient, get_llm_client
from mixr.core.logging import get_logger
from mixr.core.constants import LimitsConstants
from mixr.db.schema import GeneratedRecipe
from mixr.utils.json_parser import parse_recipe_response
from mixr.utils.prompt_loader import get_prompt_loader

logger = get_logger("services.recipe_generator")

PROMPT_KEY = "cocktail_recipe"


def build_recipe_prompt(
    equipment_names: Sequence[str],
    ingredient_names: Sequence[str],
    mood_name: str,
    mood_description: str,
    mood_examples: str
) -> str:
    """
    Render the recipe prompt for a catalog selection and mood.

    Args:
        equipment_names: Names of the equipment the drink may use
        ingredient_names: Names of the ingredients the drink may use
        mood_name: Mood name
        mood_description: Mood description
        mood_examples: Example drinks for the mood

    Returns:
        Prompt text
    """
    template = get_prompt_loader().get_prompt_template(PROMPT_KEY)
    return template.format(
        equipment_list=", ".join(equipment_names),
        ingredient_list=", ".join(ingredient_names),
        mood_name=mood_name,
        mood_description=mood_description,
        mood_examples=mood_examples
    )


def get_system_prompt() -> str:
    return get_prompt_loader().get_system_prompt(PROMPT_KEY)


async def generate_recipe(
    equipment_names: Sequence[str],
    ingredient_names: Sequence[str],
    mood_name: str,
    mood_description: str,
    mood_examples: str,
    client: Optional[LLMClient] = None,
    model: Optional[str] = None
) -> GeneratedRecipe:
    """
    Generate one recipe.

    Raises:
        GenerationUnavailable: If the backend call fails
        RecipeParseError: If the reply is not a usable recipe
    """
    client = client or get_llm_client()
    prompt = build_recipe_prompt(
        equipment_names, ingredient_names, mood_name, mood_description, mood_examples
    )

    content = await client.complete(prompt, system=get_system_prompt(), model=model)

    try:
        recipe = parse_recipe_response(content)
    except RecipeParseError as e:
        logger.error(
            f"Unusable recipe response ({e.cause.value}): {e.message}. "
            f"Content: {content[:LimitsConstants.LOG_EXCERPT_LENGTH]}"
        )
        raise

    logger.info(f"Generated recipe '{recipe.name}' for mood '{mood_name}'")
    return recipe
