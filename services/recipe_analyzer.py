import logging
from typing import Any

from pydantic import ValidationError

from models.recipe import RecipeAnalysis, RecipePayload
from .errors import EmptyInput, IncompleteData, MalformedResponse
from .llm_service import LLMService
from .normalizer import normalize_recipe
from .prompts import build_analysis_prompt

logger = logging.getLogger(__name__)


def parse_recipe(data: Any) -> RecipeAnalysis:
    """
    Promote one parsed JSON object to a normalized RecipeAnalysis.

    Raises:
        MalformedResponse: data is not a JSON object.
        IncompleteData: dishName or instructions are missing.
    """
    if not isinstance(data, dict):
        raise MalformedResponse()

    try:
        payload = RecipePayload.model_validate(data)
    except ValidationError as e:
        raise IncompleteData() from e

    if not payload.dish_name or payload.instructions is None:
        raise IncompleteData()

    try:
        return RecipeAnalysis.model_validate(normalize_recipe(payload.to_raw()))
    except ValidationError as e:
        raise IncompleteData() from e


async def analyze_recipe(recipe_text: str, llm: LLMService) -> RecipeAnalysis:
    """Ask the model for a structured KBJU analysis of free-form recipe text"""
    if not recipe_text or not recipe_text.strip():
        raise EmptyInput()

    data = await llm.complete_json(
        build_analysis_prompt(recipe_text),
        temperature=llm.settings.analysis_temperature,
        max_tokens=llm.settings.analysis_max_tokens,
        title=llm.settings.analysis_title,
    )
    recipe = parse_recipe(data)
    logger.info(f"Analyzed recipe: {recipe.dish_name} ({len(recipe.instructions)} steps)")
    return recipe
