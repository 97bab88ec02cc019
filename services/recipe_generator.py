import logging
from typing import List

from models.recipe import RecipeAnalysis
from .errors import EmptyInput, MalformedResponse
from .llm_service import LLMService
from .prompts import build_generation_prompt
from .recipe_analyzer import parse_recipe

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Опишите, что вы хотите приготовить"


async def generate_recipes(query: str, llm: LLMService) -> List[RecipeAnalysis]:
    """
    Ask Vita for 2-3 recipes matching a free-text preference query.

    The batch is all-or-nothing: any shape problem fails the whole call.
    """
    if not query or not query.strip():
        raise EmptyInput(EMPTY_QUERY_MESSAGE)

    data = await llm.complete_json(
        build_generation_prompt(query),
        temperature=llm.settings.generation_temperature,
        max_tokens=llm.settings.generation_max_tokens,
        title=llm.settings.generation_title,
    )

    recipes = data.get("recipes")
    if not isinstance(recipes, list):
        raise MalformedResponse("Неверный формат ответа: отсутствует массив recipes")

    # Each element must promote cleanly; a partial batch is never returned
    results = [parse_recipe(recipe) for recipe in recipes]
    logger.info(f"Generated {len(results)} recipes for query of {len(query)} chars")
    return results
