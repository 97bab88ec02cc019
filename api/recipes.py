from fastapi import APIRouter, Depends, Query
from typing import List

from models.recipe import (
    AnalysisResponse,
    AnalyzeRequest,
    GenerateRequest,
    GenerationResponse,
    SaveRecipeResponse,
    SavedRecipe,
)
from services.assistant import RecipeAssistant
from services.errors import RecipeAssistantError
from .dependencies import get_assistant, http_error, storage_error

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_recipe(request: AnalyzeRequest, assistant: RecipeAssistant = Depends(get_assistant)):
    """Analyze recipe text; an empty body falls back to the loaded forwarded message"""
    text = request.text if request.text and request.text.strip() else None
    try:
        recipe = await assistant.analyze_text(text)
        return AnalysisResponse(recipe=recipe, saved=assistant.is_current_saved())
    except RecipeAssistantError as e:
        raise http_error(e)


@router.post("/generate", response_model=GenerationResponse)
async def generate_recipes(request: GenerateRequest, assistant: RecipeAssistant = Depends(get_assistant)):
    """Ask Vita for 2-3 recipes"""
    try:
        recipes = await assistant.ask_vita(request.query)
        return GenerationResponse(recipes=recipes)
    except RecipeAssistantError as e:
        raise http_error(e)


@router.post("/current/save", response_model=SaveRecipeResponse)
async def save_current_recipe(assistant: RecipeAssistant = Depends(get_assistant)):
    try:
        return assistant.save_current_recipe()
    except RecipeAssistantError as e:
        raise http_error(e)
    except OSError as e:
        raise storage_error("save recipe", e)


@router.post("/generated/{index}/save", response_model=SaveRecipeResponse)
async def save_generated_recipe(index: int, assistant: RecipeAssistant = Depends(get_assistant)):
    try:
        return assistant.save_generated_recipe(index)
    except RecipeAssistantError as e:
        raise http_error(e)
    except OSError as e:
        raise storage_error("save recipe", e)


@router.post("/reset")
async def reset_analysis(assistant: RecipeAssistant = Depends(get_assistant)):
    """Clear the current text and analysis"""
    assistant.reset()
    return {"message": "Analysis reset"}


@router.get("/saved", response_model=List[SavedRecipe])
async def get_saved_recipes(q: str = "", assistant: RecipeAssistant = Depends(get_assistant)):
    """List saved recipes, newest first, optionally filtered by name or #tag"""
    return assistant.recipes.search(q)


@router.get("/saved/{recipe_id}", response_model=SavedRecipe)
async def get_saved_recipe(recipe_id: str, assistant: RecipeAssistant = Depends(get_assistant)):
    try:
        return assistant.get_saved_recipe(recipe_id)
    except RecipeAssistantError as e:
        raise http_error(e)


@router.delete("/saved/{recipe_id}")
async def delete_saved_recipe(recipe_id: str, assistant: RecipeAssistant = Depends(get_assistant)):
    try:
        removed = assistant.delete_saved_recipe(recipe_id)
        return {"message": "Рецепт удален", "removed": removed}
    except OSError as e:
        raise storage_error("delete recipe", e)


@router.get("/tags/popular", response_model=List[str])
async def get_popular_tags(
    limit: int = Query(10, ge=0, le=100),
    assistant: RecipeAssistant = Depends(get_assistant),
):
    return assistant.recipes.popular_tags(limit)
