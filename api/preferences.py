from fastapi import APIRouter, Depends

from models.preferences import ThemePreference
from services.assistant import RecipeAssistant
from .dependencies import get_assistant, storage_error

router = APIRouter()


@router.get("/theme", response_model=ThemePreference)
async def get_theme(assistant: RecipeAssistant = Depends(get_assistant)):
    return ThemePreference(theme=assistant.preferences.get_theme())


@router.put("/theme", response_model=ThemePreference)
async def set_theme(preference: ThemePreference, assistant: RecipeAssistant = Depends(get_assistant)):
    try:
        return ThemePreference(theme=assistant.preferences.set_theme(preference.theme))
    except OSError as e:
        raise storage_error("save theme", e)
