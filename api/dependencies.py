import logging
from functools import lru_cache

from fastapi import HTTPException, status

from config.settings import settings
from services.assistant import RecipeAssistant
from services.errors import (
    ConfigMissing,
    EmptyInput,
    RecipeAssistantError,
    RecipeNotFound,
)
from services.host_bridge import TelegramLaunchBridge
from services.llm_service import LLMService
from storage.local_storage import LocalStorage

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    EmptyInput: status.HTTP_400_BAD_REQUEST,
    ConfigMissing: status.HTTP_503_SERVICE_UNAVAILABLE,
    RecipeNotFound: status.HTTP_404_NOT_FOUND,
}


@lru_cache()
def get_assistant() -> RecipeAssistant:
    """One assistant per process; tests replace it through dependency_overrides"""
    storage = LocalStorage(settings.data_directory)
    return RecipeAssistant(storage, LLMService(settings), host=TelegramLaunchBridge())


def http_error(error: RecipeAssistantError) -> HTTPException:
    """Translate an aborted user action into an HTTPException"""
    for kind, status_code in _STATUS_BY_KIND.items():
        if isinstance(error, kind):
            return HTTPException(status_code=status_code, detail=error.message)
    logger.warning(f"{error.kind}: {error.message}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error.message)


def storage_error(action: str, error: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(error)}"
    )
