"""
Error kinds raised by the requesters, the stores and the assistant controller.

Hard kinds (RecipeAssistantError subclasses) abort the triggering action.
Soft kinds (SoftNotice subclasses) only tell the user that nothing changed.
The message of every kind is the Russian text shown to the user.
"""

from typing import Any, Optional


class RecipeAssistantError(Exception):
    """Base class for errors that abort a user action"""

    kind = "error"
    default_message = "Произошла ошибка"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class EmptyInput(RecipeAssistantError):
    kind = "empty_input"
    default_message = "Текст рецепта не может быть пустым"


class ConfigMissing(RecipeAssistantError):
    kind = "config_missing"
    default_message = "Пожалуйста, настройте API ключ OpenRouter (OPENROUTER_API_KEY)"


class ApiError(RecipeAssistantError):
    """Non-success HTTP status from the completion endpoint"""

    kind = "api_error"

    def __init__(self, status: int, message: str = ""):
        self.status = status
        self.detail = message
        super().__init__(f"Ошибка API: {status} - {message}" if message else f"Ошибка API: {status}")


class MalformedResponse(RecipeAssistantError):
    kind = "malformed_response"
    default_message = "Неверный формат ответа от API"


class NoJsonFound(RecipeAssistantError):
    kind = "no_json_found"
    default_message = "Не удалось найти JSON в ответе"


class JsonParseError(RecipeAssistantError):
    kind = "json_parse_error"
    default_message = "Ошибка парсинга ответа от нейросети. Попробуйте еще раз."


class IncompleteData(RecipeAssistantError):
    kind = "incomplete_data"
    default_message = "Неполные данные в ответе"


class RecipeNotFound(RecipeAssistantError):
    kind = "not_found"
    default_message = "Рецепт не найден"


class SoftNotice(Exception):
    """Base class for notices: the action succeeded but changed nothing"""

    kind = "notice"
    default_message = ""

    def __init__(self, existing: Any = None, message: Optional[str] = None):
        self.existing = existing
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class AlreadySaved(SoftNotice):
    kind = "already_saved"
    default_message = "Этот рецепт уже сохранен"


class AlreadyInCart(SoftNotice):
    kind = "already_in_cart"
    default_message = "Этот продукт уже в корзине"
