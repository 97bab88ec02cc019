import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from config.settings import Settings
from services.assistant import RecipeAssistant
from services.host_bridge import TelegramLaunchBridge
from services.llm_service import LLMService
from storage.local_storage import LocalStorage

OMELETTE_TEXT = "Омлет из 3 яиц и 50 г молока"

OMELETTE_REPLY = {
    "dishName": "Омлет",
    "servings": 1,
    "totalWeight": 200,
    "ingredients": ["Яйца - 3 шт", "Молоко - 50 г"],
    "nutrition": {"calories": 300, "proteins": 20, "fats": 20, "carbs": 2},
    "instructions": [{"step": 1, "title": "Взбить", "description": "Взбейте яйца с молоком"}],
    "tags": ["яйца", "завтрак"],
}


def completion_body(content: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class RecordingTransport:
    """httpx.MockTransport wrapper that remembers every request it served"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self.handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def sent_json(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


def reply_with(content: str, status_code: int = 200) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, json=completion_body(content)))


@pytest.fixture
def settings():
    return Settings(openrouter_api_key="test-key", _env_file=None)


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "data"))


@pytest.fixture
def host():
    return TelegramLaunchBridge()


@pytest.fixture
def make_assistant(storage, settings, host):
    """Build an assistant whose model replies come from the given transport"""
    def _make(transport: RecordingTransport = None) -> RecipeAssistant:
        llm = LLMService(settings, transport=transport.transport if transport else None)
        return RecipeAssistant(storage, llm, host=host)
    return _make
