import logging
import time
from typing import Any, Dict, Optional

import httpx
import logfire
from pydantic import ValidationError

from config.settings import Settings, settings as default_settings
from models.ai_models import CompletionMessage, CompletionRequest, CompletionResponse
from .errors import ApiError, ConfigMissing, JsonParseError, MalformedResponse, NoJsonFound
from .json_extraction import extract_json_object

logger = logging.getLogger(__name__)

SLOW_COMPLETION_SECONDS = 30.0


class LLMService:
    """Single-turn chat-completion calls to the OpenRouter endpoint"""

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            settings: credentials, endpoint and sampling defaults
            transport: optional httpx transport (tests pass httpx.MockTransport)
        """
        self.settings = settings or default_settings
        self.transport = transport

    def ensure_configured(self) -> None:
        if not self.settings.api_key_configured:
            raise ConfigMissing()

    def _headers(self, title: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.openrouter_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.app_origin,
            "X-Title": title,
        }

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error_data = response.json()
        except ValueError:
            error_data = {}
        error = error_data.get("error") if isinstance(error_data, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return response.reason_phrase

    async def complete(self, prompt: str, *, temperature: float, max_tokens: int, title: str) -> str:
        """
        Send prompt as one user message and return the assistant's text.

        Raises:
            ConfigMissing: no usable API key; no request is made.
            ApiError: non-success status or transport failure.
            MalformedResponse: body lacks the choices/message envelope.
        """
        self.ensure_configured()

        request = CompletionRequest(
            model=self.settings.model,
            messages=[CompletionMessage(role="user", content=prompt)],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        logger.info(f"Completion request: model={request.model} prompt_chars={len(prompt)} max_tokens={max_tokens}")

        started = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.settings.request_timeout, transport=self.transport) as client:
                response = await client.post(
                    self.settings.openrouter_url,
                    headers=self._headers(title),
                    json=request.model_dump(),
                )
        except httpx.HTTPError as e:
            logger.warning(f"Completion request failed: {e!r}")
            raise ApiError(0, str(e) or type(e).__name__) from e

        elapsed = time.time() - started
        if elapsed > SLOW_COMPLETION_SECONDS:
            logfire.warn("slow_completion", model=request.model, title=title, elapsed=elapsed)

        if not response.is_success:
            message = self._error_message(response)
            logger.warning(f"Completion endpoint returned {response.status_code}: {message}")
            raise ApiError(response.status_code, message)

        try:
            envelope = CompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected completion envelope: {e}")
            raise MalformedResponse() from e

        return envelope.content.strip()

    async def complete_json(self, prompt: str, *, temperature: float, max_tokens: int, title: str) -> Dict[str, Any]:
        """complete() followed by extraction of the first JSON object in the reply"""
        content = await self.complete(prompt, temperature=temperature, max_tokens=max_tokens, title=title)
        try:
            return extract_json_object(content)
        except (NoJsonFound, JsonParseError):
            logger.error(f"Could not recover JSON from reply ({len(content)} chars)")
            raise
