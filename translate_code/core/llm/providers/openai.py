"""
OpenAI-compatible provider implementation.

This module provides the OpenAICompatibleProvider class for interacting with
chat-completions endpoints (Groq Cloud, OpenAI, vLLM, LM Studio, llama.cpp...).
"""

import logging
from typing import Optional

import httpx

from ..base import LLMProvider, LLMResponse
from ..exceptions import BackendFailure

from translate_code.config import (
    REQUEST_TIMEOUT,
    TRANSLATION_TEMPERATURE,
    MAX_OUTPUT_TOKENS
)

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(LLMProvider):
    """OpenAI-compatible API provider (Groq Cloud, OpenAI, vLLM, LM Studio, etc.)"""

    def __init__(self, api_endpoint: str, model: str, api_key: Optional[str] = None,
                 name: str = "OpenAI-compatible", require_api_key: bool = True,
                 timeout: float = REQUEST_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(model, name=name, timeout=timeout, transport=transport)
        self.api_endpoint = api_endpoint
        self.api_key = api_key
        self.require_api_key = require_api_key

    async def generate(self, prompt: str, timeout: Optional[float] = None,
                       system_prompt: Optional[str] = None) -> LLMResponse:
        """
        Generate text using an OpenAI compatible API.

        Args:
            prompt: The user prompt (batch to translate)
            timeout: Request timeout in seconds
            system_prompt: Optional system prompt (role/instructions)

        Returns:
            LLMResponse with content and token usage info
        """
        if self.require_api_key and not self.api_key:
            raise BackendFailure(self.name, "API key not configured")

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": TRANSLATION_TEMPERATURE,
            "max_tokens": MAX_OUTPUT_TOKENS,
            "stream": False
        }

        logger.info(f"Attempting {self.name} translation with {self.model}")
        response_json = await self._post_json(
            self.api_endpoint, payload, headers, timeout or self.timeout
        )

        try:
            response_text = response_json["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise BackendFailure(self.name, f"unexpected response structure: {e!r}") from e
        if not isinstance(response_text, str):
            raise BackendFailure(self.name, "response has no text content")

        usage = response_json.get("usage") or {}
        return LLMResponse(
            content=response_text,
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0)
        )
