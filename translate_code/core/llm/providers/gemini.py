"""
Google Gemini provider implementation.

This module provides the GeminiProvider class for interacting with
Google AI Studio's Gemini API.
"""

import logging
from typing import Optional

import httpx

from translate_code.config import REQUEST_TIMEOUT, TRANSLATION_TEMPERATURE, MAX_OUTPUT_TOKENS
from ..base import LLMProvider, LLMResponse
from ..exceptions import BackendFailure

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """
    Provider for Google Gemini API.

    Configuration:
        api_key: Google AI API key (required at call time)
        model: Gemini model name

    Example:
        >>> provider = GeminiProvider(
        ...     api_key="AI...",
        ...     model="gemini-2.0-flash"
        ... )
        >>> response = await provider.generate("Translate: Hello")
    """

    def __init__(self, api_key: Optional[str], model: str = "gemini-2.0-flash",
                 name: str = "Google AI Studio", timeout: float = REQUEST_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the Gemini provider.

        Args:
            api_key: Google AI API key
            model: Gemini model name (default: gemini-2.0-flash)
        """
        super().__init__(model, name=name, timeout=timeout, transport=transport)
        self.api_key = api_key
        self.api_endpoint = f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    async def generate(self, prompt: str, timeout: Optional[float] = None,
                       system_prompt: Optional[str] = None) -> LLMResponse:
        """
        Generate text using Gemini API.

        Args:
            prompt: The user prompt (batch to translate)
            timeout: Request timeout in seconds
            system_prompt: Optional system prompt (role/instructions)

        Returns:
            LLMResponse with content and token usage info
        """
        if not self.api_key:
            raise BackendFailure(self.name, "Google AI API key not configured")

        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key
        }

        payload = {
            "contents": [{
                "role": "user",
                "parts": [{
                    "text": prompt
                }]
            }],
            "generationConfig": {
                "temperature": TRANSLATION_TEMPERATURE,
                "maxOutputTokens": MAX_OUTPUT_TOKENS
            }
        }

        # Gemini takes the system prompt as a separate systemInstruction field
        if system_prompt:
            payload["systemInstruction"] = {
                "parts": [{
                    "text": system_prompt
                }]
            }

        logger.info(f"Attempting {self.name} translation with {self.model}")
        response_json = await self._post_json(
            self.api_endpoint, payload, headers, timeout or self.timeout
        )

        try:
            parts = response_json["candidates"][0]["content"]["parts"]
            response_text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise BackendFailure(self.name, f"unexpected response structure: {e!r}") from e

        usage_metadata = response_json.get("usageMetadata") or {}
        return LLMResponse(
            content=response_text,
            prompt_tokens=usage_metadata.get("promptTokenCount", 0),
            completion_tokens=usage_metadata.get("candidatesTokenCount", 0)
        )
