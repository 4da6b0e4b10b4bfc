"""
Cloudflare Workers AI provider implementation.

Last resort of the default chain: slower and smaller models, but rarely
rate limited.
"""

import json
import logging
from typing import Optional

import httpx

from translate_code.config import REQUEST_TIMEOUT, MAX_OUTPUT_TOKENS
from ..base import LLMProvider, LLMResponse
from ..exceptions import BackendFailure

logger = logging.getLogger(__name__)

CLOUDFLARE_API_BASE = "https://api.cloudflare.com/client/v4/accounts"


class CloudflareProvider(LLMProvider):
    """
    Provider for Cloudflare Workers AI.

    Configuration:
        account_id: Cloudflare account identifier
        api_token: API token with Workers AI permission
        model: Workers AI model, e.g. @cf/meta/llama-3.1-8b-instruct
    """

    def __init__(self, account_id: Optional[str], api_token: Optional[str],
                 model: str = "@cf/meta/llama-3.1-8b-instruct",
                 name: str = "Cloudflare Workers AI", timeout: float = REQUEST_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(model, name=name, timeout=timeout, transport=transport)
        self.account_id = account_id
        self.api_token = api_token

    @property
    def api_endpoint(self) -> str:
        return f"{CLOUDFLARE_API_BASE}/{self.account_id}/ai/run/{self.model}"

    async def generate(self, prompt: str, timeout: Optional[float] = None,
                       system_prompt: Optional[str] = None) -> LLMResponse:
        """Run the model on Workers AI; the answer is in `result.response`."""
        if not self.account_id or not self.api_token:
            raise BackendFailure(self.name, "Cloudflare credentials not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_token}"
        }

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "messages": messages,
            "max_tokens": MAX_OUTPUT_TOKENS
        }

        logger.info(f"Attempting {self.name} translation with {self.model}")
        response_json = await self._post_json(
            self.api_endpoint, payload, headers, timeout or self.timeout
        )

        if response_json.get("success") is False:
            errors = response_json.get("errors") or []
            raise BackendFailure(self.name, f"API reported failure: {errors}")

        try:
            response_text = response_json["result"]["response"]
        except (KeyError, TypeError) as e:
            raise BackendFailure(self.name, f"unexpected response structure: {e!r}") from e

        # Some models return the JSON array already decoded
        if not isinstance(response_text, str):
            if isinstance(response_text, (list, dict)):
                response_text = json.dumps(response_text, ensure_ascii=False)
            else:
                raise BackendFailure(self.name, "response has no text content")

        usage = response_json["result"].get("usage") or {}
        return LLMResponse(
            content=response_text,
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0)
        )
