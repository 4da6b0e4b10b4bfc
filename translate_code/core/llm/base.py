"""
Base classes and data structures for translation backends.

This module defines the backend interface the provider chain relies on,
the abstract base class every HTTP LLM provider implements, and common
data structures like LLMResponse.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import httpx

from translate_code.config import TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT, REQUEST_TIMEOUT
from translate_code.prompts import build_batch_prompt
from translate_code.utils.llm_logger import log_llm_interaction
from .exceptions import BackendFailure
from .utils.extraction import BatchExtractor

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM with token usage information"""
    content: str
    prompt_tokens: int = 0  # Number of tokens in the prompt
    completion_tokens: int = 0  # Number of tokens in the response


class TranslationBackend(ABC):
    """
    A named capability translating an ordered batch of strings.

    The provider chain only needs this: a display name and
    `translate_batch(texts, source, target)`. Any exception raised by
    `translate_batch` counts as that backend's failure.
    """

    name: str = "backend"

    @abstractmethod
    async def translate_batch(self, texts: List[str], source_language: str,
                              target_language: str) -> List[str]:
        """Translate `texts` keeping order and count."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class LLMProvider(TranslationBackend):
    """Abstract base class for HTTP LLM providers"""

    def __init__(self, model: str, name: Optional[str] = None,
                 timeout: float = REQUEST_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the LLM provider.

        Args:
            model: Model name/identifier
            name: Display name reported when this provider wins
            timeout: Default request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self.model = model
        if name:
            self.name = name
        self.timeout = timeout
        self._transport = transport
        self._extractor = BatchExtractor(TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT)

    def _create_client(self, timeout: float) -> httpx.AsyncClient:
        """One client per request: providers are shared by concurrent languages"""
        return httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=self._transport)

    async def _post_json(self, url: str, payload: Dict[str, Any],
                         headers: Dict[str, str], timeout: float) -> Dict[str, Any]:
        """
        POST a JSON payload and decode the JSON answer.

        Every transport-level problem is turned into a BackendFailure
        naming this provider.
        """
        try:
            async with self._create_client(timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            raise BackendFailure(self.name, f"request timed out after {timeout}s ({e.__class__.__name__})") from e
        except httpx.HTTPStatusError as e:
            error_body = e.response.text[:500] if e.response is not None else ""
            raise BackendFailure(
                self.name, f"HTTP {e.response.status_code}: {error_body}"
            ) from e
        except httpx.RequestError as e:
            raise BackendFailure(self.name, f"request failed: {e}") from e
        except ValueError as e:
            # JSONDecodeError is a ValueError
            raise BackendFailure(self.name, f"invalid JSON response: {e}") from e

    @abstractmethod
    async def generate(self, prompt: str, timeout: Optional[float] = None,
                       system_prompt: Optional[str] = None) -> LLMResponse:
        """
        Generate text from prompt.

        Args:
            prompt: The user prompt (content to process)
            timeout: Request timeout in seconds (defaults to the provider's)
            system_prompt: Optional system prompt (role/instructions)

        Returns:
            LLMResponse object with content and token usage info

        Raises:
            BackendFailure: On missing credentials, transport errors,
                timeouts, non-2xx responses or malformed payloads
        """

    def extract_batch(self, response: str) -> Optional[List[str]]:
        """
        Extract the translated batch from a raw model answer.

        Returns:
            List of strings, or None if the answer is not a string list
        """
        return self._extractor.extract(response)

    async def translate_batch(self, texts: List[str], source_language: str,
                              target_language: str) -> List[str]:
        """Complete batch workflow: one prompt for the whole batch, request, extraction"""
        prompt = build_batch_prompt(texts, source_language, target_language)
        response = await self.generate(prompt.user, system_prompt=prompt.system)

        log_llm_interaction(
            prompt.system, prompt.user, response.content,
            interaction_type="batch translation",
            prefix=f"{self.name} -> {target_language}"
        )

        batch = self.extract_batch(response.content)
        if batch is None:
            raise BackendFailure(self.name, "response is not a JSON array of strings")
        return batch


BatchFunction = Callable[[List[str], str, str], Union[List[str], Awaitable[List[str]]]]


class FunctionBackend(TranslationBackend):
    """
    Wraps a plain callable `(batch, source, target) -> list` as a backend.

    The callable may be sync or async.

    Example:
        >>> async def upper(batch, source, target):
        ...     return [text.upper() for text in batch]
        >>> backend = FunctionBackend("upper", upper)
    """

    def __init__(self, name: str, func: BatchFunction):
        self.name = name
        self._func = func

    async def translate_batch(self, texts: List[str], source_language: str,
                              target_language: str) -> List[str]:
        result = self._func(list(texts), source_language, target_language)
        if inspect.isawaitable(result):
            result = await result
        return result
