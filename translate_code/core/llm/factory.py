"""
Factory functions for translation backends.

Provider identifiers used in PROVIDER_CHAIN / --providers:
    groq, gemini, cloudflare, openai
"""

import logging
from typing import Iterable, List, Optional

from translate_code.config import (
    GROQ_API_KEY, GROQ_MODEL, GROQ_API_ENDPOINT,
    GEMINI_API_KEY, GEMINI_MODEL,
    CLOUDFLARE_ACCOUNT_ID, CLOUDFLARE_API_TOKEN, CLOUDFLARE_MODEL,
    OPENAI_API_KEY, OPENAI_API_ENDPOINT, OPENAI_MODEL,
    PROVIDER_CHAIN, REQUEST_TIMEOUT,
    TranslationConfig
)
from .base import LLMProvider
from .providers import OpenAICompatibleProvider, GeminiProvider, CloudflareProvider

logger = logging.getLogger(__name__)

PROVIDER_TYPES = ("groq", "gemini", "cloudflare", "openai")


def create_llm_provider(provider_type: str = "groq", **kwargs) -> LLMProvider:
    """Factory function to create LLM providers"""
    provider_type = provider_type.lower().strip()
    timeout = kwargs.get("timeout") or REQUEST_TIMEOUT
    transport = kwargs.get("transport")

    # Missing credentials are not an error here: the provider fails at call
    # time and the chain moves on to the next one
    if provider_type == "groq":
        return OpenAICompatibleProvider(
            api_endpoint=kwargs.get("api_endpoint") or GROQ_API_ENDPOINT,
            model=kwargs.get("model") or GROQ_MODEL,
            api_key=kwargs.get("api_key", GROQ_API_KEY),
            name="Groq Cloud",
            timeout=timeout,
            transport=transport
        )
    elif provider_type == "gemini":
        return GeminiProvider(
            api_key=kwargs.get("api_key", GEMINI_API_KEY),
            model=kwargs.get("model") or GEMINI_MODEL,
            timeout=timeout,
            transport=transport
        )
    elif provider_type == "cloudflare":
        return CloudflareProvider(
            account_id=kwargs.get("account_id", CLOUDFLARE_ACCOUNT_ID),
            api_token=kwargs.get("api_token", CLOUDFLARE_API_TOKEN),
            model=kwargs.get("model") or CLOUDFLARE_MODEL,
            timeout=timeout,
            transport=transport
        )
    elif provider_type == "openai":
        return OpenAICompatibleProvider(
            api_endpoint=kwargs.get("api_endpoint") or OPENAI_API_ENDPOINT,
            model=kwargs.get("model") or OPENAI_MODEL,
            api_key=kwargs.get("api_key", OPENAI_API_KEY),
            name="OpenAI",
            timeout=timeout,
            transport=transport
        )
    else:
        raise ValueError(
            f"Unknown provider type: {provider_type}. Expected one of: {', '.join(PROVIDER_TYPES)}"
        )


def build_provider_chain(
    names: Optional[Iterable[str]] = None,
    config: Optional[TranslationConfig] = None,
    **kwargs
) -> List[LLMProvider]:
    """
    Build the ordered list of backends for the provider chain.

    Args:
        names: Provider identifiers in failover order (default: PROVIDER_CHAIN)
        config: Optional configuration supplying credentials and timeout
        **kwargs: Extra arguments passed to every provider (e.g. transport)

    Returns:
        Providers in the given order

    Raises:
        ValueError: If a name is not a known provider type
    """
    if names is None:
        names = config.provider_chain if config else PROVIDER_CHAIN

    providers = []
    for name in names:
        provider_kwargs = dict(kwargs)
        if config is not None:
            provider_kwargs.update(config.provider_kwargs(name.lower().strip()))
            provider_kwargs.setdefault("timeout", config.timeout)
        providers.append(create_llm_provider(name, **provider_kwargs))

    logger.debug(f"Provider chain: {[p.name for p in providers]}")
    return providers
