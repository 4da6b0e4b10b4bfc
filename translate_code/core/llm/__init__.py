"""
Translation backends

Components:
    - base: Backend interface, LLMProvider base class, FunctionBackend
    - providers: Groq Cloud (OpenAI-compatible), Google AI Studio, Cloudflare Workers AI
    - utils.extraction: Batch extraction from raw model answers
    - factory: create_llm_provider / build_provider_chain
    - exceptions: BackendFailure, AllProvidersExhausted
"""

from .base import LLMResponse, TranslationBackend, LLMProvider, FunctionBackend
from .providers import OpenAICompatibleProvider, GeminiProvider, CloudflareProvider
from .utils.extraction import BatchExtractor
from .factory import create_llm_provider, build_provider_chain, PROVIDER_TYPES
from .exceptions import BackendFailure, AllProvidersExhausted

__all__ = [
    'LLMResponse',
    'TranslationBackend',
    'LLMProvider',
    'FunctionBackend',
    'OpenAICompatibleProvider',
    'GeminiProvider',
    'CloudflareProvider',
    'BatchExtractor',
    'create_llm_provider',
    'build_provider_chain',
    'PROVIDER_TYPES',
    'BackendFailure',
    'AllProvidersExhausted',
]
