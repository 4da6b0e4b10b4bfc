"""
LLM Provider Implementations

Individual provider implementations for the translation backends.

Providers:
    - openai: OpenAI-compatible chat completions (Groq Cloud, OpenAI...)
    - gemini: Google AI Studio
    - cloudflare: Cloudflare Workers AI
"""

from .openai import OpenAICompatibleProvider
from .gemini import GeminiProvider
from .cloudflare import CloudflareProvider

__all__ = ['OpenAICompatibleProvider', 'GeminiProvider', 'CloudflareProvider']
