"""
Centralized configuration
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

# Check for DEBUG_MODE early (before .env is loaded, check environment)
_debug_mode = os.getenv('DEBUG_MODE', 'false').lower() == 'true'
if _debug_mode:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("DEBUG_MODE enabled - verbose logging active")

# .env is looked up in the current working directory
_env_file = Path.cwd() / '.env'
_dotenv_result = load_dotenv(_env_file)
if _debug_mode:
    _config_logger.debug(f"Loaded .env from {_env_file.absolute()}: {_dotenv_result}")

# Provider chain, fastest/cheapest first, most reliable last
PROVIDER_CHAIN = [
    name.strip() for name in os.getenv('PROVIDER_CHAIN', 'groq,gemini,cloudflare').split(',')
    if name.strip()
]

# Groq Cloud (OpenAI-compatible chat completions)
GROQ_API_KEY = os.getenv('GROQ_API_KEY', '')
GROQ_MODEL = os.getenv('GROQ_MODEL', 'llama-3.3-70b-versatile')
GROQ_API_ENDPOINT = os.getenv('GROQ_API_ENDPOINT', 'https://api.groq.com/openai/v1/chat/completions')

# Google AI Studio
GEMINI_API_KEY = os.getenv('GOOGLE_AI_API_KEY', os.getenv('GEMINI_API_KEY', ''))
GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.0-flash')

# Cloudflare Workers AI
CLOUDFLARE_ACCOUNT_ID = os.getenv('CLOUDFLARE_ACCOUNT_ID', '')
CLOUDFLARE_API_TOKEN = os.getenv('CLOUDFLARE_API_TOKEN', '')
CLOUDFLARE_MODEL = os.getenv('CLOUDFLARE_MODEL', '@cf/meta/llama-3.1-8b-instruct')

# Generic OpenAI-compatible endpoint (OpenAI, vLLM, LM Studio, llama.cpp...)
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
OPENAI_API_ENDPOINT = os.getenv('OPENAI_API_ENDPOINT', 'https://api.openai.com/v1/chat/completions')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')

# Request settings (seconds, per backend call)
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '60'))
TRANSLATION_TEMPERATURE = float(os.getenv('TRANSLATION_TEMPERATURE', '0.3'))
MAX_OUTPUT_TOKENS = int(os.getenv('MAX_OUTPUT_TOKENS', '4000'))

# Default languages from environment
DEFAULT_SOURCE_LANGUAGE = os.getenv('DEFAULT_SOURCE_LANGUAGE', 'English')
DEFAULT_TARGET_LANGUAGE = os.getenv('DEFAULT_TARGET_LANGUAGE', 'Arabic')

# Server configuration
HOST = os.getenv('HOST', '127.0.0.1')
PORT = int(os.getenv('PORT', '5000'))

# Debug mode (reload after .env is loaded)
DEBUG_MODE = os.getenv('DEBUG_MODE', 'false').lower() == 'true'


def _mask(secret: str) -> str:
    return '***' + secret[-4:] if secret else '(not set)'


if DEBUG_MODE or _debug_mode:
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("=" * 60)
    _config_logger.debug("LOADED CONFIGURATION VALUES:")
    _config_logger.debug(f"   PROVIDER_CHAIN: {PROVIDER_CHAIN}")
    _config_logger.debug(f"   GROQ_MODEL: {GROQ_MODEL}")
    _config_logger.debug(f"   GROQ_API_KEY: {_mask(GROQ_API_KEY)}")
    _config_logger.debug(f"   GEMINI_MODEL: {GEMINI_MODEL}")
    _config_logger.debug(f"   GEMINI_API_KEY: {_mask(GEMINI_API_KEY)}")
    _config_logger.debug(f"   CLOUDFLARE_MODEL: {CLOUDFLARE_MODEL}")
    _config_logger.debug(f"   CLOUDFLARE_API_TOKEN: {_mask(CLOUDFLARE_API_TOKEN)}")
    _config_logger.debug(f"   REQUEST_TIMEOUT: {REQUEST_TIMEOUT}")
    _config_logger.debug(f"   HOST: {HOST}  PORT: {PORT}")
    _config_logger.debug("=" * 60)

# Translation tags - the model answers between these
TRANSLATE_TAG_IN = "<TRANSLATION>"
TRANSLATE_TAG_OUT = "</TRANSLATION>"
INPUT_TAG_IN = "<SOURCE_TEXT>"
INPUT_TAG_OUT = "</SOURCE_TEXT>"

# ============================================================================
# MARKUP EXTRACTION CONFIGURATION
# ============================================================================

SKIPPED_TAGS = frozenset({
    'script',
    'style',
    'code',
    'pre',
    'kbd',
    'samp',
    'var',
    'noscript',
    'template',
})
"""Elements whose whole subtree (attributes included) is never extracted or modified"""

TRANSLATABLE_ATTRIBUTES = (
    'alt',
    'title',
    'placeholder',
    'aria-label',
    'aria-description',
    'aria-placeholder',
    'aria-roledescription',
)
"""Attributes holding user-visible text. Visited in this order on every element."""

# ============================================================================
# RIGHT-TO-LEFT LANGUAGES
# ============================================================================

RTL_LANGUAGES = (
    'Arabic', 'العربية',
    'Hebrew', 'עברית',
    'Persian', 'Farsi', 'فارسی',
    'Urdu', 'اردو',
    'Pashto', 'پښتو',
    'Yiddish', 'ייִדיש',
    'Kurdish (Sorani)', 'کوردی',
    'Dhivehi', 'Sindhi', 'Uyghur',
)
"""Language names matched case-insensitively as substrings of the target language"""

RTL_LANGUAGE_CODES = frozenset({'ar', 'he', 'iw', 'fa', 'ur', 'ps', 'yi', 'ckb', 'dv', 'sd', 'ug'})
"""Language codes matched exactly against the primary subtag (ar-EG -> ar)"""


@dataclass
class TranslationConfig:
    """Translation settings and provider credentials for one run"""

    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_languages: List[str] = field(default_factory=lambda: [DEFAULT_TARGET_LANGUAGE])

    # Backend settings
    provider_chain: List[str] = field(default_factory=lambda: list(PROVIDER_CHAIN))
    groq_api_key: str = GROQ_API_KEY
    gemini_api_key: str = GEMINI_API_KEY
    cloudflare_account_id: str = CLOUDFLARE_ACCOUNT_ID
    cloudflare_api_token: str = CLOUDFLARE_API_TOKEN
    openai_api_key: str = OPENAI_API_KEY

    timeout: float = REQUEST_TIMEOUT

    @classmethod
    def from_cli_args(cls, args) -> 'TranslationConfig':
        """Create config from CLI arguments"""
        return cls(
            source_language=args.source_lang,
            target_languages=list(args.target_lang or [DEFAULT_TARGET_LANGUAGE]),
            provider_chain=_split_chain(getattr(args, 'providers', None)) or list(PROVIDER_CHAIN),
            timeout=getattr(args, 'timeout', REQUEST_TIMEOUT),
        )

    def provider_kwargs(self, name: str) -> dict:
        """Credentials for one provider of the chain"""
        if name == 'groq':
            return {'api_key': self.groq_api_key}
        if name == 'gemini':
            return {'api_key': self.gemini_api_key}
        if name == 'cloudflare':
            return {'account_id': self.cloudflare_account_id, 'api_token': self.cloudflare_api_token}
        if name == 'openai':
            return {'api_key': self.openai_api_key}
        return {}

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (secrets masked)"""
        return {
            'source_language': self.source_language,
            'target_languages': list(self.target_languages),
            'provider_chain': list(self.provider_chain),
            'groq_api_key': _mask(self.groq_api_key),
            'gemini_api_key': _mask(self.gemini_api_key),
            'cloudflare_account_id': self.cloudflare_account_id,
            'cloudflare_api_token': _mask(self.cloudflare_api_token),
            'openai_api_key': _mask(self.openai_api_key),
            'timeout': self.timeout,
        }


def _split_chain(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [name.strip() for name in value if name and name.strip()]
