"""
Constants for markup extraction and directionality

Re-exported from translate_code.config, where the canonical definitions live
so that they can be adjusted from one place.
"""
from translate_code.config import (
    SKIPPED_TAGS,
    TRANSLATABLE_ATTRIBUTES,
    RTL_LANGUAGES,
    RTL_LANGUAGE_CODES,
)

MARKUP_PARSER = "html.parser"
"""BeautifulSoup tree builder. Keeps whitespace, attribute values and script bodies as written."""

RTL_DIRECTION_ATTRIBUTE = 'dir="rtl"'
"""Attribute added to the <html> root for right-to-left targets"""

__all__ = [
    'SKIPPED_TAGS',
    'TRANSLATABLE_ATTRIBUTES',
    'RTL_LANGUAGES',
    'RTL_LANGUAGE_CODES',
    'MARKUP_PARSER',
    'RTL_DIRECTION_ATTRIBUTE',
]
