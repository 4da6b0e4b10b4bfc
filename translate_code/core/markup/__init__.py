"""
Markup processing module

This module walks HTML/CSS/JS documents, pulls out the text that is safe to
translate and writes translations back without touching the code around it.

Components:
    - document: Permissive parsing and faithful re-serialization
    - walker: The traversal contract shared by extraction and injection
    - extractor: Ordered extraction units for a document
    - injector: Ordinal-keyed reinjection of translated strings
    - directionality: dir="rtl" correction for right-to-left targets
    - constants: Skip-list, translatable attributes, RTL languages
"""

from .extractor import ExtractionUnit, extract
from .injector import inject
from .directionality import apply_directionality, is_rtl_language
from .walker import UnitKind
from .exceptions import (
    MarkupTranslationError,
    LengthMismatchError,
    InjectionError,
    ParseDegraded
)

__all__ = [
    'ExtractionUnit',
    'UnitKind',
    'extract',
    'inject',
    'apply_directionality',
    'is_rtl_language',
    'MarkupTranslationError',
    'LengthMismatchError',
    'InjectionError',
    'ParseDegraded',
]
