"""
Core translation modules
"""
from .dispatcher import TranslationDispatcher, TranslationBatchResult, ProviderChain
from .orchestrator import (
    DocumentTranslator,
    TranslationOutcome,
    InvalidInputError,
    translate_document
)

__all__ = [
    'TranslationDispatcher',
    'TranslationBatchResult',
    'ProviderChain',
    'DocumentTranslator',
    'TranslationOutcome',
    'InvalidInputError',
    'translate_document'
]
