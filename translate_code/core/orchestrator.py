"""
Document translation orchestrator.

Runs extraction once, then for every target language:
dispatch -> inject -> directionality. Languages run concurrently and never
share mutable state; a failure in one language only fails that language.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from translate_code.config import REQUEST_TIMEOUT
from .dispatcher import TranslationDispatcher
from .events import (
    EventBus,
    EventType,
    Event,
    publish,
    create_language_event,
    create_performance_metric_event
)
from .llm.exceptions import AllProvidersExhausted
from .llm.factory import build_provider_chain
from .markup import ExtractionUnit, apply_directionality, extract, inject
from .markup.exceptions import MarkupTranslationError

logger = logging.getLogger(__name__)

NO_PROVIDER = "none"


class InvalidInputError(ValueError):
    """
    Raised when a request is missing required fields or has ill-typed ones.

    Attributes:
        missing_fields: Names of the missing fields, in request order
        invalid_fields: Names of the fields present with the wrong type
    """
    def __init__(self, missing_fields: Sequence[str], invalid_fields: Sequence[str] = ()):
        self.missing_fields = list(missing_fields)
        self.invalid_fields = list(invalid_fields)
        problems = []
        if self.missing_fields:
            problems.append(f"Missing required fields: {', '.join(self.missing_fields)}")
        if self.invalid_fields:
            problems.append(f"Invalid fields: {', '.join(self.invalid_fields)}")
        super().__init__("; ".join(problems))


@dataclass
class TranslationOutcome:
    """Result of translating the document into one target language."""
    target_language: str
    success: bool
    translated_markup: Optional[str] = None
    provider: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, target_language: str, translated_markup: str, provider: str) -> 'TranslationOutcome':
        return cls(target_language, True, translated_markup=translated_markup, provider=provider)

    @classmethod
    def failed(cls, target_language: str, error: str) -> 'TranslationOutcome':
        return cls(target_language, False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape used by the HTTP API"""
        if self.success:
            return {
                'targetLang': self.target_language,
                'success': True,
                'translatedMarkup': self.translated_markup,
                'provider': self.provider,
            }
        return {
            'targetLang': self.target_language,
            'success': False,
            'error': self.error,
        }


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def validate_request(markup, source_language, target_languages) -> None:
    """
    Reject requests with missing fields before any stage runs.

    Markup only needs to be a non-empty string: whitespace-only markup is
    valid and simply has nothing to translate. The source language is a
    string; the target is a string or a non-empty list/tuple of them.

    Raises:
        InvalidInputError: Listing every missing and every ill-typed field
    """
    missing = []
    invalid = []

    if markup is None or markup == "":
        missing.append("markup")
    elif not isinstance(markup, str):
        invalid.append("markup")

    if _is_missing(source_language):
        missing.append("sourceLang")
    elif not isinstance(source_language, str):
        invalid.append("sourceLang")

    if _is_missing(target_languages):
        missing.append("targetLang")
    elif not isinstance(target_languages, (str, list, tuple)):
        invalid.append("targetLang")

    if missing or invalid:
        raise InvalidInputError(missing, invalid)


class DocumentTranslator:
    """Translates one markup document into one or more languages."""

    def __init__(
        self,
        dispatcher: Optional[TranslationDispatcher] = None,
        event_bus: Optional[EventBus] = None
    ):
        """
        Args:
            dispatcher: Dispatcher to use (default: configured provider chain).
                An injected dispatcher keeps its own event bus.
            event_bus: Optional bus receiving language and request events,
                also given to the default dispatcher
        """
        self.event_bus = event_bus
        if dispatcher is None:
            dispatcher = TranslationDispatcher(
                build_provider_chain(), timeout=REQUEST_TIMEOUT, event_bus=event_bus
            )
        self.dispatcher = dispatcher

    async def _translate_language(
        self,
        markup: str,
        units: List[ExtractionUnit],
        source_language: str,
        target_language
    ) -> TranslationOutcome:
        """Dispatch -> inject -> directionality for one language."""
        if _is_missing(target_language) or not isinstance(target_language, str):
            return TranslationOutcome.failed(str(target_language or ""), "Missing target language")

        publish(self.event_bus, create_language_event(
            EventType.LANGUAGE_STARTED, target_language, unit_count=len(units)
        ))

        try:
            texts = [unit.original_text for unit in units]
            batch = await self.dispatcher.translate_batch(texts, source_language, target_language)
            translated = inject(markup, units, batch.translations)
            translated = apply_directionality(translated, target_language)
        except (AllProvidersExhausted, MarkupTranslationError) as e:
            logger.error(f"[{target_language}] Translation failed: {e}")
            publish(self.event_bus, create_language_event(
                EventType.LANGUAGE_FAILED, target_language, error=str(e)
            ))
            return TranslationOutcome.failed(target_language, str(e))

        logger.info(f"[{target_language}] Translated {len(units)} strings with {batch.provider}")
        publish(self.event_bus, create_language_event(
            EventType.LANGUAGE_COMPLETED, target_language, provider=batch.provider
        ))
        return TranslationOutcome.succeeded(target_language, translated, batch.provider)

    async def translate_document(
        self,
        markup: str,
        source_language: str,
        target_languages: Union[str, Sequence[str]]
    ) -> Union[TranslationOutcome, List[TranslationOutcome]]:
        """
        Translate a document into one or more target languages.

        Args:
            markup: HTML/CSS/JS document or fragment
            source_language: Source language name or code
            target_languages: One language, or a list of languages

        Returns:
            One TranslationOutcome for a single language, or a list of
            outcomes in the requested order for a list of languages

        Raises:
            InvalidInputError: If markup, source or target language is missing
        """
        validate_request(markup, source_language, target_languages)

        single = isinstance(target_languages, str)
        languages = [target_languages] if single else list(target_languages)

        start = time.perf_counter()
        publish(self.event_bus, Event(
            type=EventType.TRANSLATION_STARTED,
            data={"source_language": source_language, "target_languages": languages},
            source="orchestrator"
        ))

        units = extract(markup)

        if not units:
            logger.info("No translatable content found, returning markup unchanged")
            outcomes = [
                TranslationOutcome.succeeded(language, markup, NO_PROVIDER)
                if isinstance(language, str) and language.strip()
                else TranslationOutcome.failed(str(language or ""), "Missing target language")
                for language in languages
            ]
        else:
            logger.info(
                f"Translating {len(units)} strings from {source_language} into {len(languages)} language(s)"
            )
            results = await asyncio.gather(
                *(self._translate_language(markup, units, source_language, language)
                  for language in languages),
                return_exceptions=True
            )
            outcomes = []
            for language, result in zip(languages, results):
                if isinstance(result, BaseException):
                    if not isinstance(result, Exception):
                        raise result
                    logger.exception(f"[{language}] Unexpected error", exc_info=result)
                    publish(self.event_bus, create_language_event(
                        EventType.LANGUAGE_FAILED, str(language), error=str(result)
                    ))
                    result = TranslationOutcome.failed(str(language), f"Unexpected error: {result}")
                outcomes.append(result)

        elapsed = time.perf_counter() - start
        publish(self.event_bus, create_performance_metric_event("orchestrator", "duration", elapsed))
        publish(self.event_bus, Event(
            type=EventType.TRANSLATION_COMPLETED,
            data={
                "succeeded": sum(1 for o in outcomes if o.success),
                "failed": sum(1 for o in outcomes if not o.success),
            },
            source="orchestrator"
        ))

        return outcomes[0] if single else outcomes


async def translate_document(
    markup: str,
    source_language: str,
    target_languages: Union[str, Sequence[str]],
    dispatcher: Optional[TranslationDispatcher] = None,
    event_bus: Optional[EventBus] = None
) -> Union[TranslationOutcome, List[TranslationOutcome]]:
    """Convenience wrapper around DocumentTranslator.translate_document."""
    translator = DocumentTranslator(dispatcher=dispatcher, event_bus=event_bus)
    return await translator.translate_document(markup, source_language, target_languages)
