"""
Translation dispatcher - sequential failover across translation backends.

One whole-batch request per backend, strictly in chain order. The first
backend that returns a valid batch wins; a backend that errors, times out
or answers with anything other than a list of exactly len(texts) strings is
skipped and the next one is tried. Nothing from a failed backend is kept.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from translate_code.config import REQUEST_TIMEOUT
from .events import (
    EventBus,
    publish,
    create_provider_failed_event,
    create_fallback_event,
    create_performance_metric_event
)
from .llm.base import TranslationBackend
from .llm.exceptions import AllProvidersExhausted, BackendFailure
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderChain:
    """Ordered, immutable list of backends (fastest/cheapest first)."""
    backends: Tuple[TranslationBackend, ...]

    @classmethod
    def of(cls, backends: Iterable[TranslationBackend]) -> 'ProviderChain':
        return cls(tuple(backends))

    @property
    def names(self) -> List[str]:
        return [backend.name for backend in self.backends]

    def __iter__(self):
        return iter(self.backends)

    def __len__(self) -> int:
        return len(self.backends)


@dataclass(frozen=True)
class TranslationBatchRequest:
    """Ordered source strings plus the language pair."""
    texts: Tuple[str, ...]
    source_language: str
    target_language: str


@dataclass
class TranslationBatchResult:
    """
    Translated strings, same order and length as the request.

    Attributes:
        translations: One translated string per source string
        provider: Name of the backend that produced them
        attempts: Failures of the backends tried before it
    """
    translations: List[str]
    provider: str
    attempts: List[BackendFailure] = field(default_factory=list)


def validate_batch(provider: str, batch, expected_count: int) -> List[str]:
    """
    Check a backend answer is a list of exactly `expected_count` strings.

    Raises:
        BackendFailure: If the answer has the wrong shape or length
    """
    if not isinstance(batch, list):
        raise BackendFailure(provider, f"expected a list of strings, got {type(batch).__name__}")
    if not all(isinstance(item, str) for item in batch):
        raise BackendFailure(provider, "response contains non-string items")
    if len(batch) != expected_count:
        raise BackendFailure(
            provider, f"length mismatch: expected {expected_count} items, got {len(batch)}"
        )
    return batch


class TranslationDispatcher:
    """Sends a batch to the provider chain until one backend succeeds."""

    def __init__(
        self,
        chain,
        timeout: float = REQUEST_TIMEOUT,
        event_bus: Optional[EventBus] = None
    ):
        """
        Args:
            chain: ProviderChain or any iterable of backends, in failover order
            timeout: Upper bound in seconds for each backend attempt
            event_bus: Optional bus receiving PROVIDER_FAILED / FALLBACK_USED
        """
        self.chain = chain if isinstance(chain, ProviderChain) else ProviderChain.of(chain)
        self.timeout = timeout
        self.event_bus = event_bus

    async def _attempt(
        self,
        backend: TranslationBackend,
        request: TranslationBatchRequest
    ) -> Result[List[str], BackendFailure]:
        """Run one backend, bounded by the timeout, and validate its answer."""
        texts = list(request.texts)
        try:
            batch = await asyncio.wait_for(
                backend.translate_batch(texts, request.source_language, request.target_language),
                timeout=self.timeout
            )
            return Ok(validate_batch(backend.name, batch, len(texts)))
        except BackendFailure as e:
            if e.provider != backend.name:
                e = BackendFailure(backend.name, e.message)
            return Err(e)
        except asyncio.TimeoutError:
            return Err(BackendFailure(backend.name, f"timed out after {self.timeout}s"))
        except Exception as e:
            # Any other error from an opaque backend is still just that backend failing
            return Err(BackendFailure(backend.name, f"{e.__class__.__name__}: {e}"))

    async def translate_batch(
        self,
        texts: List[str],
        source_language: str,
        target_language: str
    ) -> TranslationBatchResult:
        """
        Translate an ordered batch with sequential failover.

        Args:
            texts: Ordered source strings
            source_language: Source language identifier
            target_language: Target language identifier

        Returns:
            TranslationBatchResult from the first backend that succeeded

        Raises:
            AllProvidersExhausted: Every backend failed (or the chain is empty)
        """
        request = TranslationBatchRequest(tuple(texts), source_language, target_language)

        if not request.texts:
            return TranslationBatchResult(translations=[], provider="none")

        failures: List[BackendFailure] = []
        for position, backend in enumerate(self.chain):
            logger.info(
                f"[{target_language}] Trying {backend.name} "
                f"({position + 1}/{len(self.chain)}) for {len(request.texts)} strings"
            )
            start = time.perf_counter()
            result = await self._attempt(backend, request)
            elapsed = time.perf_counter() - start

            if result.is_ok():
                logger.info(f"[{target_language}] {backend.name} succeeded in {elapsed:.2f}s")
                publish(self.event_bus, create_performance_metric_event(
                    "dispatcher", f"{backend.name}.duration", elapsed
                ))
                if failures:
                    publish(self.event_bus, create_fallback_event(
                        backend.name, target_language, [f.provider for f in failures]
                    ))
                return TranslationBatchResult(
                    translations=result.unwrap(),
                    provider=backend.name,
                    attempts=failures
                )

            failure = result.error
            failures.append(failure)
            logger.warning(f"[{target_language}] {backend.name} failed: {failure.message}")
            publish(self.event_bus, create_provider_failed_event(
                backend.name, target_language, failure.message, position
            ))

        exhausted = AllProvidersExhausted(failures)
        logger.error(f"[{target_language}] {exhausted}")
        raise exhausted
