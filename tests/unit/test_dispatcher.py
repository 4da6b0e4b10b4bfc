"""Unit tests for the translation dispatcher (provider chain failover)."""

import pytest

from translate_code.core.dispatcher import (
    ProviderChain,
    TranslationDispatcher,
    validate_batch,
)
from translate_code.core.events import EventType
from translate_code.core.llm import AllProvidersExhausted, BackendFailure


def uppercase(texts, source, target):
    return [text.upper() for text in texts]


def transport_error(texts, source, target):
    raise BackendFailure("Broken", "connection refused")


def drop_last(texts, source, target):
    return list(texts[:-1])


def crash(texts, source, target):
    raise RuntimeError("unexpected crash")


class TestOrderPreservation:
    """Results correspond positionally to the request."""

    @pytest.mark.asyncio
    async def test_uppercase_backend(self, uppercase_backend):
        """Element i of the result is the translation of element i of the batch."""
        batch = ["first", "second", "third", "second"]
        dispatcher = TranslationDispatcher([uppercase_backend])

        result = await dispatcher.translate_batch(batch, "English", "French")

        assert result.translations == ["FIRST", "SECOND", "THIRD", "SECOND"]
        assert result.provider == "Upper"
        assert result.attempts == []

    @pytest.mark.asyncio
    async def test_whole_batch_in_one_request(self, uppercase_backend):
        """Batching is mandatory: one call per backend with every string."""
        dispatcher = TranslationDispatcher([uppercase_backend])

        await dispatcher.translate_batch(["a", "b", "c"], "English", "German")

        assert uppercase_backend.calls == [(["a", "b", "c"], "English", "German")]


class TestFailover:
    """Sequential fallback across the chain."""

    @pytest.mark.asyncio
    async def test_third_backend_wins(self, make_backend):
        """Transport error, then malformed length, then success."""
        first = make_backend("Groq Cloud", transport_error)
        second = make_backend("Google AI Studio", drop_last)
        third = make_backend("Cloudflare Workers AI", uppercase)
        dispatcher = TranslationDispatcher([first, second, third])

        result = await dispatcher.translate_batch(["one", "two"], "English", "French")

        assert result.provider == "Cloudflare Workers AI"
        assert result.translations == ["ONE", "TWO"]
        assert [len(b.calls) for b in (first, second, third)] == [1, 1, 1]
        assert len(result.attempts) == 2
        assert "connection refused" in result.attempts[0].message
        assert "length mismatch" in result.attempts[1].message
        assert result.attempts[1].provider == "Google AI Studio"

    @pytest.mark.asyncio
    async def test_later_backends_not_called_on_success(self, make_backend):
        """The first valid batch is returned immediately."""
        first = make_backend("A", uppercase)
        second = make_backend("B", uppercase)

        result = await TranslationDispatcher([first, second]).translate_batch(["x"], "en", "fr")

        assert result.provider == "A"
        assert second.calls == []

    @pytest.mark.asyncio
    async def test_backends_tried_sequentially(self, make_backend):
        """A backend only starts after the previous one failed."""
        timeline = []

        def slow_failure(texts, source, target):
            timeline.append("A done")
            raise BackendFailure("A", "failed")

        def record(texts, source, target):
            timeline.append("B start")
            return list(texts)

        first = make_backend("A", slow_failure, delay=0.01)
        second = make_backend("B", record)

        await TranslationDispatcher([first, second]).translate_batch(["x"], "en", "fr")

        assert timeline == ["A done", "B start"]

    @pytest.mark.asyncio
    async def test_timeout_is_a_backend_failure(self, make_backend):
        """A backend exceeding the timeout is skipped."""
        slow = make_backend("Slow", uppercase, delay=1.0)
        fast = make_backend("Fast", uppercase)
        dispatcher = TranslationDispatcher([slow, fast], timeout=0.05)

        result = await dispatcher.translate_batch(["x"], "en", "fr")

        assert result.provider == "Fast"
        assert "timed out" in result.attempts[0].message

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_a_backend_failure(self, make_backend):
        """Any error from an opaque backend just moves on."""
        dispatcher = TranslationDispatcher([
            make_backend("Crashy", crash),
            make_backend("Upper", uppercase),
        ])

        result = await dispatcher.translate_batch(["x"], "en", "fr")

        assert result.provider == "Upper"
        assert "RuntimeError: unexpected crash" in result.attempts[0].message

    @pytest.mark.asyncio
    async def test_non_string_items_rejected(self, make_backend):
        """A list with non-strings is malformed."""
        dispatcher = TranslationDispatcher([
            make_backend("Numbers", lambda texts, s, t: [1 for _ in texts]),
            make_backend("Upper", uppercase),
        ])

        result = await dispatcher.translate_batch(["x"], "en", "fr")

        assert result.provider == "Upper"
        assert "non-string" in result.attempts[0].message


class TestExhaustion:
    """Every backend failed."""

    @pytest.mark.asyncio
    async def test_all_backends_fail(self, make_backend):
        """AllProvidersExhausted carries every attempt and the last error."""
        dispatcher = TranslationDispatcher([
            make_backend("A", transport_error),
            make_backend("B", drop_last),
            make_backend("C", lambda texts, s, t: "not a list"),
        ])

        with pytest.raises(AllProvidersExhausted) as exc_info:
            await dispatcher.translate_batch(["one", "two"], "English", "French")

        error = exc_info.value
        assert len(error.attempts) == 3
        assert [a.provider for a in error.attempts] == ["A", "B", "C"]
        assert str(error).startswith("All translation providers failed. Last error: ")
        assert "expected a list of strings" in error.last_error

    @pytest.mark.asyncio
    async def test_empty_chain(self):
        """No backends means immediate exhaustion."""
        with pytest.raises(AllProvidersExhausted) as exc_info:
            await TranslationDispatcher([]).translate_batch(["x"], "en", "fr")

        assert exc_info.value.attempts == []
        assert exc_info.value.last_error is None

    @pytest.mark.asyncio
    async def test_empty_batch_calls_nothing(self, uppercase_backend):
        """An empty batch needs no backend."""
        result = await TranslationDispatcher([uppercase_backend]).translate_batch([], "en", "fr")

        assert result.translations == []
        assert uppercase_backend.calls == []


class TestEvents:
    """Provider failures and fallbacks are published."""

    @pytest.mark.asyncio
    async def test_failure_and_fallback_events(self, make_backend, event_bus):
        dispatcher = TranslationDispatcher(
            [make_backend("A", transport_error), make_backend("B", uppercase)],
            event_bus=event_bus
        )

        await dispatcher.translate_batch(["x"], "en", "Arabic")

        failed = event_bus.get_events_by_type(EventType.PROVIDER_FAILED)
        fallback = event_bus.get_events_by_type(EventType.FALLBACK_USED)
        assert len(failed) == 1
        assert failed[0].data["provider"] == "A"
        assert failed[0].data["position"] == 0
        assert failed[0].data["target_language"] == "Arabic"
        assert len(fallback) == 1
        assert fallback[0].data["provider"] == "B"
        assert fallback[0].data["failed_providers"] == ["A"]


class TestProviderChain:
    """The chain itself is a read-only ordered list."""

    def test_chain_is_immutable(self, uppercase_backend):
        chain = ProviderChain.of([uppercase_backend])

        assert chain.names == ["Upper"]
        assert len(chain) == 1
        with pytest.raises(AttributeError):
            chain.backends = ()

    def test_dispatcher_wraps_iterables(self, uppercase_backend):
        dispatcher = TranslationDispatcher(iter([uppercase_backend]))
        assert isinstance(dispatcher.chain, ProviderChain)
        assert dispatcher.chain.names == ["Upper"]


class TestValidateBatch:
    """Central validation of backend answers."""

    def test_valid(self):
        assert validate_batch("X", ["a", "b"], 2) == ["a", "b"]

    @pytest.mark.parametrize("batch, message", [
        ("ab", "expected a list"),
        (("a", "b"), "expected a list"),
        (["a", None], "non-string"),
        (["a"], "length mismatch"),
        (["a", "b", "c"], "length mismatch"),
    ])
    def test_invalid(self, batch, message):
        with pytest.raises(BackendFailure, match=message):
            validate_batch("X", batch, 2)
