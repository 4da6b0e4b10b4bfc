"""Unit tests for the document translation orchestrator."""

from unittest.mock import patch

import pytest

from translate_code.core import orchestrator
from translate_code.core.dispatcher import TranslationBatchResult, TranslationDispatcher
from translate_code.core.events import EventBus, EventType
from translate_code.core.llm import BackendFailure
from translate_code.core.orchestrator import (
    DocumentTranslator,
    InvalidInputError,
    TranslationOutcome,
    translate_document,
)


def translator_for(*backends, event_bus=None):
    dispatcher = TranslationDispatcher(list(backends), event_bus=event_bus)
    return DocumentTranslator(dispatcher, event_bus=event_bus)


def glossary_behaviour(glossary):
    def translate(texts, source, target):
        return [glossary[text] for text in texts]
    return translate


def fail_for(language):
    def translate(texts, source, target):
        if target == language:
            raise BackendFailure("stub", f"{language} is not supported")
        return [f"{target}:{text}" for text in texts]
    return translate


class FakeDispatcher:
    """Dispatcher stand-in returning a fixed batch per language."""

    def __init__(self, batches):
        self.batches = batches
        self.calls = 0

    async def translate_batch(self, texts, source_language, target_language):
        self.calls += 1
        batch = self.batches[target_language]
        if isinstance(batch, Exception):
            raise batch
        return TranslationBatchResult(translations=batch, provider="fake")


class TestWorkedExample:
    """The reference scenario: attribute, nested text, script block, Arabic."""

    @pytest.mark.asyncio
    async def test_fragment(self, make_backend, worked_example_markup, arabic_glossary):
        backend = make_backend("Stub", glossary_behaviour(arabic_glossary))

        outcome = await translator_for(backend).translate_document(
            worked_example_markup, "English", "Arabic"
        )

        assert backend.calls == [(["Hello", "Hi", "there"], "English", "Arabic")]
        assert outcome.success is True
        assert outcome.provider == "Stub"
        assert outcome.target_language == "Arabic"
        assert outcome.translated_markup == (
            '<div title="مرحبا"><p>مرحبا <b>هناك</b></p>'
            '<script>var x="Hi";</script></div>'
        )

    @pytest.mark.asyncio
    async def test_full_document_gets_rtl_root(self, make_backend, worked_example_markup, arabic_glossary):
        backend = make_backend("Stub", glossary_behaviour(arabic_glossary))
        markup = f'<html lang="en"><body>{worked_example_markup}</body></html>'

        outcome = await translator_for(backend).translate_document(markup, "English", "Arabic")

        assert outcome.translated_markup == (
            '<html lang="en" dir="rtl"><body><div title="مرحبا"><p>مرحبا <b>هناك</b></p>'
            '<script>var x="Hi";</script></div></body></html>'
        )

    @pytest.mark.asyncio
    async def test_ltr_target_has_no_dir(self, uppercase_backend):
        markup = "<html><body><p>Hi</p></body></html>"

        outcome = await translator_for(uppercase_backend).translate_document(markup, "English", "French")

        assert outcome.translated_markup == "<html><body><p>HI</p></body></html>"


class TestMultipleLanguages:
    """Fan-out across target languages."""

    @pytest.mark.asyncio
    async def test_outcomes_in_request_order(self, make_backend):
        backend = make_backend("Stub", fail_for("nobody"))
        languages = ["French", "Arabic", "Spanish"]

        outcomes = await translator_for(backend).translate_document(
            "<html><body><p>Hi</p></body></html>", "English", languages
        )

        assert [o.target_language for o in outcomes] == languages
        assert all(o.success for o in outcomes)
        assert outcomes[0].translated_markup == "<html><body><p>French:Hi</p></body></html>"
        assert outcomes[1].translated_markup == '<html dir="rtl"><body><p>Arabic:Hi</p></body></html>'

    @pytest.mark.asyncio
    async def test_failure_isolation(self, make_backend):
        """An exhausted chain fails one language, siblings still succeed."""
        backend = make_backend("Stub", fail_for("German"))

        outcomes = await translator_for(backend).translate_document(
            "<p>Hi</p>", "English", ["French", "German", "Spanish"]
        )

        french, german, spanish = outcomes
        assert french.success and french.translated_markup == "<p>French:Hi</p>"
        assert spanish.success and spanish.translated_markup == "<p>Spanish:Hi</p>"
        assert german.success is False
        assert german.translated_markup is None
        assert german.error.startswith("All translation providers failed. Last error: ")
        assert "German is not supported" in german.error

    @pytest.mark.asyncio
    async def test_extraction_runs_once(self, uppercase_backend):
        with patch.object(orchestrator, "extract", wraps=orchestrator.extract) as spy:
            await translator_for(uppercase_backend).translate_document(
                "<p>Hi</p>", "English", ["French", "German", "Spanish"]
            )

        assert spy.call_count == 1
        assert len(uppercase_backend.calls) == 3

    @pytest.mark.asyncio
    async def test_single_language_list_returns_list(self, uppercase_backend):
        outcomes = await translator_for(uppercase_backend).translate_document(
            "<p>Hi</p>", "English", ["French"]
        )

        assert isinstance(outcomes, list)
        assert len(outcomes) == 1

    @pytest.mark.asyncio
    async def test_blank_language_in_list(self, uppercase_backend):
        """A blank entry fails only its own outcome."""
        outcomes = await translator_for(uppercase_backend).translate_document(
            "<p>Hi</p>", "English", ["French", "  "]
        )

        assert outcomes[0].success is True
        assert outcomes[1].success is False
        assert "Missing target language" in outcomes[1].error


class TestShortCircuit:
    """Nothing to translate means no backend call."""

    @pytest.mark.asyncio
    async def test_svg_without_text(self, uppercase_backend):
        markup = '<svg><path d="M0 0"/></svg>'

        outcome = await translator_for(uppercase_backend).translate_document(markup, "English", "Arabic")

        assert outcome.success is True
        assert outcome.translated_markup == markup
        assert outcome.provider == "none"
        assert uppercase_backend.calls == []

    @pytest.mark.asyncio
    async def test_every_language_short_circuits(self, uppercase_backend):
        markup = "<div>\n  <br>\n</div>"

        outcomes = await translator_for(uppercase_backend).translate_document(
            markup, "English", ["French", "Arabic"]
        )

        assert [o.translated_markup for o in outcomes] == [markup, markup]
        assert uppercase_backend.calls == []

    @pytest.mark.asyncio
    async def test_whitespace_only_markup(self, uppercase_backend):
        outcome = await translator_for(uppercase_backend).translate_document("   ", "English", "French")

        assert outcome.success is True
        assert outcome.translated_markup == "   "


class TestInvalidInput:
    """Requests missing fields are rejected before any stage."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("markup, source, target, missing", [
        ("", "English", "French", ["markup"]),
        (None, "English", "French", ["markup"]),
        ("<p>x</p>", "", "French", ["sourceLang"]),
        ("<p>x</p>", "English", None, ["targetLang"]),
        ("<p>x</p>", "English", [], ["targetLang"]),
        (None, None, None, ["markup", "sourceLang", "targetLang"]),
    ])
    async def test_missing_fields(self, uppercase_backend, markup, source, target, missing):
        with patch.object(orchestrator, "extract", wraps=orchestrator.extract) as spy:
            with pytest.raises(InvalidInputError) as exc_info:
                await translator_for(uppercase_backend).translate_document(markup, source, target)

        assert exc_info.value.missing_fields == missing
        assert isinstance(exc_info.value, ValueError)
        assert spy.call_count == 0
        assert uppercase_backend.calls == []

    def test_message(self):
        error = InvalidInputError(["markup", "sourceLang", "targetLang"])
        assert str(error) == "Missing required fields: markup, sourceLang, targetLang"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("markup, source, target, invalid", [
        ("<p>x</p>", "English", 5, ["targetLang"]),
        ("<p>x</p>", "English", {"a": 1}, ["targetLang"]),
        ("<p>x</p>", ["English"], "French", ["sourceLang"]),
        (b"<p>x</p>", "English", "French", ["markup"]),
    ])
    async def test_ill_typed_fields(self, uppercase_backend, markup, source, target, invalid):
        """Present but ill-typed fields are rejected like missing ones."""
        with pytest.raises(InvalidInputError) as exc_info:
            await translator_for(uppercase_backend).translate_document(markup, source, target)

        assert exc_info.value.invalid_fields == invalid
        assert exc_info.value.missing_fields == []
        assert str(exc_info.value) == f"Invalid fields: {invalid[0]}"
        assert uppercase_backend.calls == []

    def test_message_with_missing_and_invalid(self):
        error = InvalidInputError(["markup"], ["targetLang"])
        assert str(error) == "Missing required fields: markup; Invalid fields: targetLang"

    @pytest.mark.asyncio
    async def test_tuple_of_languages_accepted(self, uppercase_backend):
        outcomes = await translator_for(uppercase_backend).translate_document(
            "<p>Hi</p>", "English", ("French", "German")
        )

        assert [o.target_language for o in outcomes] == ["French", "German"]


class TestPipelineErrors:
    """Errors after dispatch abort only the affected language."""

    @pytest.mark.asyncio
    async def test_length_mismatch_fails_language(self):
        dispatcher = FakeDispatcher({"French": ["only one"], "Spanish": ["Uno", "Dos"]})

        outcomes = await DocumentTranslator(dispatcher).translate_document(
            "<p>One</p><p>Two</p>", "English", ["French", "Spanish"]
        )

        assert outcomes[0].success is False
        assert "Expected 2 translations, got 1" in outcomes[0].error
        assert outcomes[1].translated_markup == "<p>Uno</p><p>Dos</p>"

    @pytest.mark.asyncio
    async def test_unexpected_error_fails_language(self):
        dispatcher = FakeDispatcher({"French": RuntimeError("boom"), "Spanish": ["Uno"]})

        outcomes = await DocumentTranslator(dispatcher).translate_document(
            "<p>One</p>", "English", ["French", "Spanish"]
        )

        assert outcomes[0].success is False
        assert "boom" in outcomes[0].error
        assert outcomes[1].success is True


class TestEvents:
    """Language lifecycle events."""

    @pytest.mark.asyncio
    async def test_language_events(self, make_backend, event_bus):
        backend = make_backend("Stub", fail_for("German"))

        await translator_for(backend, event_bus=event_bus).translate_document(
            "<p>Hi</p>", "English", ["French", "German"]
        )

        started = event_bus.get_events_by_type(EventType.LANGUAGE_STARTED)
        completed = event_bus.get_events_by_type(EventType.LANGUAGE_COMPLETED)
        failed = event_bus.get_events_by_type(EventType.LANGUAGE_FAILED)
        assert {e.data["target_language"] for e in started} == {"French", "German"}
        assert [e.data["target_language"] for e in completed] == ["French"]
        assert [e.data["target_language"] for e in failed] == ["German"]

        finished = event_bus.get_events_by_type(EventType.TRANSLATION_COMPLETED)
        assert finished[0].data == {"succeeded": 1, "failed": 1}

    @pytest.mark.asyncio
    async def test_provider_events_on_shared_bus(self, make_backend, event_bus):
        """Provider failures reach the bus the dispatcher was built with."""
        backends = [make_backend("A", fail_for("French")), make_backend("B", fail_for("nobody"))]

        await translator_for(*backends, event_bus=event_bus).translate_document(
            "<p>Hi</p>", "English", "French"
        )

        assert len(event_bus.get_events_by_type(EventType.FALLBACK_USED)) == 1

    @pytest.mark.asyncio
    async def test_injected_dispatcher_keeps_its_bus(self, make_backend, event_bus):
        """A dispatcher shared between translators is never rewired."""
        dispatcher = TranslationDispatcher([
            make_backend("A", fail_for("French")),
            make_backend("B", fail_for("nobody")),
        ])
        other_bus = EventBus()
        other_bus.enable_history()

        for bus in (event_bus, other_bus):
            await DocumentTranslator(dispatcher, event_bus=bus).translate_document(
                "<p>Hi</p>", "en", "French"
            )

        assert dispatcher.event_bus is None
        assert event_bus.get_events_by_type(EventType.FALLBACK_USED) == []
        assert len(event_bus.get_events_by_type(EventType.LANGUAGE_COMPLETED)) == 1
        assert len(other_bus.get_events_by_type(EventType.LANGUAGE_COMPLETED)) == 1


class TestOutcome:
    """Serialisation of outcomes."""

    def test_success_dict(self):
        outcome = TranslationOutcome.succeeded("French", "<p>Salut</p>", "Groq Cloud")

        assert outcome.to_dict() == {
            "targetLang": "French",
            "success": True,
            "translatedMarkup": "<p>Salut</p>",
            "provider": "Groq Cloud",
        }

    def test_failure_dict(self):
        outcome = TranslationOutcome.failed("German", "All translation providers failed. Last error: x")

        assert outcome.to_dict() == {
            "targetLang": "German",
            "success": False,
            "error": "All translation providers failed. Last error: x",
        }


@pytest.mark.asyncio
async def test_module_level_translate_document(uppercase_backend):
    """translate_document builds a DocumentTranslator around the dispatcher."""
    outcome = await translate_document(
        "<p>Hi</p>", "English", "French",
        dispatcher=TranslationDispatcher([uppercase_backend])
    )

    assert outcome.translated_markup == "<p>HI</p>"
    assert outcome.provider == "Upper"
