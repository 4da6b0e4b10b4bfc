"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from translate_code.core.events import EventBus
from translate_code.core.llm.base import TranslationBackend


class RecordingBackend(TranslationBackend):
    """
    Fake backend that records every batch it receives.

    Behaviour is given as a function (texts, source, target) -> list; it may
    raise to simulate a failing provider.
    """

    def __init__(self, name, behaviour, delay=0.0):
        self.name = name
        self.behaviour = behaviour
        self.delay = delay
        self.calls = []

    async def translate_batch(self, texts, source_language, target_language):
        self.calls.append((list(texts), source_language, target_language))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.behaviour(texts, source_language, target_language)


def uppercase(texts, source_language, target_language):
    return [text.upper() for text in texts]


@pytest.fixture
def uppercase_backend():
    """Backend translating every string to upper case."""
    return RecordingBackend("Upper", uppercase)


@pytest.fixture
def make_backend():
    """Factory for RecordingBackend instances."""
    return RecordingBackend


@pytest.fixture
def event_bus():
    """Event bus recording its history."""
    bus = EventBus()
    bus.enable_history()
    return bus


@pytest.fixture
def worked_example_markup():
    """Markup with an attribute, nested text and a script block."""
    return '<div title="Hello"><p>Hi <b>there</b></p><script>var x="Hi";</script></div>'


@pytest.fixture
def arabic_glossary():
    """Stub translations for the worked example."""
    return {"Hello": "مرحبا", "Hi": "مرحبا", "there": "هناك"}
