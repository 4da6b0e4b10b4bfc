"""Unit tests for batch prompt construction."""

import json

from translate_code.config import INPUT_TAG_IN, INPUT_TAG_OUT, TRANSLATE_TAG_IN
from translate_code.prompts import PromptPair, build_batch_prompt


class TestBuildBatchPrompt:
    """One prompt pair carries the whole batch."""

    def test_batch_is_json_between_source_tags(self):
        texts = ["Hello", 'Say "hi"', "مرحبا"]

        prompt = build_batch_prompt(texts, "English", "French")

        assert isinstance(prompt, PromptPair)
        start = prompt.user.index(INPUT_TAG_IN) + len(INPUT_TAG_IN)
        end = prompt.user.index(INPUT_TAG_OUT)
        assert json.loads(prompt.user[start:end]) == texts

    def test_system_prompt_names_languages_and_count(self):
        prompt = build_batch_prompt(["a", "b"], "English", "Arabic")

        assert "Translate from English to Arabic" in prompt.system
        assert "ARABIC" in prompt.system
        assert "EXACTLY 2" in prompt.system
        assert TRANSLATE_TAG_IN in prompt.system

    def test_non_ascii_kept_readable(self):
        prompt = build_batch_prompt(["Café"], "French", "English")
        assert "Café" in prompt.user
