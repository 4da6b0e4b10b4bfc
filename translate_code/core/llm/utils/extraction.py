"""
Batch extraction from LLM responses.

This module turns the raw text a model answered with into the ordered list
of translated strings, whatever wrapping the model added around it.
"""

import json
import logging
import re
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class BatchExtractor:
    """
    Extracts a batch of translated strings from LLM responses.

    Handles:
        - Extraction between custom tags (e.g., <TRANSLATION>...</TRANSLATION>)
        - Removal of <think>...</think> blocks
        - Markdown code fences around the JSON
        - A bare JSON array, or an object with a "translations" array
        - Leading/trailing chatter around the array

    Only the shape is checked here (a list of strings). The batch length is
    validated by the dispatcher, once, for every backend.

    Example:
        >>> extractor = BatchExtractor("<TRANSLATION>", "</TRANSLATION>")
        >>> extractor.extract('<think>hmm</think><TRANSLATION>["Bonjour"]</TRANSLATION>')
        ['Bonjour']
    """

    _FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")

    def __init__(self, tag_in: str, tag_out: str):
        """
        Initialize the extractor with custom tags.

        Args:
            tag_in: Opening tag (e.g., "<TRANSLATION>")
            tag_out: Closing tag (e.g., "</TRANSLATION>")
        """
        self._tag_in = tag_in
        self._tag_out = tag_out
        self._compiled_regex = re.compile(
            rf"{re.escape(self._tag_in)}(.*?){re.escape(self._tag_out)}",
            re.DOTALL
        )

    def extract(self, response: Any) -> Optional[List[str]]:
        """
        Extract the translated batch from a response.

        Args:
            response: Raw LLM response text (or an already-decoded JSON value)

        Returns:
            List of translated strings, or None if the response is malformed
        """
        if isinstance(response, (list, dict)):
            return self._normalize(response)

        if not response or not isinstance(response, str):
            return None

        text = self._remove_think_blocks(response.strip())

        match = self._compiled_regex.search(text)
        if match:
            text = match.group(1)
        elif self._tag_in in text:
            # Opening tag only: the model was cut off or forgot the closing tag
            text = text.split(self._tag_in, 1)[1]

        text = self._FENCE.sub("", text.strip())

        decoded = self._decode_json(text)
        if decoded is None:
            return None
        return self._normalize(decoded)

    def _decode_json(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass

        # Chatter around the array: keep the outermost [...]
        start = text.find("[")
        end = text.rfind("]")
        if start == -1 or end <= start:
            logger.debug(f"No JSON array found in response: {text[:200]}")
            return None
        try:
            return json.loads(text[start:end + 1])
        except json.JSONDecodeError as e:
            logger.debug(f"Response is not valid JSON: {e}")
            return None

    @staticmethod
    def _normalize(decoded: Any) -> Optional[List[str]]:
        if isinstance(decoded, dict):
            decoded = decoded.get("translations")
        if not isinstance(decoded, list):
            return None
        if not all(isinstance(item, str) for item in decoded):
            return None
        return decoded

    @staticmethod
    def _remove_think_blocks(response: str) -> str:
        """
        Remove all <think>...</think> blocks from response.

        These blocks contain the model's reasoning and may themselves hold
        JSON-looking drafts, so they must go before anything is parsed.
        """
        response = re.sub(r'<think>.*?</think>', '', response, flags=re.DOTALL | re.IGNORECASE)
        # Orphan closing tag (opening tag truncated): drop everything up to it
        response = re.sub(r'^.*?</think>\s*', '', response, flags=re.DOTALL | re.IGNORECASE)
        return response.strip()
