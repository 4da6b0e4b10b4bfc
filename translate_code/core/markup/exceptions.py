"""
Custom exceptions for the markup pipeline.

This module defines specific exception types for extraction and injection
failures, enabling better error handling and debugging.
"""


class MarkupTranslationError(Exception):
    """Base exception for all markup extraction/injection errors."""
    pass


class LengthMismatchError(MarkupTranslationError):
    """Raised when the number of translations differs from the number of units.

    Attributes:
        message: Error description
        expected_count: Number of extraction units
        actual_count: Number of translated strings received
    """
    def __init__(self, message: str, expected_count: int = None, actual_count: int = None):
        super().__init__(message)
        self.expected_count = expected_count
        self.actual_count = actual_count


class InjectionError(MarkupTranslationError):
    """Raised when the markup being injected no longer walks like the extracted one.

    Attributes:
        ordinal_index: Ordinal of the first unit that did not line up
        expected_path: Location path recorded at extraction
        actual_path: Location path found while walking the markup
    """
    def __init__(
        self,
        message: str,
        ordinal_index: int = None,
        expected_path: str = None,
        actual_path: str = None
    ):
        super().__init__(message)
        self.ordinal_index = ordinal_index
        self.expected_path = expected_path
        self.actual_path = actual_path


class ParseDegraded(UserWarning):
    """Issued when markup could not be parsed and a best-effort tree was used instead.

    Never fatal: extraction carries on with whatever the parser produced.
    """
    pass
