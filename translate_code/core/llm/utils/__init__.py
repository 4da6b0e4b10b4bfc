"""Response extraction helpers shared by all providers."""

from .extraction import BatchExtractor

__all__ = ['BatchExtractor']
