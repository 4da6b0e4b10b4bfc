"""
Backend-specific exceptions.

This module defines the exceptions used by translation backends and the
provider chain that falls back across them.
"""
from typing import List, Optional


class BackendFailure(Exception):
    """
    Raised when one backend could not produce a usable batch.

    Covers transport errors, timeouts, non-2xx responses, missing
    credentials and malformed or length-mismatched payloads. The provider
    chain absorbs it and moves on to the next backend.

    Attributes:
        provider: Display name of the backend that failed
        message: What went wrong
    """
    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class AllProvidersExhausted(Exception):
    """
    Raised when every backend of the provider chain failed.

    Attributes:
        attempts: One BackendFailure per backend tried, in chain order
    """
    def __init__(self, attempts: List[BackendFailure]):
        self.attempts = list(attempts)
        super().__init__(
            f"All translation providers failed. Last error: {self.last_error or 'no providers configured'}"
        )

    @property
    def last_error(self) -> Optional[str]:
        """Message of the last backend tried, for diagnostics."""
        if not self.attempts:
            return None
        return str(self.attempts[-1])
