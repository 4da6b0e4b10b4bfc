"""
Per-attempt outcome of a backend in the provider chain.

An attempt is either Ok (a validated batch) or Err (the BackendFailure that
made the chain move on), so the failover loop reads as a plain traversal
instead of nested exception handlers.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar('T')  # Success type
E = TypeVar('E')  # Error type


@dataclass
class Ok(Generic[T]):
    """Attempt that produced a usable value."""
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass
class Err(Generic[E]):
    """Attempt that failed; `error` says why."""
    error: E

    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        """Raises ValueError: there is no value to take."""
        raise ValueError(f"Called unwrap on Err: {self.error}")


Result = Union[Ok[T], Err[E]]
