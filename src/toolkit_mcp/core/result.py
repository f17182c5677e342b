"""Explicit success/failure container for fallible operations.

Every provider call and tool handler returns a ``Result`` instead of raising
for expected failures. Callers must check the variant before reading the
payload:

    result = await provider.search("python", 5)
    if isinstance(result, Ok):
        use(result.value)
    else:
        log(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")

__all__ = [
    "Ok",
    "Err",
    "Result",
    "ok",
    "fail",
    "is_ok",
    "is_err",
    "unwrap_or",
    "map_result",
]


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying an error (a human-readable message by convention)."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    """Construct a success."""
    return Ok(value)


def fail(error: E) -> Err[E]:
    """Construct a failure."""
    return Err(error)


def is_ok(result: Result) -> bool:
    return isinstance(result, Ok)


def is_err(result: Result) -> bool:
    return isinstance(result, Err)


def unwrap_or(result: Result[T, E], default: T) -> T:
    """Return the success value, or ``default`` for a failure."""
    if isinstance(result, Ok):
        return result.value
    return default


def map_result(result: Result[T, E], fn: Callable[[T], U]) -> Result[U, E]:
    """Apply ``fn`` to a success value; failures pass through unchanged."""
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result
