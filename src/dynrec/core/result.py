"""
Two-variant result values returned by every decode path.

``Ok(value)`` carries a success, ``Err(error)`` a failure (a message string on
decode paths). Results are also ordinary values: ``descriptors.result_of``
builds a JSON codec for them.

Examples:
    >>> from dynrec.core.result import Ok, Err
    >>> Ok(1).is_ok(), Err("bad").is_ok()
    (True, False)
    >>> Ok(2).map(lambda x: x * 10)
    Ok(value=20)
    >>> Err("bad").map(lambda x: x * 10)
    Err(error='bad')
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from .errors import DecodeFailure

__all__ = [
    "Ok",
    "Err",
    "Result",
]

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result."""

    value: T

    def is_ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))

    def bind(self, fn: Callable[[T], Result[U, Any]]) -> Result[U, Any]:
        return fn(self.value)

    def map_error(self, fn: Callable[[Any], Any]) -> Ok[T]:
        return self

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result."""

    error: E

    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def bind(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_error(self, fn: Callable[[E], U]) -> Err[U]:
        return Err(fn(self.error))

    def unwrap(self) -> Any:
        """
        Raise the carried error.

        Raises:
            DecodeFailure: Always; the message is ``str(self.error)``.
        """
        raise DecodeFailure(str(self.error))


Result = Union[Ok[T], Err[E]]
