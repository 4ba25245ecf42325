"""
Process-unique identifiers carrying a type parameter, with an equality witness.

A Polid[T] is an opaque token created only by ``fresh()``. Comparing two tokens
with ``equal`` yields ``Equal`` (the tokens are the same, so their type
parameters are the same and a value may be reinterpreted with ``Equal.cast``)
or ``Different`` (no cast is offered).

Notes:
    - Backed by a single module-level counter created at import time. Values are
      monotonic, start at 0, and are never reset or reused for the life of the
      process.
    - ``fresh`` is safe under concurrent use; the counter is the only shared
      mutable state in dynrec.core.

Examples:
    >>> from dynrec.core.polid import Equal, Different, fresh, equal, is_equal
    >>> a = fresh()
    >>> b = fresh()
    >>> isinstance(equal(a, a), Equal), isinstance(equal(a, b), Different)
    (True, True)
    >>> is_equal(a, b)
    False
    >>> a.to_int() < b.to_int()
    True
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

__all__ = [
    "Polid",
    "Equal",
    "Different",
    "PolidEquality",
    "fresh",
    "equal",
    "is_equal",
    "to_int",
]

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")

_counter = itertools.count()
_counter_lock = threading.Lock()
_FRESH = object()


class Polid(Generic[T]):
    """
    Opaque identifier associated with type parameter T.

    Instances compare and hash by their integer value. Construct them with
    ``fresh()``; the constructor is private to this module.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int, *, _token: object = None) -> None:
        if _token is not _FRESH:
            raise TypeError("Polid values are created with polid.fresh()")
        self._value = value

    def to_int(self) -> int:
        """Return the unique integer behind this identifier."""
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polid):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(("polid", self._value))

    def __repr__(self) -> str:
        return f"Polid({self._value})"


@dataclass(frozen=True)
class Equal(Generic[A, B]):
    """Witness that two identifiers are the same; A and B denote the same type."""

    def cast(self, value: A) -> B:
        """Reinterpret a value of the first type parameter as the second."""
        return cast(B, value)


@dataclass(frozen=True)
class Different(Generic[A, B]):
    """Witness that two identifiers differ; no cast is permitted."""


PolidEquality = Equal[Any, Any] | Different[Any, Any]


def fresh() -> Polid[Any]:
    """
    Make a new identifier, distinct from every identifier made before.

    Returns:
        Polid: A fresh token. Two calls never return equal tokens, whatever type
        parameter the caller annotates them with.
    """
    with _counter_lock:
        value = next(_counter)
    return Polid(value, _token=_FRESH)


def equal(a: Polid[A], b: Polid[B]) -> Equal[A, B] | Different[A, B]:
    """
    Compare two identifiers.

    Args:
        a (Polid[A]): First identifier.
        b (Polid[B]): Second identifier.

    Returns:
        Equal | Different: ``Equal()`` when both tokens come from the same
        ``fresh()`` call, ``Different()`` otherwise.
    """
    if a.to_int() == b.to_int():
        return Equal()
    return Different()


def is_equal(a: Polid[Any], b: Polid[Any]) -> bool:
    """``equal`` projected to a plain bool."""
    return isinstance(equal(a, b), Equal)


def to_int(ident: Polid[Any]) -> int:
    """Return the integer behind an identifier; unique per ``fresh()`` call."""
    return ident.to_int()
