"""
Record values: per-layout stores of field values addressed by Field handles.

A Record belongs to exactly one sealed layout. Each declared field is either
unset (the initial state) or holds one value. Values are read and written only
through Field handles, never by bare name.

Notes:
    - Every get/set compares the handle's layout identity with the record's and
      raises LayoutMismatch when they differ.
    - Records are not synchronized; concurrent mutation needs external locking.

Examples:
    >>> from dynrec.core import descriptors as d
    >>> from dynrec.core.layout import declare
    >>> from dynrec.core.record import make
    >>> person = declare("person")
    >>> name = person.field("name", d.STRING)
    >>> person.seal()
    >>> r = make(person)
    >>> r.is_set(name)
    False
    >>> r.set(name, "Ada")
    >>> r.get(name)
    'Ada'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .errors import LayoutMismatch, UndefinedFieldAccess, UnsealedLayoutAllocation

if TYPE_CHECKING:
    from .layout import Field, Layout

__all__ = [
    "Record",
    "make",
    "get",
    "set",
    "get_layout",
]

S = TypeVar("S")
V = TypeVar("V")
D = TypeVar("D")


class Record(Generic[S]):
    """
    A value of a sealed layout.

    Attributes:
        layout (Layout[S]): Shared, read-only reference to the layout.

    Raises:
        UnsealedLayoutAllocation: On construction against an unsealed layout.
    """

    __slots__ = ("layout", "_content")

    def __init__(self, layout: Layout[S]) -> None:
        if not layout.sealed:
            raise UnsealedLayoutAllocation(
                f"cannot allocate a record of layout {layout.name!r}: layout is not sealed"
            )
        self.layout = layout
        self._content: dict[str, Any] = {}

    def _check(self, field: Field[Any]) -> None:
        if field.layout_id != self.layout.id:
            raise LayoutMismatch(
                f"field {field.name!r} does not belong to layout {self.layout.name!r}"
            )

    def get(self, field: Field[V]) -> V:
        """
        Get the value of a field.

        Raises:
            UndefinedFieldAccess: If the field was never set on this record.
            LayoutMismatch: If the field belongs to another layout.
        """
        self._check(field)
        try:
            return self._content[field.name]
        except KeyError:
            raise UndefinedFieldAccess(
                f"field {field.name!r} is not set on record of layout {self.layout.name!r}"
            ) from None

    def get_or(self, field: Field[V], default: D) -> V | D:
        """Get the value of a field, or ``default`` when unset."""
        self._check(field)
        return self._content.get(field.name, default)

    def set(self, field: Field[V], value: V) -> None:
        """Set the value of a field, overwriting any previous value."""
        self._check(field)
        self._content[field.name] = value

    def unset(self, field: Field[Any]) -> None:
        """Return a field to the unset state (no-op if already unset)."""
        self._check(field)
        self._content.pop(field.name, None)

    def is_set(self, field: Field[Any]) -> bool:
        self._check(field)
        return field.name in self._content

    def set_fields(self) -> list[Field[Any]]:
        """Fields currently set, in declaration order."""
        return [f for f in self.layout.fields if f.name in self._content]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.layout.id == other.layout.id and self._content == other._content

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{f.name}={self._content[f.name]!r}" for f in self.set_fields())
        return f"Record[{self.layout.name}]({body})"


def make(layout: Layout[S]) -> Record[S]:
    """Allocate a record of a given layout, with all fields initially unset."""
    return Record(layout)


def get(record: Record[S], field: Field[V]) -> V:
    """Get the value of a field. See ``Record.get``."""
    return record.get(field)


def set(record: Record[S], field: Field[V], value: V) -> None:  # noqa: A001
    """Set the value of a field. See ``Record.set``."""
    record.set(field, value)


def get_layout(record: Record[S]) -> Layout[S]:
    """Get the layout of a record."""
    return record.layout
