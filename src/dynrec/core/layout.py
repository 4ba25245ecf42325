"""
Layouts (runtime record types) and the field handles declared on them.

A Layout is a named schema that accumulates field declarations until it is
sealed. Sealing is irreversible: afterwards the field sequence is frozen and the
layout can allocate records (see dynrec.core.record).

State machine:
    Unsealed --field--> Unsealed
    Unsealed --seal---> Sealed
    Sealed   --field/seal--> SealedLayoutMutation

Responsibilities
- Give every layout a fresh Polid identity, never shared with another layout
  (even one with the same name).
- Hand out Field handles that remember the identity of their declaring layout;
  records check that identity on every get/set.
- Reject duplicate field names at declaration so lookup by name is unambiguous.

Notes:
    - Layouts offer no internal locking; concurrent declaration on one layout
      must be serialized by the caller.
    - Layouts are usually declared once at import time and shared read-only.

Examples:
    >>> from dynrec.core import descriptors as d
    >>> from dynrec.core.layout import declare
    >>> person = declare("person")
    >>> name = person.field("name", d.STRING)
    >>> age = person.field("age", d.INT)
    >>> person.seal()
    >>> [f.name for f in person.fields]
    ['name', 'age']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dc_field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from . import polid
from .descriptors import TypeDescriptor
from .errors import DuplicateFieldDeclaration, SealedLayoutMutation
from .polid import Different, Equal, Polid

if TYPE_CHECKING:
    from .record import Record

__all__ = [
    "Layout",
    "Field",
    "declare",
    "field",
    "seal",
    "layout_name",
    "layout_id",
    "equal",
    "is_equal",
]

logger = logging.getLogger(__name__)

V = TypeVar("V")
S = TypeVar("S")


@dataclass(frozen=True)
class Field(Generic[V]):
    """
    Handle for one field of type V within one layout.

    Attributes:
        name (str): Field name, also its JSON key.
        ftype (TypeDescriptor[V]): Descriptor used to encode/decode the value.
        layout_id (Polid): Identity of the declaring layout.
        index (int): Declaration position within the layout.

    Notes:
        Obtain handles from ``Layout.field``; a handle is only valid against
        records of its declaring layout.
    """

    name: str
    ftype: TypeDescriptor[V]
    layout_id: Polid[Any] = dc_field(repr=False)
    index: int = 0


class Layout(Generic[S]):
    """
    Named, eventually immutable record type.

    Attributes:
        name (str): Name given at declaration.
        id (Polid[S]): Unique identity of this layout instance.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.id: Polid[S] = polid.fresh()
        self._fields: list[Field[Any]] = []
        self._by_name: dict[str, Field[Any]] = {}
        self._sealed = False
        logger.debug("declared layout %r (id=%d)", name, self.id.to_int())

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def fields(self) -> tuple[Field[Any], ...]:
        """Declared fields, in declaration order."""
        return tuple(self._fields)

    def field_named(self, name: str) -> Field[Any] | None:
        """Return the field declared under ``name``, or None."""
        return self._by_name.get(name)

    def field(self, name: str, ftype: TypeDescriptor[V]) -> Field[V]:
        """
        Add a field to this layout and return its handle.

        Raises:
            SealedLayoutMutation: If the layout is sealed.
            DuplicateFieldDeclaration: If ``name`` is already declared.
        """
        if self._sealed:
            raise SealedLayoutMutation(f"cannot add field {name!r}: layout {self.name!r} is sealed")
        if name in self._by_name:
            raise DuplicateFieldDeclaration(
                f"field {name!r} is already declared on layout {self.name!r}"
            )
        handle: Field[V] = Field(name=name, ftype=ftype, layout_id=self.id, index=len(self._fields))
        self._fields.append(handle)
        self._by_name[name] = handle
        return handle

    def seal(self) -> None:
        """
        Make the layout unmodifiable; required before allocating records.

        Raises:
            SealedLayoutMutation: If the layout is already sealed.
        """
        if self._sealed:
            raise SealedLayoutMutation(f"layout {self.name!r} is already sealed")
        self._sealed = True
        logger.debug(
            "sealed layout %r (id=%d, fields=%d)", self.name, self.id.to_int(), len(self._fields)
        )

    def make(self) -> Record[S]:
        """Allocate a record of this layout with every field unset."""
        from .record import Record

        return Record(self)

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "unsealed"
        return f"Layout({self.name!r}, id={self.id.to_int()}, fields={len(self._fields)}, {state})"


def declare(name: str) -> Layout[Any]:
    """Create a new, empty, unsealed layout with a fresh identity."""
    return Layout(name)


def field(layout: Layout[S], name: str, ftype: TypeDescriptor[V]) -> Field[V]:
    """Add a field to a layout. See ``Layout.field``."""
    return layout.field(name, ftype)


def seal(layout: Layout[Any]) -> None:
    """Seal a layout. See ``Layout.seal``."""
    layout.seal()


def layout_name(layout: Layout[Any]) -> str:
    """Get the name that was given to a layout."""
    return layout.name


def layout_id(layout: Layout[S]) -> Polid[S]:
    """Get the unique identifier given to a layout."""
    return layout.id


def equal(a: Layout[Any], b: Layout[Any]) -> Equal[Any, Any] | Different[Any, Any]:
    """Compare two layouts by identity; ``Equal`` permits casting between them."""
    return polid.equal(a.id, b.id)


def is_equal(a: Layout[Any], b: Layout[Any]) -> bool:
    """``equal`` projected to a plain bool."""
    return polid.is_equal(a.id, b.id)
