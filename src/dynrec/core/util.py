"""
Shortcuts over the layout API.

- ``layout_type`` turns a layout into a type descriptor, so records can nest
  inside other records, lists, pairs, and results.
- ``declare0`` … ``declare4`` declare a layout, add 0–4 fields, seal it, and
  return the layout followed by its field handles.

Examples:
    >>> from dynrec.core import descriptors as d
    >>> from dynrec.core.util import declare2
    >>> person, name, age = declare2(
    ...     name="person", f1_name="name", f1_type=d.STRING, f2_name="age", f2_type=d.INT
    ... )
    >>> person.sealed
    True
"""

from __future__ import annotations

from typing import Any, TypeVar

from .codec import of_json, to_json
from .descriptors import TypeDescriptor, make
from .errors import LayoutMismatch
from .layout import Field, Layout, declare
from .record import Record
from .result import Result
from .typing import Json

__all__ = [
    "layout_type",
    "declare0",
    "declare1",
    "declare2",
    "declare3",
    "declare4",
]

S = TypeVar("S")
A1 = TypeVar("A1")
A2 = TypeVar("A2")
A3 = TypeVar("A3")
A4 = TypeVar("A4")


def layout_type(layout: Layout[S]) -> TypeDescriptor[Record[S]]:
    """
    Get the type descriptor of records of a layout.

    Encoding a record of any other layout raises LayoutMismatch.
    """

    def _encode(record: Record[S]) -> Json:
        if record.layout.id != layout.id:
            raise LayoutMismatch(
                f"record of layout {record.layout.name!r} is not a {layout.name!r} record"
            )
        return to_json(record)

    def _decode(data: Json) -> Result[Record[S], str]:
        return of_json(layout, data)

    return make(layout.name, _encode, _decode)


def declare0(*, name: str) -> Layout[Any]:
    """Build a sealed layout with no fields."""
    layout: Layout[Any] = declare(name)
    layout.seal()
    return layout


def declare1(
    *, name: str, f1_name: str, f1_type: TypeDescriptor[A1]
) -> tuple[Layout[Any], Field[A1]]:
    """Build a sealed layout with 1 field."""
    layout: Layout[Any] = declare(name)
    f1 = layout.field(f1_name, f1_type)
    layout.seal()
    return layout, f1


def declare2(
    *,
    name: str,
    f1_name: str,
    f1_type: TypeDescriptor[A1],
    f2_name: str,
    f2_type: TypeDescriptor[A2],
) -> tuple[Layout[Any], Field[A1], Field[A2]]:
    """Build a sealed layout with 2 fields."""
    layout: Layout[Any] = declare(name)
    f1 = layout.field(f1_name, f1_type)
    f2 = layout.field(f2_name, f2_type)
    layout.seal()
    return layout, f1, f2


def declare3(
    *,
    name: str,
    f1_name: str,
    f1_type: TypeDescriptor[A1],
    f2_name: str,
    f2_type: TypeDescriptor[A2],
    f3_name: str,
    f3_type: TypeDescriptor[A3],
) -> tuple[Layout[Any], Field[A1], Field[A2], Field[A3]]:
    """Build a sealed layout with 3 fields."""
    layout: Layout[Any] = declare(name)
    f1 = layout.field(f1_name, f1_type)
    f2 = layout.field(f2_name, f2_type)
    f3 = layout.field(f3_name, f3_type)
    layout.seal()
    return layout, f1, f2, f3


def declare4(
    *,
    name: str,
    f1_name: str,
    f1_type: TypeDescriptor[A1],
    f2_name: str,
    f2_type: TypeDescriptor[A2],
    f3_name: str,
    f3_type: TypeDescriptor[A3],
    f4_name: str,
    f4_type: TypeDescriptor[A4],
) -> tuple[Layout[Any], Field[A1], Field[A2], Field[A3], Field[A4]]:
    """Build a sealed layout with 4 fields."""
    layout: Layout[Any] = declare(name)
    f1 = layout.field(f1_name, f1_type)
    f2 = layout.field(f2_name, f2_type)
    f3 = layout.field(f3_name, f3_type)
    f4 = layout.field(f4_name, f4_type)
    layout.seal()
    return layout, f1, f2, f3, f4
