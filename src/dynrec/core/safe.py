"""
Layout declarations bundled with their bound operations.

``declare_safe(name)`` creates a layout together with a fresh marker class ``s``
and returns a DeclaredLayout whose methods act on that layout implicitly. Each
call mints a new marker, so ``s`` tells declarations apart at runtime even under
the same name. The marker is not tied to the layout's type parameter; the
identity check that keeps fields and records apart is the layout id (see
dynrec.core.record).

Examples:
    >>> from dynrec.core import descriptors as d
    >>> from dynrec.core.safe import declare_safe
    >>> Point = declare_safe("point")
    >>> x = Point.field("x", d.INT)
    >>> Point.seal()
    >>> p = Point.make()
    >>> p.set(x, 3)
    >>> p.get(x), Point.layout_name
    (3, 'point')
"""

from __future__ import annotations

from typing import Any, TypeVar

from .descriptors import TypeDescriptor
from .layout import Field, Layout
from .polid import Polid
from .record import Record

__all__ = [
    "DeclaredLayout",
    "declare_safe",
]

V = TypeVar("V")


class DeclaredLayout:
    """
    A layout together with its marker class and bound operations.

    Attributes:
        s (type): Marker class minted for this declaration; unique per call.
        layout (Layout): The underlying layout.
    """

    def __init__(self, name: str) -> None:
        self.s: type = type(f"{name}_layout", (), {"__module__": __name__})
        self.layout: Layout[Any] = Layout(name)

    @property
    def layout_name(self) -> str:
        return self.layout.name

    @property
    def layout_id(self) -> Polid[Any]:
        return self.layout.id

    def field(self, name: str, ftype: TypeDescriptor[V]) -> Field[V]:
        """Add a field to the layout and return its handle."""
        return self.layout.field(name, ftype)

    def seal(self) -> None:
        """Make the layout unmodifiable."""
        self.layout.seal()

    def make(self) -> Record[Any]:
        """Allocate a record of the layout, with all fields initially unset."""
        return self.layout.make()

    def __repr__(self) -> str:
        return f"DeclaredLayout({self.layout!r})"


def declare_safe(name: str) -> DeclaredLayout:
    """Create a new layout with the given name and a fresh marker class."""
    return DeclaredLayout(name)
