"""
Core exception types raised by layouts, records, and type descriptors.

Provides typed exceptions for core-domain failures:
- SealedLayoutMutation when a sealed layout is modified (field or seal).
- UnsealedLayoutAllocation when a record is allocated before sealing.
- DuplicateFieldDeclaration when a field name is declared twice on a layout.
- LayoutMismatch when a field handle is used on a record of another layout.
- UndefinedFieldAccess when reading a field that was never set.
- DecodeFailure when a decode result is unwrapped and holds an error.
- UndeserializableOpaqueValue when decoding through an encode-only descriptor.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Programmer errors (sealed mutation, unsealed allocation, duplicate field,
      layout mismatch, opaque decode) signal a broken calling contract and are
      not meant to be caught by ordinary control flow.
    - UndefinedFieldAccess and DecodeFailure are recoverable; decode paths
      normally return ``Err(message)`` and only raise DecodeFailure from the
      explicit ``*_exn`` / ``unwrap`` helpers.

Examples:
    Treat an unset field as absence.

    >>> from dynrec.core.errors import UndefinedFieldAccess
    >>> def lookup(get):
    ...     try:
    ...         return get()
    ...     except UndefinedFieldAccess:
    ...         return None
    >>> def missing():
    ...     raise UndefinedFieldAccess("age")
    >>> lookup(missing) is None
    True
"""

from __future__ import annotations

__all__ = [
    "RecordError",
    "SealedLayoutMutation",
    "UnsealedLayoutAllocation",
    "DuplicateFieldDeclaration",
    "LayoutMismatch",
    "UndefinedFieldAccess",
    "DecodeFailure",
    "UndeserializableOpaqueValue",
]


class RecordError(Exception):
    """Base class for all dynrec core errors."""


class SealedLayoutMutation(RecordError, RuntimeError):
    """A field was declared on, or seal was called again for, a sealed layout."""


class UnsealedLayoutAllocation(RecordError, RuntimeError):
    """A record was allocated against a layout that has not been sealed."""


class DuplicateFieldDeclaration(RecordError, ValueError):
    """A field name was declared twice on the same layout."""


class LayoutMismatch(RecordError, TypeError):
    """A field handle was used with a record of a different layout."""


class UndefinedFieldAccess(RecordError, LookupError):
    """A field was read on a record where it was never set."""


class DecodeFailure(RecordError, ValueError):
    """JSON shape or value mismatch, raised when an error result is unwrapped."""


class UndeserializableOpaqueValue(RecordError, TypeError):
    """Decode attempted through a descriptor that only supports encoding."""
