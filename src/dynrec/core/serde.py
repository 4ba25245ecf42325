"""
JSON text serialization/deserialization for records.

Wraps the stdlib `json` module (the JSON text collaborator) and re-exports
`json_dumps_canonical` from `dynrec.core.hashing` to keep a single canonical JSON
policy across the codebase. This module is zero-IO.

Notes:
    - ``record_to_string`` prints in declaration order unless ``canonical=True``.
    - ``record_of_string`` returns ``Err`` for malformed JSON text as well as for
      decode failures; it never raises for bad input.
    - ``format_record`` is deprecated and kept for callers that print records to
      a stream; it proxies to the JSON printer.
"""

from __future__ import annotations

import json
import warnings
from typing import Any, TextIO, TypeVar

from .codec import of_json, to_json

# Re-export canonical dumps to keep a single canonicalization policy.
from .hashing import json_dumps_canonical  # noqa: F401
from .layout import Layout
from .record import Record
from .result import Err, Result

__all__ = [
    "json_loads",
    "json_dumps_canonical",
    "record_to_string",
    "record_of_string",
    "format_record",
]

S = TypeVar("S")


def json_loads(s: str) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Args:
        s (str): JSON string to parse.

    Returns:
        Any: Decoded Python object (dict, list, str, int, float, bool, or None).
    """
    return json.loads(s)


def record_to_string(record: Record[Any], *, canonical: bool = False) -> str:
    """
    Print a record as compact JSON text.

    Args:
        record (Record): Record to print.
        canonical (bool): Sort keys (see ``json_dumps_canonical``) instead of
            keeping declaration order.
    """
    data = to_json(record)
    if canonical:
        return json_dumps_canonical(data)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def record_of_string(layout: Layout[S], s: str) -> Result[Record[S], str]:
    """
    Parse JSON text and decode it against a layout.

    Returns:
        Result: ``Ok(record)`` or ``Err(message)``; malformed text yields
        ``Err("invalid JSON: ...")``.
    """
    try:
        data = json_loads(s)
    except json.JSONDecodeError as exc:
        return Err(f"invalid JSON: {exc}")
    return of_json(layout, data)


def format_record(stream: TextIO, record: Record[Any]) -> None:
    """
    Print the JSON representation of a record to a text stream.

    Deprecated: use ``record_to_string`` (or ``json.dumps(to_json(record))``).
    """
    warnings.warn(
        "format_record is deprecated; use record_to_string instead",
        DeprecationWarning,
        stacklevel=2,
    )
    stream.write(json.dumps(to_json(record)))
