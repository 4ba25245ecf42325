"""
JSON codec engine: whole-record conversion to and from the JSON tree.

Wire shape
- A record encodes to a flat JSON object with one key per *set* field, in
  declaration order; unset fields are omitted (never emitted as null).
- No envelope and no layout tag: decoding is parameterized by the layout.

Decoding rules
- The input must be a JSON object.
- For each declared field whose name is a key of the object, the value is
  decoded with the field's descriptor; the first failure aborts decoding with
  ``Err("<field>: <message>")``.
- Absent keys leave the field unset; required-ness is enforced downstream by
  ``Record.get`` raising UndefinedFieldAccess.
- Unknown keys are ignored (logged at DEBUG).

Examples:
    >>> from dynrec.core import descriptors as d
    >>> from dynrec.core.codec import of_json, to_json
    >>> from dynrec.core.layout import declare
    >>> person = declare("person")
    >>> name = person.field("name", d.STRING)
    >>> age = person.field("age", d.INT)
    >>> person.seal()
    >>> r = person.make()
    >>> r.set(name, "Ada"); r.set(age, 30)
    >>> to_json(r)
    {'name': 'Ada', 'age': 30}
    >>> of_json(person, {"name": 42})
    Err(error='name: expected a JSON string, got integer')
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from .descriptors import decode_value, encode_value, json_kind
from .layout import Layout
from .record import Record
from .result import Err, Ok, Result
from .typing import Json, JsonDict

__all__ = [
    "to_json",
    "of_json",
    "of_json_exn",
]

logger = logging.getLogger(__name__)

S = TypeVar("S")


def to_json(record: Record[Any]) -> JsonDict:
    """
    Convert a record to a JSON object.

    Args:
        record (Record): Record to encode.

    Returns:
        JsonDict: ``{field_name: encoded_value}`` for set fields, in declaration order.
    """
    out: JsonDict = {}
    for f in record.set_fields():
        out[f.name] = encode_value(f.ftype, record.get(f))
    return out


def of_json(layout: Layout[S], data: Json) -> Result[Record[S], str]:
    """
    Convert a JSON value into a record of the given layout.

    Args:
        layout (Layout[S]): Sealed layout to decode against.
        data (Json): JSON tree, typically from ``json.loads``.

    Returns:
        Result: ``Ok(record)``, or ``Err(message)`` naming the offending field.

    Raises:
        UnsealedLayoutAllocation: If the layout is not sealed.
        UndeserializableOpaqueValue: If a present field uses an encode-only descriptor.
    """
    record = layout.make()
    if not isinstance(data, dict):
        return Err(f"{layout.name}: expected a JSON object, got {json_kind(data)}")
    for f in layout.fields:
        if f.name not in data:
            continue
        res = decode_value(f.ftype, data[f.name])
        if isinstance(res, Err):
            return Err(f"{f.name}: {res.error}")
        record.set(f, res.value)
    if logger.isEnabledFor(logging.DEBUG):
        unknown = [k for k in data if layout.field_named(k) is None]
        if unknown:
            logger.debug("layout %r: ignoring unknown keys %r", layout.name, unknown)
    return Ok(record)


def of_json_exn(layout: Layout[S], data: Json) -> Record[S]:
    """
    Like ``of_json`` but raise on failure.

    Raises:
        DecodeFailure: With the same message ``of_json`` would return.
    """
    return of_json(layout, data).unwrap()
