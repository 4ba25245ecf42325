"""
Core package aggregator for dynrec contracts (identities, descriptors, layouts, records, codec).

## Contracts (single source of truth)
- Polid — process-unique identities with an Equal/Different witness.
- Descriptors — named JSON codecs for field values, with list/pair/result/view combinators.
- Layouts — runtime record types; mutable until sealed.
- Records — values of a sealed layout, accessed through Field handles.
- Codec — record ↔ JSON tree; Serde/Hashing — JSON text and canonical hashes.

## Notes
- Zero‑IO policy: stdlib + pydantic only; no file/network IO.
- A field handle is checked against the record's layout identity on every access.
- Decoding returns Ok/Err; programmer errors raise (see errors).

## Downstream usage
- dynrec.io — reads/writes JSON Lines batches of records and materializes them as Polars frames.

## Examples
```python
from dynrec.core import descriptors as d
from dynrec.core import declare, of_json, to_json

person = declare("person")
name = person.field("name", d.STRING)
age = person.field("age", d.INT)
person.seal()

r = person.make()
r.set(name, "Ada")
r.set(age, 30)
to_json(r)  # {'name': 'Ada', 'age': 30}
of_json(person, {"name": "Ada"}).unwrap().get(name)  # 'Ada'
```
"""

from __future__ import annotations

from . import descriptors
from .codec import of_json, of_json_exn, to_json
from .descriptors import TypeDescriptor
from .errors import (
    DecodeFailure,
    DuplicateFieldDeclaration,
    LayoutMismatch,
    RecordError,
    SealedLayoutMutation,
    UndefinedFieldAccess,
    UndeserializableOpaqueValue,
    UnsealedLayoutAllocation,
)
from .layout import Field, Layout, declare, equal, field, is_equal, layout_id, layout_name, seal
from .polid import Different, Equal, Polid
from .record import Record, get, get_layout, make, set
from .result import Err, Ok, Result
from .safe import DeclaredLayout, declare_safe

__all__ = [
    "descriptors",
    "TypeDescriptor",
    "Polid",
    "Equal",
    "Different",
    "Ok",
    "Err",
    "Result",
    "Layout",
    "Field",
    "Record",
    "DeclaredLayout",
    "declare",
    "declare_safe",
    "field",
    "seal",
    "make",
    "get",
    "set",
    "get_layout",
    "layout_name",
    "layout_id",
    "equal",
    "is_equal",
    "to_json",
    "of_json",
    "of_json_exn",
    "RecordError",
    "SealedLayoutMutation",
    "UnsealedLayoutAllocation",
    "DuplicateFieldDeclaration",
    "LayoutMismatch",
    "UndefinedFieldAccess",
    "DecodeFailure",
    "UndeserializableOpaqueValue",
]
