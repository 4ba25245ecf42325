"""
dynrec.io — File and frame layer for record batches.

## Responsibilities
- Store batches of records of one layout as JSON Lines with atomic tmp→ready renames.
- Decode stored batches against a caller-supplied layout, reporting the failing line.
- Materialize batches as Polars DataFrames and back.
- Keep dynrec.core as the single source of truth for layouts, descriptors, and the wire shape.

## Public API
- IoSettings — Configuration (env > TOML > defaults).
- write_records / read_records / iter_records — JSON Lines batches.
- records_to_frame / frame_to_records — Polars materialization.

## Import DAG discipline
- Depends only on stdlib, polars, and dynrec.core.*.

## Examples
```python
from dynrec.core import descriptors as d
from dynrec.core.util import declare2
from dynrec.io import IoSettings, read_records, write_records

person, name, age = declare2(
    name="person", f1_name="name", f1_type=d.STRING, f2_name="age", f2_type=d.INT
)
r = person.make()
r.set(name, "Ada")
settings = IoSettings(root_dir="out")  # doctest: +SKIP
write_records("people.jsonl", [r], settings)  # doctest: +SKIP
read_records("people.jsonl", person, settings)  # doctest: +SKIP
```
"""

from __future__ import annotations

from .config import IoSettings
from .errors import IoConfigError, IoDecodeError, IoError, IoWriteError
from .frame import frame_to_records, records_to_frame
from .read import iter_records, read_records
from .write import write_records

__all__ = [
    "IoSettings",
    "IoError",
    "IoConfigError",
    "IoWriteError",
    "IoDecodeError",
    "write_records",
    "read_records",
    "iter_records",
    "records_to_frame",
    "frame_to_records",
]
