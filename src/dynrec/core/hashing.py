"""
Canonical JSON serialization and hashing helpers for records.

Provides a single canonical JSON policy and SHA-256 helpers so that record
fingerprints are stable across runs and independent of field declaration order.
This module is zero-IO and uses only the Python standard library.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - Hashing is performed over the UTF-8 encoded canonical JSON string.
    - Unset fields do not contribute to a record hash (they are not encoded).
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from .codec import to_json
from .record import Record

__all__ = [
    "json_dumps_canonical",
    "hash_json",
    "hash_record",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize a JSON tree to the canonical text used for record hashes.

    Also the line format of dynrec.io.write_records when IoSettings.canonical is
    set, so a canonical batch file holds exactly the text each record hash covers.
    Non-ASCII characters stay literal; the input must already be a JSON tree
    (see dynrec.core.codec.to_json).
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def hash_json(data: Any) -> str:
    """
    SHA-256 hex digest of the UTF-8 canonical text of a JSON tree.

    Key order never matters, so two records whose fields were declared in a
    different order on different layouts hash alike when their set values agree.
    """
    return hashlib.sha256(json_dumps_canonical(data).encode("utf-8")).hexdigest()


def hash_record(record: Record[Any]) -> str:
    """
    Fingerprint the set fields of a record.

    Unset fields are absent from the encoding and leave the hash unchanged; the
    layout identity is not part of it either.

    Examples:
        >>> from dynrec.core import descriptors as d
        >>> from dynrec.core.hashing import hash_record
        >>> from dynrec.core.util import declare1
        >>> layout, name = declare1(name="tag", f1_name="label", f1_type=d.STRING)
        >>> a, b = layout.make(), layout.make()
        >>> a.set(name, "x"); b.set(name, "x")
        >>> hash_record(a) == hash_record(b)
        True
    """
    return hash_json(to_json(record))
