"""
Polars materialization of record batches.

Purpose
- records_to_frame(): one row per record, one column per declared field (declaration
  order); unset fields are null.
- frame_to_records(): the reverse; null cells leave fields unset.

Column representation
- Scalar fields (see dynrec.core.descriptors.is_scalar) keep their JSON encoding in a
  typed column: string → String, integer → Int64, number → Float64, bool → Boolean.
- Every other field (lists, pairs, results, objects) is stored as compact JSON text in a
  String column and parsed back with json.loads. Polars list/struct inference would
  otherwise coerce mixed-type arrays and union object keys across rows.

Notes
- A ``unit`` field encodes to null and therefore reads back as unset.
- Frames built by hand must follow the same representation for non-scalar fields.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, TypeVar

import polars as pl

from dynrec.core.codec import of_json, to_json
from dynrec.core.descriptors import is_scalar
from dynrec.core.errors import LayoutMismatch
from dynrec.core.layout import Layout
from dynrec.core.record import Record
from dynrec.core.result import Err

from .errors import IoDecodeError

S = TypeVar("S")

_FRAME_SOURCE = "<frame>"


def _json_columns(layout: Layout[Any]) -> frozenset[str]:
    """Names of the fields whose cells are carried as JSON text."""
    return frozenset(f.name for f in layout.fields if not is_scalar(f.ftype))


def _dump_cell(value: Any) -> str | None:
    if value is None:
        return None
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def records_to_frame(layout: Layout[Any], records: Iterable[Record[Any]]) -> pl.DataFrame:
    """
    Build a DataFrame from records of one layout.

    Args:
        layout (Layout): Layout providing the column set and order.
        records (Iterable[Record]): Records of ``layout``.

    Returns:
        pl.DataFrame: Columns named after the declared fields.

    Raises:
        LayoutMismatch: A record belongs to another layout.
    """
    json_columns = _json_columns(layout)
    columns: dict[str, list[Any]] = {f.name: [] for f in layout.fields}
    for record in records:
        if record.layout.id != layout.id:
            raise LayoutMismatch(
                f"record of layout {record.layout.name!r} is not a {layout.name!r} record"
            )
        encoded = to_json(record)
        for name, cells in columns.items():
            cell = encoded.get(name)
            cells.append(_dump_cell(cell) if name in json_columns else cell)

    series = [
        pl.Series(name, cells, dtype=pl.String) if name in json_columns else pl.Series(name, cells)
        for name, cells in columns.items()
    ]
    return pl.DataFrame(series)


def frame_to_records(layout: Layout[S], df: pl.DataFrame, *, strict: bool = True) -> list[Record[S]]:
    """
    Decode each DataFrame row into a record of ``layout``.

    Args:
        layout (Layout[S]): Sealed layout to decode against.
        df (pl.DataFrame): Frame whose columns are field names.
        strict (bool): Reject columns that are not declared fields.

    Raises:
        IoDecodeError: Unknown columns (when strict), a JSON text cell that does not
            parse, or a row that fails to decode; ``line`` is the 1-based row number.
    """
    unknown = [c for c in df.columns if layout.field_named(c) is None]
    if unknown and strict:
        raise IoDecodeError(
            _FRAME_SOURCE, None, f"unknown columns for layout {layout.name!r}: {unknown!r}"
        )

    json_columns = _json_columns(layout)
    out: list[Record[S]] = []
    for rowno, row in enumerate(df.iter_rows(named=True), start=1):
        data: dict[str, Any] = {}
        for name, value in row.items():
            if value is None or name in unknown:
                continue
            if name in json_columns and isinstance(value, str):
                try:
                    value = json.loads(value)
                except json.JSONDecodeError as exc:
                    raise IoDecodeError(
                        _FRAME_SOURCE, rowno, f"{name}: invalid JSON: {exc.msg}"
                    ) from exc
            data[name] = value
        res = of_json(layout, data)
        if isinstance(res, Err):
            raise IoDecodeError(_FRAME_SOURCE, rowno, res.error)
        out.append(res.value)
    return out
