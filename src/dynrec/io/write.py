"""
Atomic JSON Lines writer for record batches.

Overview
- Encodes each record with dynrec.core.codec.to_json, one JSON object per line.
- Writes to "<final>.tmp", fsyncs (per IoSettings.fsync), then os.replace to the final path.
- All records of a batch must share one layout (checked by identity).

Source of truth
- Record wire shape: dynrec.core.codec (flat object of set fields, no envelope).
- Canonical key ordering: dynrec.core.hashing.json_dumps_canonical.
- IO-layer errors: dynrec.io.errors.IoWriteError.

Notes
- Single-writer semantics (no inter-process locking).
- The file carries no layout tag; readers must pass the layout to decode against.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from typing import Any

from dynrec.core.codec import to_json
from dynrec.core.errors import LayoutMismatch
from dynrec.core.hashing import json_dumps_canonical
from dynrec.core.layout import Layout
from dynrec.core.record import Record

from .config import IoSettings
from .errors import IoWriteError
from .fs import fsync_file, makedirs, open_write, remove_if_exists, rename_atomic, tmp_path_for

logger = logging.getLogger(__name__)


def _encode_line(record: Record[Any], canonical: bool) -> str:
    data = to_json(record)
    if canonical:
        return json_dumps_canonical(data)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def write_records(
    path: str | os.PathLike[str],
    records: Iterable[Record[Any]],
    settings: IoSettings | None = None,
    *,
    layout: Layout[Any] | None = None,
) -> dict[str, Any]:
    """
    Write records to a JSON Lines file with atomic semantics.

    Args:
        path: Destination path; relative paths resolve against IoSettings.root_dir.
        records (Iterable[Record]): Records to write, all of the same layout.
        settings (IoSettings | None): IO configuration (defaults when None).
        layout (Layout | None): Expected layout. When None, the layout of the
            first record is used.

    Returns:
        dict[str, Any]: Summary with keys:
            - path (str): Final path written.
            - layout (str | None): Layout name (None for an empty batch without ``layout``).
            - rows (int): Records written.
            - bytes (int): Size of the written file.

    Raises:
        LayoutMismatch: A record belongs to a different layout (nothing is written).
        IoWriteError: The records cannot be encoded with IoSettings.encoding, or the
            tmp write/fsync/atomic rename failed (nothing is written).
    """
    settings = settings or IoSettings()
    final_path = settings.resolve(path)
    tmp_path = tmp_path_for(final_path)

    lines: list[str] = []
    for record in records:
        if layout is None:
            layout = record.layout
        elif record.layout.id != layout.id:
            raise LayoutMismatch(
                f"record of layout {record.layout.name!r} in a batch of {layout.name!r} records"
            )
        lines.append(_encode_line(record, settings.canonical))

    text = "".join(line + "\n" for line in lines)
    try:
        payload = text.encode(settings.encoding)
    except UnicodeEncodeError as exc:
        raise IoWriteError(
            f"cannot encode records for {final_path} as {settings.encoding!r}: {exc.reason}"
        ) from exc

    try:
        makedirs(final_path.parent, exist_ok=True)
        with open_write(tmp_path) as fh:
            fh.write(payload)
            if settings.fsync:
                fsync_file(fh)
        rename_atomic(tmp_path, final_path)
    except OSError as exc:
        remove_if_exists(tmp_path)
        raise IoWriteError(f"failed to write {final_path}: {exc}") from exc

    logger.info(
        "wrote %d record(s) of layout %r to %s",
        len(lines),
        layout.name if layout is not None else None,
        final_path,
    )
    return {
        "path": str(final_path),
        "layout": layout.name if layout is not None else None,
        "rows": len(lines),
        "bytes": len(payload),
    }
