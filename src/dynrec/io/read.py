"""
JSON Lines reader for record batches.

Overview
- iter_records(): lazily decodes one record per line against a given layout.
- read_records(): collects iter_records() into a list.

Decoding semantics
- Each line is parsed with the stdlib json module and decoded with
  dynrec.core.codec.of_json; the first failing line raises IoDecodeError with
  the path and 1-based line number.
- Blank lines are skipped when IoSettings.skip_blank_lines is set (default).
- Missing keys leave fields unset and unknown keys are ignored, as in the core codec.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from typing import TypeVar

from dynrec.core.codec import of_json
from dynrec.core.layout import Layout
from dynrec.core.record import Record
from dynrec.core.result import Err

from .config import IoSettings
from .errors import IoDecodeError

logger = logging.getLogger(__name__)

S = TypeVar("S")


def iter_records(
    path: str | os.PathLike[str],
    layout: Layout[S],
    settings: IoSettings | None = None,
) -> Iterator[Record[S]]:
    """
    Lazily decode a JSON Lines file against a layout.

    Args:
        path: Source path; relative paths resolve against IoSettings.root_dir.
        layout (Layout[S]): Sealed layout to decode every line against.
        settings (IoSettings | None): IO configuration (defaults when None).

    Yields:
        Record[S]: One record per non-blank line.

    Raises:
        IoDecodeError: The file is not valid text in IoSettings.encoding, or a line
            is not valid JSON or fails to decode.
        OSError: The file cannot be opened.
    """
    settings = settings or IoSettings()
    src = settings.resolve(path)
    with open(src, encoding=settings.encoding) as fh:
        lines = enumerate(fh, start=1)
        while True:
            # Text decoding happens while reading ahead, so the failing line is unknown.
            try:
                lineno, line = next(lines)
            except StopIteration:
                break
            except UnicodeDecodeError as exc:
                raise IoDecodeError(
                    str(src), None, f"not valid {settings.encoding!r} text: {exc.reason}"
                ) from exc
            text = line.strip()
            if not text and settings.skip_blank_lines:
                continue
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise IoDecodeError(str(src), lineno, f"invalid JSON: {exc.msg}") from exc
            res = of_json(layout, data)
            if isinstance(res, Err):
                raise IoDecodeError(str(src), lineno, res.error)
            yield res.value


def read_records(
    path: str | os.PathLike[str],
    layout: Layout[S],
    settings: IoSettings | None = None,
) -> list[Record[S]]:
    """
    Decode every record of a JSON Lines file.

    See ``iter_records`` for arguments and errors.
    """
    records = list(iter_records(path, layout, settings))
    logger.info("read %d record(s) of layout %r from %s", len(records), layout.name, path)
    return records
