"""
Filesystem helpers behind dynrec.io.write.write_records.

A record batch reaches disk in four steps, each with its own helper here:
``makedirs`` for the destination directory, ``open_write`` on the sibling tmp path
from ``tmp_path_for``, ``fsync_file`` when IoSettings.fsync is set, and
``rename_atomic`` onto the final path. ``remove_if_exists`` drops the tmp file when a
step fails, so a failed write leaves neither a partial batch nor a stray tmp file.

Notes
- os.replace is atomic only within one filesystem. The tmp file therefore sits next to
  its destination ("people.jsonl" → "people.jsonl.tmp"), never in a system temp dir.
- Readers never see the tmp file under the final name; a crashed writer can leave
  "<final>.tmp" behind, which the next write of the same batch overwrites.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from dynrec.core.constants import TMP_SUFFIX


def tmp_path_for(final_path: Path) -> Path:
    """Sibling path a batch is written to before the rename onto ``final_path``."""
    return final_path.with_name(final_path.name + TMP_SUFFIX)


def makedirs(path: str | os.PathLike[str], exist_ok: bool = True) -> None:
    """Create the directory that will hold a record file, parents included."""
    os.makedirs(path, exist_ok=exist_ok)


@contextmanager
def open_write(path: str | os.PathLike[str]) -> Iterator[BinaryIO]:
    """
    Open a tmp path for the encoded batch, truncating any leftover from a crashed write.

    Notes:
        The batch is written as bytes already encoded with IoSettings.encoding.
    """
    with open(path, "wb") as fh:
        yield fh


def fsync_file(fh: BinaryIO) -> None:
    """Flush the batch and fsync it so the rename never exposes an empty file."""
    fh.flush()
    os.fsync(fh.fileno())


def rename_atomic(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
    """Move the tmp file onto the final record path, replacing an older batch."""
    os.replace(src, dst)


def remove_if_exists(path: str | os.PathLike[str]) -> None:
    """Remove a tmp file after a failed write; a missing file is not an error."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
