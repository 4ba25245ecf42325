"""
dynrec IO-facing defaults.

Defines the defaults consumed by dynrec.io.config.IoSettings. This module is
zero-IO and uses only the Python standard library.

Notes:
    - Record batches are stored as JSON Lines: one encoded record per line.
    - Changes to these constants change the defaults of every IoSettings.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_ROOT_DIR",
    "DEFAULT_ENCODING",
    "TMP_SUFFIX",
]

# Base directory for relative record file paths.
DEFAULT_ROOT_DIR: str = "."

# Text encoding of record files.
DEFAULT_ENCODING: str = "utf-8"

# Suffix of the temporary file written before the atomic rename.
TMP_SUFFIX: str = ".tmp"
