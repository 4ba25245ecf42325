"""
Custom exceptions for the dynrec.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in dynrec.io.
- Keep dynrec.core as the source of truth for layout/record/decode errors (see dynrec.core.errors).

Source of truth and boundaries
- dynrec.core.errors.* are raised by core layouts, records, and descriptors.
- dynrec.io raises Io* errors for file and frame concerns:
  - IoConfigError: invalid or unsupported configuration.
  - IoWriteError: atomic write path failed (tmp write/fsync/rename).
  - IoDecodeError: a stored line or frame row failed to decode against a layout.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in dynrec.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from dynrec.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when IO configuration is invalid or unsupported.

    Examples:
        - Unknown encoding name
    """


class IoWriteError(IoError):
    """
    Raised when a write operation fails to complete atomically.

    Notes:
        The write path is tmp file → fsync → os.replace(tmp, final). Failures at any step
        surface as IoWriteError (with best-effort cleanup of the tmp file).
    """


class IoDecodeError(IoError):
    """
    Raised when stored data fails to decode against a layout.

    Attributes:
        source (str): File path or frame description.
        line (int | None): 1-based line (or row) number, when known.
        reason (str): Decode message from the core codec or the JSON parser.
    """

    def __init__(self, source: str, line: int | None, reason: str) -> None:
        self.source = source
        self.line = line
        self.reason = reason
        where = f"{source}:{line}" if line is not None else source
        super().__init__(f"{where}: {reason}")
