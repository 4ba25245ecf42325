"""
dynrec — typed records whose field set is declared at runtime.

Modules independently contribute fields to a shared layout; once sealed, the
layout allocates records accessed through typed field handles and converted to
and from JSON by per-field type descriptors.

## Packages
- dynrec.core — layouts, fields, records, type descriptors, identities, codec (zero-IO).
- dynrec.io — JSON Lines record batches, Polars frames, settings.

## Logging
Modules log through ``logging.getLogger(__name__)``; the package installs a
``NullHandler`` and leaves handler configuration to the application.
"""

from __future__ import annotations

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = ["__version__"]
