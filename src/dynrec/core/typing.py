"""
Lightweight typing aliases used across descriptors, records, and the codec.

Provides JSON tree aliases shared by descriptors, the codec, and dynrec.io.
This module contains no runtime logic and is zero-IO.

Notes:
    - The JSON tree is plain Python data, exactly what ``json.loads`` returns.
    - Keep the surface small and stable to avoid churn in dependents.

Examples:
    Use aliases in annotations.

    >>> from dynrec.core.typing import Json, JsonDict
    >>> def payload() -> JsonDict:
    ...     return {"a": 1, "b": [True, None]}
    >>> def first(j: Json) -> Json:
    ...     return j[0] if isinstance(j, list) else j
    >>> first([1, 2])
    1
"""

from __future__ import annotations

from typing import Any, TypeAlias

__all__ = [
    "JsonScalar",
    "Json",
    "JsonDict",
]

JsonScalar: TypeAlias = str | int | float | bool | None
Json: TypeAlias = JsonScalar | list["Json"] | dict[str, "Json"]
# Convenient JSON object alias. Kept intentionally broad for codec boundaries.
JsonDict = dict[str, Any]
