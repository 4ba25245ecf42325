"""
Type descriptors: named bidirectional JSON codecs for record field values.

A TypeDescriptor[V] names a value type V and converts it to and from the JSON
tree (plain Python data, see dynrec.core.typing). Descriptors are immutable and
form a closed set of variants, dispatched centrally by ``encode_value`` and
``decode_value``:

- Leaf      user-supplied encoder/decoder pair (``make``, ``make_string``,
            built-ins, pydantic-backed ``from_annotation``/``from_model``).
- ListOf    JSON array of an element descriptor.
- PairOf    two-key JSON object; labels are wire keys only.
- ResultOf  tagged two-element array ``["Ok", v]`` or ``["Error", e]``.
- View      a V2 carried with the JSON shape of a base V, through a total
            ``write: V2 -> V`` and a fallible ``read: V -> Result[V2, str]``.

Decoding never raises for shape or value mismatches; it returns ``Err(message)``.
The one exception is ``EXN``: exceptions encode to a string but cannot be
rebuilt, so decoding through it raises UndeserializableOpaqueValue.

Examples:
    >>> from dynrec.core import descriptors as d
    >>> from dynrec.core.result import Ok, Err
    >>> ints = d.list_of(d.INT)
    >>> ints.to_json([1, 2])
    [1, 2]
    >>> ints.of_json([1, "x"])
    Err(error='expected a JSON integer, got string')
    >>> positive = d.view(
    ...     name="positive",
    ...     read=lambda n: Ok(n) if n > 0 else Err("must be positive"),
    ...     write=lambda n: n,
    ...     base=d.INT,
    ... )
    >>> positive.of_json(5), positive.of_json(-1)
    (Ok(value=5), Err(error='must be positive'))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from pydantic import StrictBool, StrictFloat, TypeAdapter, ValidationError

from .errors import UndeserializableOpaqueValue
from .result import Err, Ok, Result
from .typing import Json

__all__ = [
    "TypeDescriptor",
    "Leaf",
    "ListOf",
    "PairOf",
    "ResultOf",
    "View",
    "encode_value",
    "decode_value",
    "json_kind",
    "is_scalar",
    # constructors
    "make",
    "make_string",
    "from_annotation",
    "from_model",
    # combinators
    "list_of",
    "pair_of",
    "result_of",
    "view",
    # built-ins
    "UNIT",
    "STRING",
    "INT",
    "FLOAT",
    "BOOL",
    "EXN",
]

V = TypeVar("V")
V2 = TypeVar("V2")
A = TypeVar("A")
B = TypeVar("B")

EXN_DECODE_MESSAGE = "cannot deserialize exceptions"


# ============================================================================
# Variants
# ============================================================================


@dataclass(frozen=True)
class TypeDescriptor(Generic[V]):
    """
    How to convert values of type V to and from JSON.

    Attributes:
        name (str): Human-readable type name, used in error messages.

    Notes:
        Construct descriptors through the module functions rather than the
        variant classes directly.
    """

    name: str

    def to_json(self, value: V) -> Json:
        """Encode a value into a JSON tree."""
        return encode_value(self, value)

    def of_json(self, data: Json) -> Result[V, str]:
        """Decode a JSON tree; ``Err(message)`` on shape or value mismatch."""
        return decode_value(self, data)


@dataclass(frozen=True)
class Leaf(TypeDescriptor[V]):
    encoder: Callable[[V], Json]
    decoder: Callable[[Json], Result[V, str]]
    # Every encoding is a JSON scalar of a single kind.
    scalar: bool = False


@dataclass(frozen=True)
class ListOf(TypeDescriptor[list[V]]):
    elem: TypeDescriptor[V]


@dataclass(frozen=True)
class PairOf(TypeDescriptor[tuple[A, B]]):
    label1: str
    first: TypeDescriptor[A]
    label2: str
    second: TypeDescriptor[B]


@dataclass(frozen=True)
class ResultOf(TypeDescriptor[Result[A, B]]):
    ok: TypeDescriptor[A]
    err: TypeDescriptor[B]


@dataclass(frozen=True)
class View(TypeDescriptor[V2]):
    base: TypeDescriptor[Any]
    read: Callable[[Any], Result[V2, str]]
    write: Callable[[V2], Any]


# ============================================================================
# Central dispatch
# ============================================================================


def json_kind(data: Any) -> str:
    """Name the JSON kind of a tree node, for error messages."""
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "bool"
    if isinstance(data, int):
        return "integer"
    if isinstance(data, float):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, list):
        return "array"
    if isinstance(data, dict):
        return "object"
    return type(data).__name__


def is_scalar(desc: TypeDescriptor[Any]) -> bool:
    """
    Whether every encoding of ``desc`` is a JSON scalar of a single kind.

    True for the built-ins, ``make_string`` leaves, leaves declared with
    ``scalar=True`` and views over any of those. Lists, pairs and results are
    never scalar.
    """
    if isinstance(desc, Leaf):
        return desc.scalar
    if isinstance(desc, View):
        return is_scalar(desc.base)
    return False


def encode_value(desc: TypeDescriptor[V], value: V) -> Json:
    """
    Encode a value with a descriptor.

    Raises:
        TypeError: If ``desc`` is not one of the known variants, or a result
            descriptor is given something other than Ok/Err.
    """
    if isinstance(desc, Leaf):
        return desc.encoder(value)
    if isinstance(desc, ListOf):
        return [encode_value(desc.elem, item) for item in value]  # type: ignore[attr-defined]
    if isinstance(desc, PairOf):
        first, second = value  # type: ignore[misc]
        return {
            desc.label1: encode_value(desc.first, first),
            desc.label2: encode_value(desc.second, second),
        }
    if isinstance(desc, ResultOf):
        if isinstance(value, Ok):
            return ["Ok", encode_value(desc.ok, value.value)]
        if isinstance(value, Err):
            return ["Error", encode_value(desc.err, value.error)]
        raise TypeError(f"{desc.name}: expected Ok or Err, got {type(value).__name__}")
    if isinstance(desc, View):
        return encode_value(desc.base, desc.write(value))
    raise TypeError(f"unsupported type descriptor: {type(desc).__name__}")


def decode_value(desc: TypeDescriptor[V], data: Json) -> Result[V, str]:
    """
    Decode a JSON tree with a descriptor.

    Returns:
        Result: ``Ok(value)`` or ``Err(message)``. For lists, the message of the
        first failing element is returned as is.

    Raises:
        UndeserializableOpaqueValue: When an encode-only descriptor is reached.
        TypeError: If ``desc`` is not one of the known variants.
    """
    if isinstance(desc, Leaf):
        return desc.decoder(data)
    if isinstance(desc, ListOf):
        if not isinstance(data, list):
            return Err(f"expected a JSON array, got {json_kind(data)}")
        items: list[Any] = []
        for item in data:
            res = decode_value(desc.elem, item)
            if isinstance(res, Err):
                return res
            items.append(res.value)
        return Ok(items)  # type: ignore[arg-type]
    if isinstance(desc, PairOf):
        if not isinstance(data, dict):
            return Err(f"expected a JSON object, got {json_kind(data)}")
        parts: list[Any] = []
        for label, sub in ((desc.label1, desc.first), (desc.label2, desc.second)):
            if label not in data:
                return Err(f"missing key {label!r}")
            res = decode_value(sub, data[label])
            if isinstance(res, Err):
                return Err(f"{label}: {res.error}")
            parts.append(res.value)
        return Ok((parts[0], parts[1]))  # type: ignore[arg-type]
    if isinstance(desc, ResultOf):
        if not (isinstance(data, list) and len(data) == 2):
            return Err('expected ["Ok", value] or ["Error", value]')
        tag, payload = data
        if tag == "Ok":
            return decode_value(desc.ok, payload).map(Ok)  # type: ignore[return-value]
        if tag == "Error":
            return decode_value(desc.err, payload).map(Err)  # type: ignore[return-value]
        return Err(f"unknown result tag {tag!r}")
    if isinstance(desc, View):
        return decode_value(desc.base, data).bind(desc.read)
    raise TypeError(f"unsupported type descriptor: {type(desc).__name__}")


# ============================================================================
# Constructors
# ============================================================================


def make(
    name: str,
    to_json: Callable[[V], Json],
    of_json: Callable[[Json], Result[V, str]],
    *,
    scalar: bool = False,
) -> TypeDescriptor[V]:
    """
    Declare a new leaf type.

    Args:
        name (str): Type name.
        to_json: Total encoder into a JSON tree.
        of_json: Decoder returning ``Ok(value)`` or ``Err(message)``.
        scalar (bool): Declare that every encoding is a JSON scalar of one kind,
            so Polars frames may keep the field in a typed column.
    """
    return Leaf(name=name, encoder=to_json, decoder=of_json, scalar=scalar)


def make_string(
    name: str,
    to_string: Callable[[V], str],
    of_string: Callable[[str], Result[V, str]],
) -> TypeDescriptor[V]:
    """
    Declare a new leaf type carried as a JSON string.

    Examples:
        >>> from dynrec.core.descriptors import make_string
        >>> from dynrec.core.result import Ok, Err
        >>> def parse(s):
        ...     return Ok(int(s, 16)) if s.startswith("0x") else Err("expected 0x prefix")
        >>> hexint = make_string("hexint", to_string=hex, of_string=parse)
        >>> hexint.to_json(255), hexint.of_json("0xff")
        ('0xff', Ok(value=255))
    """

    def _decode(data: Json) -> Result[V, str]:
        if not isinstance(data, str):
            return Err(f"{name}: expected a JSON string, got {json_kind(data)}")
        return of_string(data)

    return Leaf(name=name, encoder=to_string, decoder=_decode, scalar=True)


def _format_validation_error(exc: ValidationError) -> str:
    details = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<value>"
        details.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(details)


def from_annotation(name: str, annotation: Any) -> TypeDescriptor[Any]:
    """
    Build a leaf descriptor for any type pydantic can validate.

    Args:
        name (str): Type name.
        annotation: A Python type or annotation accepted by ``pydantic.TypeAdapter``
            (e.g., ``datetime``, ``dict[str, float]``, ``Literal["a", "b"]``).

    Returns:
        TypeDescriptor: Encodes with ``dump_python(mode="json")`` and decodes with
        ``validate_python``; validation errors become ``Err(message)``.
    """
    adapter: TypeAdapter[Any] = TypeAdapter(annotation)

    def _encode(value: Any) -> Json:
        return adapter.dump_python(value, mode="json")

    def _decode(data: Json) -> Result[Any, str]:
        try:
            return Ok(adapter.validate_python(data))
        except ValidationError as exc:
            return Err(f"{name}: {_format_validation_error(exc)}")

    return Leaf(name=name, encoder=_encode, decoder=_decode)


def from_model(model: type[Any], name: str | None = None) -> TypeDescriptor[Any]:
    """
    Build a leaf descriptor from a ``pydantic.BaseModel`` subclass.

    The JSON shape is the model's JSON dump; decoding runs model validation.
    """
    return from_annotation(name or model.__name__, model)


# ============================================================================
# Combinators
# ============================================================================


def list_of(elem: TypeDescriptor[V]) -> TypeDescriptor[list[V]]:
    """Represent a list as a JSON array of ``elem``."""
    return ListOf(name=f"list[{elem.name}]", elem=elem)


def pair_of(
    label1: str, first: TypeDescriptor[A], label2: str, second: TypeDescriptor[B]
) -> TypeDescriptor[tuple[A, B]]:
    """
    Represent a couple as a two-key JSON object.

    The labels identify the elements on the wire, not their types.
    """
    return PairOf(
        name=f"pair[{label1}: {first.name}, {label2}: {second.name}]",
        label1=label1,
        first=first,
        label2=label2,
        second=second,
    )


def result_of(ok: TypeDescriptor[A], err: TypeDescriptor[B]) -> TypeDescriptor[Result[A, B]]:
    """Represent an Ok/Err value as ``["Ok", v]`` or ``["Error", e]``."""
    return ResultOf(name=f"result[{ok.name}, {err.name}]", ok=ok, err=err)


def view(
    name: str,
    read: Callable[[V], Result[V2, str]],
    write: Callable[[V2], V],
    base: TypeDescriptor[V],
) -> TypeDescriptor[V2]:
    """
    Build a V2 descriptor that shares the JSON encoding of ``base``.

    Args:
        name (str): Name of the new type.
        read: Fallible conversion applied after decoding with ``base``.
        write: Total conversion applied before encoding with ``base``.
        base (TypeDescriptor[V]): Descriptor providing the JSON shape.
    """
    return View(name=name, base=base, read=read, write=write)


# ============================================================================
# Built-ins
# ============================================================================


def _decode_unit(data: Json) -> Result[None, str]:
    if data is None:
        return Ok(None)
    return Err(f"expected null, got {json_kind(data)}")


def _decode_string(data: Json) -> Result[str, str]:
    if isinstance(data, str):
        return Ok(data)
    return Err(f"expected a JSON string, got {json_kind(data)}")


def _decode_int(data: Json) -> Result[int, str]:
    # bool is a subclass of int
    if isinstance(data, int) and not isinstance(data, bool):
        return Ok(data)
    return Err(f"expected a JSON integer, got {json_kind(data)}")


def _encode_exn(exc: BaseException) -> Json:
    return repr(exc)


def _decode_exn(data: Json) -> Result[BaseException, str]:
    raise UndeserializableOpaqueValue(EXN_DECODE_MESSAGE)


UNIT: TypeDescriptor[None] = Leaf("unit", lambda _: None, _decode_unit, scalar=True)
STRING: TypeDescriptor[str] = Leaf("string", lambda s: s, _decode_string, scalar=True)
INT: TypeDescriptor[int] = Leaf("int", lambda n: n, _decode_int, scalar=True)
FLOAT: TypeDescriptor[float] = replace(from_annotation("float", StrictFloat), scalar=True)
BOOL: TypeDescriptor[bool] = replace(from_annotation("bool", StrictBool), scalar=True)
EXN: TypeDescriptor[BaseException] = Leaf("exn", _encode_exn, _decode_exn, scalar=True)
