from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from component_json.raw_value import RawValue

# RawValue leaves stay in trees until stringify emits them verbatim.
JSONValue = (
    dict[str, "JSONValue"] | list["JSONValue"] | str | int | float | bool | RawValue | None
)
JSONObject = dict[str, JSONValue]

# Input type for dump_json_str. Broad enough for TypedDict subclasses (via Mapping),
# dict literals with mixed value types, primitives and sequences.
_JSONInputValue = str | int | float | bool | None | Mapping[str, object] | Sequence[object]


class JSONTypeError(TypeError):
    """Raised when a JSON value has an unexpected type during narrowing or binding."""


class _JsonDumps(Protocol):
    def __call__(
        self,
        obj: _JSONInputValue,
        *,
        separators: tuple[str, str] | None = ...,
        indent: int | None = ...,
    ) -> str: ...


def dump_json_str(
    value: _JSONInputValue, *, compact: bool = True, indent: int | None = None
) -> str:
    """Serialize a plain JSON-compatible value with the standard library.

    Used by the log formatters, which must not depend on the shared engine.

    Args:
        value: JSON-serializable value
        compact: If True (default), produce compact JSON without extra whitespace.
                 Ignored if indent is specified.
        indent: If specified, pretty-print with this many spaces of indentation.
    """
    module = __import__("json")
    dumps: _JsonDumps = module.dumps
    if indent is not None:
        return dumps(value, separators=None, indent=indent)
    if compact:
        return dumps(value, separators=(",", ":"), indent=None)
    return dumps(value, separators=None, indent=None)


def narrow_json_to_dict(value: JSONValue) -> JSONObject:
    """Narrow JSONValue to dict.

    Raises JSONTypeError if value is not a dict.
    """
    if not isinstance(value, dict):
        raise JSONTypeError(f"Expected JSON object, got {type(value).__name__}")
    return value


def narrow_json_to_list(value: JSONValue) -> list[JSONValue]:
    """Narrow JSONValue to list.

    Raises JSONTypeError if value is not a list.
    """
    if not isinstance(value, list):
        raise JSONTypeError(f"Expected JSON array, got {type(value).__name__}")
    return value


def narrow_json_to_str(value: JSONValue) -> str:
    if not isinstance(value, str):
        raise JSONTypeError(f"Expected JSON string, got {type(value).__name__}")
    return value


def narrow_json_to_int(value: JSONValue) -> int:
    """Narrow JSONValue to int.

    Raises JSONTypeError if value is not an int (excludes bool).
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise JSONTypeError(f"Expected JSON integer, got {type(value).__name__}")
    return value


def narrow_json_to_float(value: JSONValue) -> float:
    """Narrow JSONValue to float (accepts int as well).

    Raises JSONTypeError if value is not a number.
    """
    if isinstance(value, bool):
        raise JSONTypeError(f"Expected JSON number, got {type(value).__name__}")
    if isinstance(value, int):
        return float(value)
    if isinstance(value, float):
        return value
    raise JSONTypeError(f"Expected JSON number, got {type(value).__name__}")


def narrow_json_to_bool(value: JSONValue) -> bool:
    if not isinstance(value, bool):
        raise JSONTypeError(f"Expected JSON boolean, got {type(value).__name__}")
    return value


__all__ = [
    "JSONObject",
    "JSONTypeError",
    "JSONValue",
    "dump_json_str",
    "narrow_json_to_bool",
    "narrow_json_to_dict",
    "narrow_json_to_float",
    "narrow_json_to_int",
    "narrow_json_to_list",
    "narrow_json_to_str",
]
