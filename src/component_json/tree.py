"""Conversion of native Python values into JSON trees."""

from __future__ import annotations

import base64
import dataclasses
import datetime
import uuid
from collections.abc import Mapping
from enum import Enum

from component_json.json_utils import JSONObject, JSONValue
from component_json.raw_value import RawValue

_SCALARS = (str, int, float, bool, RawValue)
_ARRAYS = (list, tuple, set, frozenset)


def value_to_tree(value: object) -> JSONValue:
    """Convert a native value into a JSON tree.

    Mappings become objects, dataclass instances become objects of their fields,
    lists/tuples/sets become arrays. Enum members are replaced by their value,
    temporal values by ISO-8601 text, UUIDs by their string form and bytes by
    base64 text.

    Raises:
        ValueError: the value contains a reference cycle.
        TypeError: a value or mapping key has no JSON representation.
    """
    return _convert(value, set())


def _convert(value: object, active: set[int]) -> JSONValue:
    if isinstance(value, Enum):
        return _convert(value.value, active)
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, (datetime.date, datetime.time)):
        # datetime is a date subclass
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")

    marker = id(value)
    if marker in active:
        raise ValueError("Circular reference detected")
    active.add(marker)
    try:
        if isinstance(value, Mapping):
            return _convert_mapping(value, active)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return {
                field.name: _convert(getattr(value, field.name), active)
                for field in dataclasses.fields(value)
            }
        if isinstance(value, _ARRAYS):
            return [_convert(item, active) for item in value]
    finally:
        active.discard(marker)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _convert_mapping(value: Mapping[object, object], active: set[int]) -> JSONObject:
    out: JSONObject = {}
    for key, item in value.items():
        out[_convert_key(key)] = _convert(item, active)
    return out


def _convert_key(key: object) -> str:
    if isinstance(key, Enum):
        key = key.value
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float)):
        return str(key)
    raise TypeError(f"Keys must be str, int, float or bool, not {type(key).__name__}")


__all__ = ["value_to_tree"]
