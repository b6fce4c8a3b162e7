"""JSON conversion helpers for UI components."""

from __future__ import annotations

from component_json.errors import ArgumentError, ParseError
from component_json.facade import (
    from_json,
    from_json_str,
    is_valid,
    new_object,
    parse,
    stringify,
    to_json,
)
from component_json.json_utils import JSONObject, JSONTypeError, JSONValue
from component_json.raw_value import RawValue

__all__ = [
    "ArgumentError",
    "JSONObject",
    "JSONTypeError",
    "JSONValue",
    "ParseError",
    "RawValue",
    "from_json",
    "from_json_str",
    "is_valid",
    "new_object",
    "parse",
    "stringify",
    "to_json",
]
