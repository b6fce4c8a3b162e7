"""Conversions between Python values, JSON trees and JSON text.

Every function accepts an optional ``engine``; without one the shared engine from
:mod:`component_json.context` is used.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar, overload

from component_json.context import get_engine
from component_json.engine import JsonEngine
from component_json.errors import ParseError
from component_json.json_utils import JSONObject, JSONValue
from component_json.logging import LogEventFields, get_logger

_T = TypeVar("_T")

_logger = get_logger(__name__)


def _resolve(engine: JsonEngine | None) -> JsonEngine:
    return engine if engine is not None else get_engine()


def _is_blank(text: str) -> bool:
    return text.strip() == ""


def _target_name(target: object) -> str:
    name = getattr(target, "__name__", None)
    return name if isinstance(name, str) else repr(target)


def to_json(value: object, *, engine: JsonEngine | None = None) -> JSONValue:
    """Convert ``value`` to a JSON tree.

    ``None`` becomes a new empty object rather than JSON null.

    Raises:
        ParseError: the value has no JSON representation (unsupported type,
            reference cycle, unusable mapping key).
    """
    eng = _resolve(engine)
    if value is None:
        return eng.new_object()
    try:
        return eng.value_to_tree(value)
    except Exception as exc:
        extra: LogEventFields = {"error_type": type(exc).__name__}
        _logger.debug("json_convert_failed", extra=extra)
        raise ParseError(f"can't convert {type(value).__name__} to json: {exc}") from exc


@overload
def from_json(tree: JSONValue, target: type[_T], *, engine: JsonEngine | None = ...) -> _T: ...


@overload
def from_json(
    tree: JSONValue, target: Callable[[JSONValue], _T], *, engine: JsonEngine | None = ...
) -> _T: ...


@overload
def from_json(tree: JSONValue, target: object, *, engine: JsonEngine | None = ...) -> object: ...


def from_json(tree: JSONValue, target: object, *, engine: JsonEngine | None = None) -> object:
    """Bind a JSON tree to ``target``.

    ``target`` is a class (str, int, an Enum, a dataclass, a TypedDict), a type
    expression such as ``list[Item]`` or ``Item | None``, or a decoder callable
    taking the tree.

    Raises:
        ParseError: the tree does not match the target.
    """
    eng = _resolve(engine)
    try:
        return eng.tree_to_value(tree, target)
    except Exception as exc:
        extra: LogEventFields = {
            "error_type": type(exc).__name__,
            "target": _target_name(target),
        }
        _logger.debug("json_bind_failed", extra=extra)
        raise ParseError(f"can't bind json to {_target_name(target)}: {exc}") from exc


@overload
def from_json_str(
    text: str | None, target: type[_T], *, engine: JsonEngine | None = ...
) -> _T: ...


@overload
def from_json_str(
    text: str | None, target: Callable[[JSONValue], _T], *, engine: JsonEngine | None = ...
) -> _T: ...


@overload
def from_json_str(
    text: str | None, target: object, *, engine: JsonEngine | None = ...
) -> object: ...


def from_json_str(
    text: str | None, target: object, *, engine: JsonEngine | None = None
) -> object:
    eng = _resolve(engine)
    return from_json(parse(text, engine=eng), target, engine=eng)


def new_object(*, engine: JsonEngine | None = None) -> JSONObject:
    return _resolve(engine).new_object()


def stringify(
    value: object, *, indent: int | None = None, engine: JsonEngine | None = None
) -> str:
    """Serialize a JSON tree or any convertible value to text.

    ``None`` yields ``"{}"``. RawValue leaves are written without quotes.
    """
    if value is None:
        return "{}"
    eng = _resolve(engine)
    tree = to_json(value, engine=eng)
    try:
        return eng.dumps(tree, indent=indent)
    except Exception as exc:
        extra: LogEventFields = {"error_type": type(exc).__name__}
        _logger.debug("json_stringify_failed", extra=extra)
        raise ParseError(f"can't stringify {type(value).__name__}: {exc}") from exc


def is_valid(text: str | None, *, engine: JsonEngine | None = None) -> bool:
    """Return True when ``text`` is non-blank and parses."""
    if text is None or _is_blank(text):
        return False
    try:
        parse(text, engine=engine)
    except ParseError:
        extra: LogEventFields = {"text_length": len(text)}
        _logger.debug("json_invalid", extra=extra)
        return False
    return True


def parse(text: str | None, *, engine: JsonEngine | None = None) -> JSONValue:
    """Parse JSON text into a tree.

    ``None``, empty or blank text yields a new empty object.

    Raises:
        ParseError: the text is malformed; ``exc.text`` holds the input.
    """
    eng = _resolve(engine)
    if text is None or _is_blank(text):
        return eng.new_object()
    try:
        return eng.loads(text)
    except Exception as exc:
        extra: LogEventFields = {"error_type": type(exc).__name__, "text_length": len(text)}
        _logger.debug("json_parse_failed", extra=extra)
        raise ParseError(f"can't parse string [{text}]", text=text) from exc


__all__ = [
    "from_json",
    "from_json_str",
    "is_valid",
    "new_object",
    "parse",
    "stringify",
    "to_json",
]
