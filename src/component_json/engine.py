from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Protocol, TypedDict

from component_json.binding import bind_tree
from component_json.json_utils import JSONObject, JSONValue
from component_json.raw_value import RawValue
from component_json.tree import value_to_tree


class EngineOptions(TypedDict):
    """Behaviour switches for DefaultJsonEngine.

    lenient: accept single-quoted strings, unquoted object keys, comments and
        trailing commas when parsing text.
    fail_on_unknown_fields: reject object fields a dataclass/TypedDict target
        does not declare.
    sort_keys: emit object keys in sorted order.
    """

    lenient: bool
    fail_on_unknown_fields: bool
    sort_keys: bool


DEFAULT_ENGINE_OPTIONS: EngineOptions = {
    "lenient": True,
    "fail_on_unknown_fields": True,
    "sort_keys": False,
}


class JsonEngine(Protocol):
    """The conversion backend behind the facade functions."""

    def loads(self, text: str) -> JSONValue: ...

    def dumps(self, tree: JSONValue, *, indent: int | None = None) -> str: ...

    def value_to_tree(self, value: object) -> JSONValue: ...

    def tree_to_value(self, tree: JSONValue, target: object) -> object: ...

    def new_object(self) -> JSONObject: ...


class _JsonLoads(Protocol):
    def __call__(self, s: str) -> JSONValue: ...


class _JsonDumps(Protocol):
    def __call__(
        self,
        obj: JSONValue,
        *,
        ensure_ascii: bool = ...,
        separators: tuple[str, str] | None = ...,
        indent: int | None = ...,
        sort_keys: bool = ...,
        default: Callable[[object], str] | None = ...,
    ) -> str: ...


def _load_loads(lenient: bool) -> _JsonLoads:
    module = __import__("json5" if lenient else "json")
    loads: _JsonLoads = module.loads
    return loads


def _load_dumps() -> _JsonDumps:
    module = __import__("json")
    dumps: _JsonDumps = module.dumps
    return dumps


class DefaultJsonEngine:
    """JsonEngine backed by the stdlib ``json`` module, with ``json5`` for lenient parsing.

    Instances hold no mutable state and are safe to share between threads.
    """

    def __init__(self, options: EngineOptions) -> None:
        self._options: EngineOptions = {
            "lenient": options["lenient"],
            "fail_on_unknown_fields": options["fail_on_unknown_fields"],
            "sort_keys": options["sort_keys"],
        }
        self._loads = _load_loads(options["lenient"])
        self._dumps = _load_dumps()

    @property
    def options(self) -> EngineOptions:
        return {
            "lenient": self._options["lenient"],
            "fail_on_unknown_fields": self._options["fail_on_unknown_fields"],
            "sort_keys": self._options["sort_keys"],
        }

    def loads(self, text: str) -> JSONValue:
        return self._loads(text)

    def dumps(self, tree: JSONValue, *, indent: int | None = None) -> str:
        # RawValue leaves are written as unique placeholder strings, then swapped
        # for their literal text.
        token = uuid.uuid4().hex
        literals: dict[str, str] = {}

        def _default(obj: object) -> str:
            if isinstance(obj, RawValue):
                placeholder = f"__raw_{token}_{len(literals)}__"
                literals[placeholder] = obj.value
                return placeholder
            raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

        text = self._dumps(
            tree,
            ensure_ascii=False,
            separators=(",", ":") if indent is None else None,
            indent=indent,
            sort_keys=self._options["sort_keys"],
            default=_default,
        )
        for placeholder, literal in literals.items():
            text = text.replace(f'"{placeholder}"', literal, 1)
        return text

    def value_to_tree(self, value: object) -> JSONValue:
        return value_to_tree(value)

    def tree_to_value(self, tree: JSONValue, target: object) -> object:
        return bind_tree(
            tree, target, fail_on_unknown_fields=self._options["fail_on_unknown_fields"]
        )

    def new_object(self) -> JSONObject:
        return {}


__all__ = [
    "DEFAULT_ENGINE_OPTIONS",
    "DefaultJsonEngine",
    "EngineOptions",
    "JsonEngine",
]
