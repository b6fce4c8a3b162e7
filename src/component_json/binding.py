"""Binding of JSON trees to typed Python values.

Targets are ordinary type expressions (``int``, ``list[Item]``, ``Item | None``,
a TypedDict or dataclass) or a decoder callable taking a JSON value.
"""

from __future__ import annotations

import base64
import collections.abc
import dataclasses
import datetime
import types
import typing
import uuid
from collections.abc import Callable
from enum import Enum
from typing import Literal, TypeVar, Union

from component_json.json_utils import (
    JSONObject,
    JSONTypeError,
    JSONValue,
    narrow_json_to_bool,
    narrow_json_to_dict,
    narrow_json_to_float,
    narrow_json_to_int,
    narrow_json_to_list,
    narrow_json_to_str,
)

_T = TypeVar("_T")

_LIST_ORIGINS: frozenset[object] = frozenset(
    {list, collections.abc.Sequence, collections.abc.MutableSequence, collections.abc.Iterable}
)
_DICT_ORIGINS: frozenset[object] = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping}
)
_SET_ORIGINS: frozenset[object] = frozenset({set, frozenset, collections.abc.Set})


def bind_tree(tree: JSONValue, target: object, *, fail_on_unknown_fields: bool) -> object:
    """Bind ``tree`` to ``target``.

    Raises JSONTypeError naming the offending path (``$.items[2].name``) on a
    type mismatch, a missing required field, or an unknown field when
    ``fail_on_unknown_fields`` is set.
    """
    return _Binder(fail_on_unknown_fields).bind(tree, target, "$")


class _Binder:
    def __init__(self, fail_on_unknown_fields: bool) -> None:
        self._strict = fail_on_unknown_fields

    def bind(self, value: JSONValue, target: object, path: str) -> object:
        if target is object or target is typing.Any:
            return value
        if target is None or target is type(None):
            if value is not None:
                raise JSONTypeError(f"{path}: expected null, got {type(value).__name__}")
            return None

        origin = typing.get_origin(target)
        if origin is typing.Annotated:
            return self.bind(value, typing.get_args(target)[0], path)
        if origin is Union or origin is types.UnionType:
            return self._bind_union(value, typing.get_args(target), path)
        if origin is Literal:
            return self._bind_literal(value, typing.get_args(target), path)
        if origin in _LIST_ORIGINS:
            (item_type,) = typing.get_args(target)
            return [
                self.bind(item, item_type, f"{path}[{idx}]")
                for idx, item in enumerate(self._narrow(narrow_json_to_list, value, path))
            ]
        if origin in _SET_ORIGINS:
            (item_type,) = typing.get_args(target)
            items = [
                self.bind(item, item_type, f"{path}[{idx}]")
                for idx, item in enumerate(self._narrow(narrow_json_to_list, value, path))
            ]
            return frozenset(items) if origin is frozenset else set(items)
        if origin is tuple:
            return self._bind_tuple(value, typing.get_args(target), path)
        if origin in _DICT_ORIGINS:
            key_type, value_type = typing.get_args(target)
            obj = self._narrow(narrow_json_to_dict, value, path)
            return {
                self._bind_key(key, key_type, path): self.bind(item, value_type, f"{path}.{key}")
                for key, item in obj.items()
            }
        if isinstance(target, type):
            return self._bind_class(value, target, path)
        if callable(target):
            decoder: Callable[[JSONValue], object] = target
            return decoder(value)
        raise JSONTypeError(f"{path}: unsupported binding target {target!r}")

    def _bind_class(self, value: JSONValue, target: type, path: str) -> object:
        if target is bool:
            return self._narrow(narrow_json_to_bool, value, path)
        if target is int:
            return self._narrow(narrow_json_to_int, value, path)
        if target is float:
            return self._narrow(narrow_json_to_float, value, path)
        if target is str:
            return self._narrow(narrow_json_to_str, value, path)
        if target is list:
            return self._narrow(narrow_json_to_list, value, path)
        if typing.is_typeddict(target):
            return self._bind_typeddict(value, target, path)
        if target is dict:
            return self._narrow(narrow_json_to_dict, value, path)
        if issubclass(target, Enum):
            return self._bind_enum(value, target, path)
        if dataclasses.is_dataclass(target):
            return self._bind_dataclass(value, target, path)
        if target is datetime.datetime:
            return self._bind_text(datetime.datetime.fromisoformat, value, target, path)
        if target is datetime.date:
            return self._bind_text(datetime.date.fromisoformat, value, target, path)
        if target is datetime.time:
            return self._bind_text(datetime.time.fromisoformat, value, target, path)
        if target is uuid.UUID:
            return self._bind_text(uuid.UUID, value, target, path)
        if target is bytes:
            return self._bind_text(_decode_base64, value, target, path)
        if target is bytearray:
            return bytearray(self._bind_text(_decode_base64, value, target, path))
        decoder: Callable[[JSONValue], object] = target
        return decoder(value)

    def _bind_text(
        self, parse: Callable[[str], _T], value: JSONValue, target: type, path: str
    ) -> _T:
        text = self._narrow(narrow_json_to_str, value, path)
        try:
            return parse(text)
        except ValueError as exc:
            raise JSONTypeError(f"{path}: {text!r} is not a valid {target.__name__}") from exc

    def _bind_union(self, value: JSONValue, members: tuple[object, ...], path: str) -> object:
        if value is None and type(None) in members:
            return None
        for member in members:
            if member is type(None):
                continue
            try:
                return self.bind(value, member, path)
            except (TypeError, ValueError, KeyError):
                # JSONTypeError is a TypeError; decoders may raise any of these.
                continue
        names = ", ".join(_type_name(m) for m in members)
        raise JSONTypeError(f"{path}: value does not match any of ({names})")

    def _bind_literal(self, value: JSONValue, allowed: tuple[object, ...], path: str) -> object:
        for option in allowed:
            if type(option) is type(value) and option == value:
                return option
        opts = ", ".join(repr(o) for o in allowed)
        raise JSONTypeError(f"{path}: expected one of {opts}, got {value!r}")

    def _bind_tuple(self, value: JSONValue, args: tuple[object, ...], path: str) -> object:
        items = self._narrow(narrow_json_to_list, value, path)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(self.bind(item, args[0], f"{path}[{i}]") for i, item in enumerate(items))
        if len(items) != len(args):
            raise JSONTypeError(f"{path}: expected {len(args)} items, got {len(items)}")
        return tuple(
            self.bind(item, item_type, f"{path}[{i}]")
            for i, (item, item_type) in enumerate(zip(items, args, strict=True))
        )

    def _bind_key(self, key: str, key_type: object, path: str) -> object:
        if key_type is str or key_type is object or key_type is typing.Any:
            return key
        if key_type is int:
            try:
                return int(key)
            except ValueError as exc:
                raise JSONTypeError(f"{path}: key {key!r} is not an integer") from exc
        if isinstance(key_type, type) and issubclass(key_type, Enum):
            return self._bind_enum(key, key_type, f"{path}.{key}")
        raise JSONTypeError(f"{path}: unsupported key type {_type_name(key_type)}")

    def _bind_enum(self, value: JSONValue, target: type[Enum], path: str) -> Enum:
        try:
            return target(value)
        except ValueError as exc:
            raise JSONTypeError(f"{path}: {value!r} is not a valid {target.__name__}") from exc

    def _bind_typeddict(self, value: JSONValue, target: type, path: str) -> dict[str, object]:
        obj = self._narrow(narrow_json_to_dict, value, path)
        hints = typing.get_type_hints(target)
        required: frozenset[str] = getattr(target, "__required_keys__", frozenset())
        self._check_unknown(obj, hints.keys(), target, path)
        out: dict[str, object] = {}
        for key, hint in hints.items():
            if key in obj:
                out[key] = self.bind(obj[key], hint, f"{path}.{key}")
            elif key in required:
                raise JSONTypeError(f"{path}: missing required field '{key}'")
        return out

    def _bind_dataclass(self, value: JSONValue, target: type, path: str) -> object:
        obj = self._narrow(narrow_json_to_dict, value, path)
        hints = typing.get_type_hints(target)
        fields = dataclasses.fields(target)
        self._check_unknown(obj, {f.name for f in fields}, target, path)
        kwargs: dict[str, object] = {}
        for field in fields:
            if not field.init:
                continue
            if field.name in obj:
                kwargs[field.name] = self.bind(
                    obj[field.name], hints[field.name], f"{path}.{field.name}"
                )
            elif (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING
            ):
                raise JSONTypeError(f"{path}: missing required field '{field.name}'")
        return target(**kwargs)

    def _check_unknown(
        self,
        obj: JSONObject,
        known: collections.abc.Collection[str],
        target: type,
        path: str,
    ) -> None:
        if not self._strict:
            return
        unknown = sorted(key for key in obj if key not in known)
        if unknown:
            names = ", ".join(f"'{key}'" for key in unknown)
            raise JSONTypeError(f"{path}: unknown field(s) {names} for {target.__name__}")

    def _narrow(self, narrow: Callable[[JSONValue], _T], value: JSONValue, path: str) -> _T:
        try:
            return narrow(value)
        except JSONTypeError as exc:
            raise JSONTypeError(f"{path}: {exc}") from None


def _decode_base64(text: str) -> bytes:
    return base64.b64decode(text, validate=True)


def _type_name(target: object) -> str:
    if isinstance(target, type):
        return target.__name__
    return repr(target)


__all__ = ["bind_tree"]
