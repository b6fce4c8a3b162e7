from __future__ import annotations

from dataclasses import dataclass

import pytest

from component_json.engine import DEFAULT_ENGINE_OPTIONS, DefaultJsonEngine, JsonEngine
from component_json.json_utils import JSONValue
from component_json.raw_value import RawValue


@dataclass
class Delay:
    show: int
    hide: int = 0


def test_default_engine_satisfies_protocol() -> None:
    engine: JsonEngine = DefaultJsonEngine(DEFAULT_ENGINE_OPTIONS)
    assert engine.new_object() == {}


def test_options_are_copied() -> None:
    options = {"lenient": False, "fail_on_unknown_fields": False, "sort_keys": True}
    engine = DefaultJsonEngine(
        {"lenient": False, "fail_on_unknown_fields": False, "sort_keys": True}
    )
    assert engine.options == options
    returned = engine.options
    returned["sort_keys"] = False
    assert engine.options["sort_keys"] is True


def test_new_object_is_fresh_each_call(lenient_engine: DefaultJsonEngine) -> None:
    first = lenient_engine.new_object()
    first["a"] = 1
    assert lenient_engine.new_object() == {}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("{a:1}", {"a": 1}),
        ("{'a': 'b'}", {"a": "b"}),
        ("[1, 2,]", [1, 2]),
        ("// note\n{\"x\": true}", {"x": True}),
    ],
)
def test_lenient_engine_accepts_relaxed_syntax(
    lenient_engine: DefaultJsonEngine, text: str, expected: JSONValue
) -> None:
    assert lenient_engine.loads(text) == expected


@pytest.mark.parametrize("text", ["{a:1}", "{'a': 'b'}", "[1, 2,]"])
def test_strict_engine_rejects_relaxed_syntax(
    strict_engine: DefaultJsonEngine, text: str
) -> None:
    with pytest.raises(ValueError):
        strict_engine.loads(text)


def test_strict_engine_parses_standard_json(strict_engine: DefaultJsonEngine) -> None:
    assert strict_engine.loads('{"a": [1, 2.5, null, "s"]}') == {"a": [1, 2.5, None, "s"]}


def test_dumps_is_compact_and_unicode(lenient_engine: DefaultJsonEngine) -> None:
    assert lenient_engine.dumps({"a": 1, "b": ["ü", None]}) == '{"a":1,"b":["ü",null]}'


def test_dumps_with_indent(lenient_engine: DefaultJsonEngine) -> None:
    assert lenient_engine.dumps({"a": 1}, indent=2) == '{\n  "a": 1\n}'


def test_dumps_sort_keys() -> None:
    engine = DefaultJsonEngine(
        {"lenient": True, "fail_on_unknown_fields": True, "sort_keys": True}
    )
    assert engine.dumps({"b": 1, "a": 2}) == '{"a":2,"b":1}'


def test_dumps_emits_raw_values_unquoted(lenient_engine: DefaultJsonEngine) -> None:
    tree: JSONValue = {
        "someKey": RawValue("Value"),
        "handlers": [RawValue("function(e){ return e; }"), "plain"],
    }
    assert (
        lenient_engine.dumps(tree)
        == '{"someKey":Value,"handlers":[function(e){ return e; },"plain"]}'
    )


def test_dumps_raw_value_text_resembling_placeholder(lenient_engine: DefaultJsonEngine) -> None:
    tree: JSONValue = {"a": "__raw_x_0__", "b": RawValue("1 + 1")}
    assert lenient_engine.dumps(tree) == '{"a":"__raw_x_0__","b":1 + 1}'


def test_tree_to_value_honours_unknown_field_option() -> None:
    lenient = DefaultJsonEngine(
        {"lenient": True, "fail_on_unknown_fields": False, "sort_keys": False}
    )
    strict = DefaultJsonEngine(DEFAULT_ENGINE_OPTIONS)
    tree: JSONValue = {"show": 1, "extra": 2}
    assert lenient.tree_to_value(tree, Delay) == Delay(show=1)
    with pytest.raises(TypeError):
        strict.tree_to_value(tree, Delay)
