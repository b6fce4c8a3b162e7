from __future__ import annotations

from pathlib import Path

import pytest

from component_json.config import (
    _decode_table,
    _decode_toml,
    _optional_env_str,
    _parse_bool,
    _parse_log_level,
    _table_bool,
    _table_log_level,
    engine_options_from_settings,
    load_json_settings,
)
from component_json.json_utils import JSONValue
from component_json.testing import make_fake_env


def test_optional_env_str() -> None:
    env = make_fake_env()
    assert _optional_env_str("OPT_KEY") is None
    env.set("OPT_KEY", " value ")
    assert _optional_env_str("OPT_KEY") == "value"
    env.set("OPT_KEY", "   ")
    assert _optional_env_str("OPT_KEY") is None


@pytest.mark.parametrize("raw", ["1", "true", "YES", "y", "on"])
def test_parse_bool_true_values(raw: str) -> None:
    env = make_fake_env()
    env.set("FLAG", raw)
    assert _parse_bool("FLAG", False) is True


@pytest.mark.parametrize("raw", ["0", "false", "No", "n", "off"])
def test_parse_bool_false_values(raw: str) -> None:
    env = make_fake_env()
    env.set("FLAG", raw)
    assert _parse_bool("FLAG", True) is False


def test_parse_bool_default_and_invalid() -> None:
    env = make_fake_env()
    assert _parse_bool("FLAG", True) is True
    env.set("FLAG", "maybe")
    with pytest.raises(ValueError, match="Invalid boolean value for FLAG"):
        _parse_bool("FLAG", True)


def test_parse_log_level() -> None:
    env = make_fake_env()
    assert _parse_log_level("LEVEL", "INFO") == "INFO"
    env.set("LEVEL", "debug")
    assert _parse_log_level("LEVEL", "INFO") == "DEBUG"
    env.set("LEVEL", "verbose")
    with pytest.raises(ValueError, match="Invalid log level for LEVEL: 'verbose'"):
        _parse_log_level("LEVEL", "WARNING")


def test_decode_toml_and_table(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[component_json]\nlenient = false\n', encoding="utf-8")
    data = _decode_toml(path)
    assert _decode_table(data, "component_json") == {"lenient": False}
    assert _decode_table(data, "missing") == {}


def test_decode_table_wrong_type() -> None:
    with pytest.raises(RuntimeError):
        _decode_table({"component_json": "not-a-table"}, "component_json")


def test_decode_toml_uses_hook(tmp_path: Path) -> None:
    from component_json.config import _test_hooks

    path = tmp_path / "config.toml"
    path.write_text("value = 1\n", encoding="utf-8")

    def _fake_tomllib_loads(_: str) -> dict[str, JSONValue]:
        return {"hooked": True}

    _test_hooks.tomllib_loads = _fake_tomllib_loads
    assert _decode_toml(path) == {"hooked": True}


def test_table_value_type_checks() -> None:
    assert _table_bool({}, "lenient", True) is True
    assert _table_bool({"lenient": False}, "lenient", True) is False
    with pytest.raises(RuntimeError, match="must be a boolean"):
        _table_bool({"lenient": "no"}, "lenient", True)
    assert _table_log_level({"log_level": "error"}, "log_level", "INFO") == "ERROR"
    with pytest.raises(RuntimeError, match="must be a string"):
        _table_log_level({"log_level": 10}, "log_level", "INFO")
    with pytest.raises(RuntimeError, match="must be a log level"):
        _table_log_level({"log_level": "loud"}, "log_level", "INFO")


def test_load_json_settings_defaults() -> None:
    make_fake_env()
    settings = load_json_settings()
    assert settings == {
        "lenient": True,
        "fail_on_unknown_fields": True,
        "sort_keys": False,
        "log_level": "INFO",
    }


def test_load_json_settings_from_env() -> None:
    env = make_fake_env()
    env.set("COMPONENT_JSON_LENIENT", "false")
    env.set("COMPONENT_JSON_FAIL_ON_UNKNOWN_FIELDS", "off")
    env.set("COMPONENT_JSON_SORT_KEYS", "1")
    env.set("COMPONENT_JSON_LOG_LEVEL", "debug")
    settings = load_json_settings()
    assert settings == {
        "lenient": False,
        "fail_on_unknown_fields": False,
        "sort_keys": True,
        "log_level": "DEBUG",
    }


def test_load_json_settings_toml_then_env(tmp_path: Path) -> None:
    path = tmp_path / "widgets.toml"
    path.write_text(
        "[component_json]\n"
        "lenient = false\n"
        "sort_keys = true\n"
        'log_level = "warning"\n',
        encoding="utf-8",
    )
    env = make_fake_env()
    settings = load_json_settings(path)
    assert settings["lenient"] is False
    assert settings["sort_keys"] is True
    assert settings["fail_on_unknown_fields"] is True
    assert settings["log_level"] == "WARNING"

    env.set("COMPONENT_JSON_LENIENT", "yes")
    assert load_json_settings(path)["lenient"] is True


def test_engine_options_from_settings() -> None:
    make_fake_env()
    options = engine_options_from_settings(load_json_settings())
    assert options == {"lenient": True, "fail_on_unknown_fields": True, "sort_keys": False}
