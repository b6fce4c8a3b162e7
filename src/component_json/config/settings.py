from __future__ import annotations

from pathlib import Path
from typing import TypedDict

from component_json.engine import EngineOptions

from ._utils import (
    LogLevel,
    _decode_table,
    _decode_toml,
    _parse_bool,
    _parse_log_level,
    _table_bool,
    _table_log_level,
)

TOML_TABLE = "component_json"


class JsonSettings(TypedDict):
    lenient: bool
    fail_on_unknown_fields: bool
    sort_keys: bool
    log_level: LogLevel


def load_json_settings(toml_path: Path | None = None) -> JsonSettings:
    """Load engine settings from an optional TOML file, then the environment.

    The ``[component_json]`` table of ``toml_path`` overrides the defaults, and the
    ``COMPONENT_JSON_*`` environment variables override both.
    """
    table = _decode_table(_decode_toml(toml_path), TOML_TABLE) if toml_path is not None else {}

    lenient = _table_bool(table, "lenient", True)
    fail_on_unknown = _table_bool(table, "fail_on_unknown_fields", True)
    sort_keys = _table_bool(table, "sort_keys", False)
    log_level = _table_log_level(table, "log_level", "INFO")

    return {
        "lenient": _parse_bool("COMPONENT_JSON_LENIENT", lenient),
        "fail_on_unknown_fields": _parse_bool(
            "COMPONENT_JSON_FAIL_ON_UNKNOWN_FIELDS", fail_on_unknown
        ),
        "sort_keys": _parse_bool("COMPONENT_JSON_SORT_KEYS", sort_keys),
        "log_level": _parse_log_level("COMPONENT_JSON_LOG_LEVEL", log_level),
    }


def engine_options_from_settings(settings: JsonSettings) -> EngineOptions:
    return {
        "lenient": settings["lenient"],
        "fail_on_unknown_fields": settings["fail_on_unknown_fields"],
        "sort_keys": settings["sort_keys"],
    }


__all__ = ["TOML_TABLE", "JsonSettings", "engine_options_from_settings", "load_json_settings"]
