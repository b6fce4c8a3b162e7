from __future__ import annotations

from ._utils import (
    LogLevel,
    _decode_table,
    _decode_toml,
    _optional_env_str,
    _parse_bool,
    _parse_log_level,
    _table_bool,
    _table_log_level,
)
from .settings import TOML_TABLE, JsonSettings, engine_options_from_settings, load_json_settings

__all__ = [
    "TOML_TABLE",
    "JsonSettings",
    "LogLevel",
    "_decode_table",
    "_decode_toml",
    "_optional_env_str",
    "_parse_bool",
    "_parse_log_level",
    "_table_bool",
    "_table_log_level",
    "engine_options_from_settings",
    "load_json_settings",
]
