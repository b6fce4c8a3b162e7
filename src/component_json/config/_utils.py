from __future__ import annotations

from pathlib import Path
from typing import Literal

from component_json.config import _test_hooks
from component_json.json_utils import JSONValue

# Log level type - must match component_json.logging.LogLevel
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _optional_env_str(key: str) -> str | None:
    value = _test_hooks.get_env(key)
    if value is None:
        return None
    trimmed = value.strip()
    if trimmed == "":
        return None
    return trimmed


def _to_bool(key: str, raw: str) -> bool:
    normalized = raw.lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {key}: {raw!r}")


def _parse_bool(key: str, default: bool) -> bool:
    val = _optional_env_str(key)
    if val is None:
        return default
    return _to_bool(key, val)


def _to_log_level(raw: str) -> LogLevel | None:
    upper_val = raw.upper()
    if upper_val == "DEBUG":
        return "DEBUG"
    if upper_val == "INFO":
        return "INFO"
    if upper_val == "WARNING":
        return "WARNING"
    if upper_val == "ERROR":
        return "ERROR"
    if upper_val == "CRITICAL":
        return "CRITICAL"
    return None


def _parse_log_level(key: str, default: LogLevel) -> LogLevel:
    val = _optional_env_str(key)
    if val is None:
        return default
    level = _to_log_level(val)
    if level is None:
        raise ValueError(f"Invalid log level for {key}: {val!r}")
    return level


def _decode_toml(path: Path) -> dict[str, JSONValue]:
    text = path.read_text(encoding="utf-8")
    parsed: JSONValue = _test_hooks.tomllib_loads(text)
    if not isinstance(parsed, dict):
        raise RuntimeError(f"TOML root must be a table: {path}")
    return parsed


def _decode_table(data: dict[str, JSONValue], key: str) -> dict[str, JSONValue]:
    raw = data.get(key)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise RuntimeError(f"TOML key {key} must be a table")
    return {str(k): v for k, v in raw.items()}


def _table_bool(table: dict[str, JSONValue], key: str, default: bool) -> bool:
    raw = table.get(key)
    if raw is None:
        return default
    if not isinstance(raw, bool):
        raise RuntimeError(f"TOML key {key} must be a boolean")
    return raw


def _table_log_level(table: dict[str, JSONValue], key: str, default: LogLevel) -> LogLevel:
    raw = table.get(key)
    if raw is None:
        return default
    if not isinstance(raw, str):
        raise RuntimeError(f"TOML key {key} must be a string")
    level = _to_log_level(raw)
    if level is None:
        raise RuntimeError(f"TOML key {key} must be a log level, got {raw!r}")
    return level


__all__ = [
    "JSONValue",
    "LogLevel",
    "_decode_table",
    "_decode_toml",
    "_optional_env_str",
    "_parse_bool",
    "_parse_log_level",
    "_table_bool",
    "_table_log_level",
]
