"""Logging for component_json.

Library modules log event names through ``get_logger(__name__)`` and attach
structured fields with ``extra=`` (see :class:`LogEventFields`). Nothing is
configured on import; applications that want the library's events on a stream
call :func:`setup_logging`.
"""

from __future__ import annotations

import datetime
import logging
import sys
from typing import Literal, TextIO, TypedDict

from component_json.json_utils import JSONValue, dump_json_str

LogFormat = Literal["json", "text"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LIBRARY_LOGGER = "component_json"


class LogEventFields(TypedDict, total=False):
    """Optional structured fields attached to component_json log events."""

    engine: str
    lenient: bool
    fail_on_unknown_fields: bool
    sort_keys: bool
    error_type: str
    text_length: int
    target: str
    path: str
    method: str


# Output order of LogEventFields keys.
EVENT_FIELDS: tuple[str, ...] = (
    "engine",
    "lenient",
    "fail_on_unknown_fields",
    "sort_keys",
    "target",
    "error_type",
    "text_length",
    "method",
    "path",
)

_FieldValue = str | int | float | bool


def event_fields(record: logging.LogRecord) -> dict[str, _FieldValue]:
    """Return the event fields set on ``record``, skipping non-scalar values."""
    attrs: dict[str, object] = vars(record)
    found: dict[str, _FieldValue] = {}
    for name in EVENT_FIELDS:
        value = attrs.get(name)
        if isinstance(value, (str, int, float, bool)):
            found[name] = value
    return found


class JsonFormatter(logging.Formatter):
    """One compact JSON object per record.

    Keys: ``time`` (UTC, ISO 8601), ``level``, ``logger``, ``event``, then any
    event fields present on the record, then ``exc_info`` when a traceback is
    attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.datetime.fromtimestamp(record.created, tz=datetime.UTC)
        payload: dict[str, JSONValue] = {
            "time": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(event_fields(record))
        if record.exc_info is not None:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dump_json_str(payload)


class TextFormatter(logging.Formatter):
    """``<time> <LEVEL> <logger>: <event> key=value ...`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        line = f"{stamp} {record.levelname} {record.name}: {record.getMessage()}"
        fields = event_fields(record)
        if fields:
            line += " " + " ".join(f"{key}={value}" for key, value in fields.items())
        if record.exc_info is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    *,
    level: LogLevel,
    format_mode: LogFormat = "json",
    stream: TextIO | None = None,
) -> logging.Logger:
    """Write component_json events to ``stream`` (stdout by default).

    Handlers from earlier calls are replaced. The library logger stops
    propagating, so events are not written a second time by root handlers.

    Example:
        >>> from component_json.config import load_json_settings
        >>> from component_json.logging import setup_logging
        >>> logger = setup_logging(level=load_json_settings()["log_level"], format_mode="text")
    """
    logger = logging.getLogger(LIBRARY_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    formatter: logging.Formatter = JsonFormatter() if format_mode == "json" else TextFormatter()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "EVENT_FIELDS",
    "LIBRARY_LOGGER",
    "JsonFormatter",
    "LogEventFields",
    "LogFormat",
    "LogLevel",
    "TextFormatter",
    "event_fields",
    "get_logger",
    "setup_logging",
]
