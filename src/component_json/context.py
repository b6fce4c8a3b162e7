"""Process-wide engine holder.

The engine is built lazily by an installable factory and cached. Applications
that want explicit wiring pass ``engine=`` to the facade functions or keep
their own ``EngineContext``.
"""

from __future__ import annotations

import threading
from typing import Protocol

from component_json.config import engine_options_from_settings, load_json_settings
from component_json.engine import DefaultJsonEngine, JsonEngine
from component_json.logging import LIBRARY_LOGGER, LogEventFields, get_logger

_logger = get_logger(__name__)


class EngineFactory(Protocol):
    def __call__(self) -> JsonEngine: ...


def default_engine_factory() -> JsonEngine:
    """Build a DefaultJsonEngine from environment settings.

    Also sets the level of the ``component_json`` logger from ``log_level``.
    """
    settings = load_json_settings()
    get_logger(LIBRARY_LOGGER).setLevel(settings["log_level"])
    options = engine_options_from_settings(settings)
    engine = DefaultJsonEngine(options)
    extra: LogEventFields = {
        "engine": type(engine).__name__,
        "lenient": options["lenient"],
        "fail_on_unknown_fields": options["fail_on_unknown_fields"],
        "sort_keys": options["sort_keys"],
    }
    _logger.info("json_engine_created", extra=extra)
    return engine


class EngineContext:
    """Holds one engine, built at most once by ``factory``."""

    def __init__(self, factory: EngineFactory) -> None:
        self._factory = factory
        self._engine: JsonEngine | None = None
        self._lock = threading.Lock()

    @property
    def factory(self) -> EngineFactory:
        return self._factory

    def get(self) -> JsonEngine:
        engine = self._engine
        if engine is not None:
            return engine
        with self._lock:
            if self._engine is None:
                self._engine = self._factory()
            return self._engine

    def reset(self) -> None:
        """Drop the cached engine; the next ``get`` builds a new one."""
        with self._lock:
            self._engine = None


_default_context = EngineContext(default_engine_factory)
_install_lock = threading.Lock()


def get_engine() -> JsonEngine:
    return _default_context.get()


def install_engine_factory(factory: EngineFactory) -> None:
    """Replace the process-wide factory and drop any engine built by the old one."""
    global _default_context
    with _install_lock:
        _default_context = EngineContext(factory)


def reset_engine() -> None:
    _default_context.reset()


def default_context() -> EngineContext:
    return _default_context


__all__ = [
    "EngineContext",
    "EngineFactory",
    "default_context",
    "default_engine_factory",
    "get_engine",
    "install_engine_factory",
    "reset_engine",
]
