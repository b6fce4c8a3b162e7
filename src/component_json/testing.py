"""Helpers for tests of code that uses component_json."""

from __future__ import annotations

import threading

from component_json.config import _test_hooks
from component_json.engine import (
    DEFAULT_ENGINE_OPTIONS,
    DefaultJsonEngine,
    EngineOptions,
    JsonEngine,
)


class FakeEnv:
    """In-memory environment installed into the config ``get_env`` hook."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def unset(self, key: str) -> None:
        self._values.pop(key, None)

    def get(self, key: str) -> str | None:
        return self._values.get(key)


def make_fake_env() -> FakeEnv:
    """Install an empty fake environment and return it for population."""
    env = FakeEnv()
    _test_hooks.get_env = env.get
    return env


class CountingEngineFactory:
    """Engine factory that records how many engines it has built."""

    def __init__(self, options: EngineOptions | None = None) -> None:
        self._options: EngineOptions = options if options is not None else DEFAULT_ENGINE_OPTIONS
        self._lock = threading.Lock()
        self._calls = 0

    @property
    def calls(self) -> int:
        return self._calls

    def __call__(self) -> JsonEngine:
        with self._lock:
            self._calls += 1
        return DefaultJsonEngine(self._options)


__all__ = ["CountingEngineFactory", "FakeEnv", "make_fake_env"]
