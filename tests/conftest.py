"""Shared test fixtures for component_json tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from component_json import context as context_mod
from component_json.config import _test_hooks
from component_json.engine import DEFAULT_ENGINE_OPTIONS, DefaultJsonEngine
from component_json.logging import LIBRARY_LOGGER


@pytest.fixture(autouse=True)
def _restore_config_hooks() -> Generator[None, None, None]:
    """Restore config hooks after each test."""
    original_get_env = _test_hooks.get_env
    original_tomllib_loads = _test_hooks.tomllib_loads
    yield
    _test_hooks.get_env = original_get_env
    _test_hooks.tomllib_loads = original_tomllib_loads


@pytest.fixture(autouse=True)
def _restore_engine_context() -> Generator[None, None, None]:
    """Give every test a fresh shared engine built by the default factory."""
    context_mod.install_engine_factory(context_mod.default_engine_factory)
    yield
    context_mod.install_engine_factory(context_mod.default_engine_factory)


@pytest.fixture(autouse=True)
def _restore_library_logger() -> Generator[None, None, None]:
    """Undo level, handler and propagation changes made to the library logger."""
    logger = logging.getLogger(LIBRARY_LOGGER)
    level = logger.level
    handlers = list(logger.handlers)
    propagate = logger.propagate
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers
    logger.propagate = propagate


@pytest.fixture
def strict_engine() -> DefaultJsonEngine:
    return DefaultJsonEngine(
        {"lenient": False, "fail_on_unknown_fields": True, "sort_keys": False}
    )


@pytest.fixture
def lenient_engine() -> DefaultJsonEngine:
    return DefaultJsonEngine(DEFAULT_ENGINE_OPTIONS)
