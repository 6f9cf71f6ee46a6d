"""Integration test configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from typer.testing import CliRunner

from ts2js.processor import ConversionProcessor
from ts2js.run_config import ConversionConfig
from ts2js.services.pathlib_file_system import PathlibFileSystem

_TS2JS_ENV = (
    "TS2JS_EXTRA_IGNORED_DIRS",
    "TS2JS_MARKUP_DETECTION",
    "TS2JS_WORKERS",
    "TS2JS_MAX_DEPTH",
    "TS2JS_ESBUILD",
    "TS2JS_ENGINE_TIMEOUT",
    "APP_LOG_DIR",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every CLI test from built-in defaults."""
    for name in _TS2JS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _drop_cli_log_handlers() -> Iterator[None]:
    """Remove handlers the CLI bound to the runner's temporary streams."""
    root = logging.getLogger()
    level = root.level
    yield
    from ts2js import config

    for handler in config._installed_handlers:
        root.removeHandler(handler)
        handler.close()
    config._installed_handlers.clear()
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def built_configs(monkeypatch: pytest.MonkeyPatch, fake_engine) -> list[ConversionConfig]:
    """Route the CLI to the fake engine; collects the config of every processor built."""
    configs: list[ConversionConfig] = []

    def _build(config: ConversionConfig) -> ConversionProcessor:
        configs.append(config)
        return ConversionProcessor(fake_engine, PathlibFileSystem(), config)

    monkeypatch.setattr("ts2js.cli.main._build_processor", _build)
    return configs


@pytest.fixture
def forbid_processor(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail the test if the CLI tries to build a processor."""

    def _build(config: ConversionConfig) -> ConversionProcessor:
        raise AssertionError("processor must not be built")

    monkeypatch.setattr("ts2js.cli.main._build_processor", _build)
