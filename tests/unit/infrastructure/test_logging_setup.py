"""Tests for structlog/stdlib logging configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from nuget_index_checker.infrastructure.config.schema import CheckerConfig
from nuget_index_checker.infrastructure.logging.setup import (
    build_logging_config,
    configure_logging,
)


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestBuildLoggingConfig:
    def test_console_renderer_by_default(self) -> None:
        cfg = build_logging_config(CheckerConfig())
        processors = cfg["formatters"]["structlog"]["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(CheckerConfig(environment="prod"))
        processors = cfg["formatters"]["structlog"]["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_logs_go_to_stderr(self) -> None:
        cfg = build_logging_config(CheckerConfig())
        assert cfg["handlers"]["default"]["stream"] == "ext://sys.stderr"

    def test_root_level_from_config(self) -> None:
        cfg = build_logging_config(CheckerConfig(log_level="DEBUG"))
        assert cfg["root"]["level"] == "DEBUG"

    def test_base_config_is_not_mutated(self) -> None:
        build_logging_config(CheckerConfig())
        cfg = build_logging_config(CheckerConfig(environment="prod"))
        assert "formatters" in cfg


class TestConfigureLogging:
    def test_applies_root_level(self) -> None:
        configure_logging(CheckerConfig(log_level="WARNING"))
        assert logging.getLogger().level == logging.WARNING
