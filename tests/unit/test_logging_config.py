# -*- coding: utf-8 -*-
"""Unit tests for the structlog processor chain built by configure_logging."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import logfire
import pytest
import structlog

from battery_deal_tracker.config import LoggingSettings, Settings
from battery_deal_tracker.logging import configure_logging
from battery_deal_tracker.logging.config import _build_processors


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo root handlers and structlog config installed by configure_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for handler in root.handlers:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
        structlog.reset_defaults()


def _has_logfire(processors: list) -> bool:
    return any(isinstance(p, logfire.StructlogProcessor) for p in processors)


def test_json_format_ends_chain_with_json_renderer_and_no_logfire() -> None:
    processors = _build_processors(
        LoggingSettings(json_format=True, logfire_enabled=False, log_to_file=False)
    )

    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    assert structlog.contextvars.merge_contextvars in processors
    assert not _has_logfire(processors)


def test_console_format_uses_console_renderer() -> None:
    processors = _build_processors(
        LoggingSettings(json_format=False, logfire_enabled=False, log_to_file=False)
    )

    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_no_outputs_leaves_chain_without_renderer() -> None:
    processors = _build_processors(
        LoggingSettings(log_to_console=False, log_to_file=False, logfire_enabled=False)
    )

    assert not isinstance(
        processors[-1],
        (structlog.processors.JSONRenderer, structlog.dev.ConsoleRenderer),
    )


def test_configure_logging_installs_json_chain_and_logs(restore_logging: None) -> None:
    settings = Settings.from_env(
        logging={"json_format": True, "logfire_enabled": False, "log_to_file": False}
    )

    configure_logging(settings)

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    assert not _has_logfire(processors)
    structlog.get_logger("LoggingSmokeTest").info("logging_configured", deal_count=0)
