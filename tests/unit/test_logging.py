"""Tests for the lintbridge.logging module."""

from __future__ import annotations

import logging
import os
import sys
from unittest.mock import patch

import structlog

from lintbridge.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_default_level_is_warning(self) -> None:
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("LINTBRIDGE_LOG_LEVEL", None)
            configure_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_level_from_env(self) -> None:
        with patch.dict(os.environ, {"LINTBRIDGE_LOG_LEVEL": "debug"}):
            configure_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self) -> None:
        with patch.dict(os.environ, {"LINTBRIDGE_LOG_LEVEL": "chatty"}):
            configure_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_explicit_level_wins(self) -> None:
        with patch.dict(os.environ, {"LINTBRIDGE_LOG_LEVEL": "debug"}):
            configure_logging(level=logging.ERROR)

        assert logging.getLogger().level == logging.ERROR

    def test_single_stderr_handler(self) -> None:
        configure_logging()
        configure_logging()

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr

    def test_json_renderer_via_env(self) -> None:
        with patch.dict(os.environ, {"LINTBRIDGE_LOG_FORMAT": "json"}):
            configure_logging()

        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(formatter.processors[-1], structlog.processors.JSONRenderer)

    def test_force_json(self) -> None:
        configure_logging(force_json=True)

        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter.processors[-1], structlog.processors.JSONRenderer)


class TestContext:
    def test_get_logger(self) -> None:
        log = get_logger("lintbridge.test")

        assert log is not None
        assert hasattr(log, "bind")

    def test_bind_and_clear_context(self) -> None:
        clear_context()
        bind_context(tool_id="pylint", document="/src/app.py")

        assert structlog.contextvars.get_contextvars() == {
            "tool_id": "pylint",
            "document": "/src/app.py",
        }

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
