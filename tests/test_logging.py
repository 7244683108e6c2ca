"""Tests for CLI logging setup."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from methodkit.cli._logging import LOG_LEVEL_ENV, configure_logging, default_log_level


class TestDefaultLogLevel:
    def test_defaults_to_warning(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        assert default_log_level() == "WARNING"

    def test_reads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        assert default_log_level() == "DEBUG"


class TestConfigureLogging:
    def test_installs_single_rich_handler(self) -> None:
        configure_logging("INFO")
        configure_logging("DEBUG")

        logger = logging.getLogger("methodkit")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_child_records_reach_console(self) -> None:
        stream = io.StringIO()
        configure_logging("WARNING", Console(file=stream, width=200))

        logging.getLogger("methodkit.cli._writer").warning("region appended")
        logging.getLogger("methodkit.core.resolver").info("not shown")

        assert "region appended" in stream.getvalue()
        assert "not shown" not in stream.getvalue()
