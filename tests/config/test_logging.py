"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from htmlsafe.config.logging import configure_logging
from htmlsafe.config.settings import HtmlSafeSettings


def _settings(**flags: bool) -> HtmlSafeSettings:
    return HtmlSafeSettings(**flags)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        logger = configure_logging(_settings(verbose=True))
        assert logger is logging.getLogger("htmlsafe")
        assert logger.level == logging.DEBUG

    def test_non_verbose_sets_warning(self) -> None:
        assert configure_logging(_settings()).level == logging.WARNING

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        configure_logging(_settings(verbose=True))
        assert root.handlers == handlers
        assert root.level == level
        assert logging.getLogger("htmlsafe").propagate is False

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(verbose=True, log_json=True))
        structlog.get_logger("htmlsafe.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "htmlsafe.test"
        assert "timestamp" in parsed

    def test_stdlib_records_get_structured_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(verbose=True, log_json=True))
        logging.getLogger("htmlsafe.plugins.manager").debug("Registered plugin: demo")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Registered plugin: demo"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "htmlsafe.plugins.manager"

    def test_debug_hidden_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(_settings(log_json=True))
        logging.getLogger("htmlsafe.plugins.manager").debug("quiet")
        assert capfd.readouterr().err == ""

    def test_reconfigure_replaces_own_handler(self) -> None:
        pkg = logging.getLogger("htmlsafe")
        foreign = logging.NullHandler()
        pkg.addHandler(foreign)
        configure_logging(_settings())
        configure_logging(_settings(verbose=True))
        assert foreign in pkg.handlers
        assert len(pkg.handlers) == 2
