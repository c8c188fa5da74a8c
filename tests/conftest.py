"""Shared pytest fixtures and test helpers for htmlsafe tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from htmlsafe.plugins.manager import PluginManager, set_plugin_manager


@pytest.fixture(autouse=True)
def plugin_manager() -> Generator[PluginManager]:
    """Isolated, undiscovered plugin manager installed as the process default."""
    manager = PluginManager()
    set_plugin_manager(manager)
    try:
        yield manager
    finally:
        set_plugin_manager(None)


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None]:
    """Restore the package logger and structlog state after each test."""
    pkg = logging.getLogger("htmlsafe")
    handlers = pkg.handlers[:]
    level = pkg.level
    propagate = pkg.propagate
    yield
    pkg.handlers = handlers
    pkg.setLevel(level)
    pkg.propagate = propagate
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory with no htmlsafe config in scope."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HTMLSAFE_CONFIG", raising=False)
    return tmp_path
