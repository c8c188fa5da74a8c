"""Tests for HtmlSafeSettings — env vars, TOML source, and discovery."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from htmlsafe.config.settings import HtmlSafeSettings, find_config


class TestDefaults:
    def test_all_defaults(self, workdir: Path) -> None:
        settings = HtmlSafeSettings.from_cli()
        assert settings.config_path is None
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.encoding == "utf-8"
        assert settings.plugins.enabled is True
        assert settings.plugins.disabled == []

    def test_frozen(self, workdir: Path) -> None:
        settings = HtmlSafeSettings.from_cli()
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]

    def test_none_flags_are_ignored(self, workdir: Path) -> None:
        settings = HtmlSafeSettings.from_cli(verbose=None, log_json=True)
        assert settings.verbose is False
        assert settings.log_json is True


class TestFindConfig:
    def test_walks_up(self, workdir: Path) -> None:
        toml = workdir / "htmlsafe.toml"
        toml.write_text("")
        nested = workdir / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == toml.resolve()

    def test_missing(self, workdir: Path) -> None:
        assert find_config(workdir) is None

    def test_env_var_wins(self, workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = workdir / "custom.toml"
        custom.write_text("")
        (workdir / "htmlsafe.toml").write_text("")
        monkeypatch.setenv("HTMLSAFE_CONFIG", str(custom))
        assert find_config(workdir) == custom

    def test_env_var_pointing_nowhere(self, workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (workdir / "htmlsafe.toml").write_text("")
        monkeypatch.setenv("HTMLSAFE_CONFIG", str(workdir / "missing.toml"))
        assert find_config(workdir) is None


class TestTomlSource:
    def test_loads_from_toml(self, workdir: Path) -> None:
        (workdir / "htmlsafe.toml").write_text(
            'encoding = "latin-1"\n[plugins]\ndisabled = ["noisy"]\n'
        )
        settings = HtmlSafeSettings.from_cli()
        assert settings.encoding == "latin-1"
        assert settings.plugins.disabled == ["noisy"]
        assert settings.plugins.enabled is True
        assert settings.config_path == (workdir / "htmlsafe.toml").resolve()

    def test_explicit_config_path(self, workdir: Path) -> None:
        custom = workdir / "conf" / "my.toml"
        custom.parent.mkdir()
        custom.write_text("[plugins]\nenabled = false\n")
        settings = HtmlSafeSettings.from_cli(config_path=str(custom))
        assert settings.plugins.enabled is False
        assert settings.config_path == custom

    def test_explicit_missing_path_uses_defaults(self, workdir: Path) -> None:
        settings = HtmlSafeSettings.from_cli(config_path=str(workdir / "nope.toml"))
        assert settings.config_path is None
        assert settings.encoding == "utf-8"

    def test_invalid_toml(self, workdir: Path) -> None:
        (workdir / "htmlsafe.toml").write_text("encoding = \n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            HtmlSafeSettings.from_cli()


class TestPriority:
    def test_env_beats_toml(self, workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (workdir / "htmlsafe.toml").write_text('encoding = "latin-1"\n')
        monkeypatch.setenv("HTMLSAFE_ENCODING", "ascii")
        assert HtmlSafeSettings.from_cli().encoding == "ascii"

    def test_nested_env(self, workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTMLSAFE_PLUGINS__ENABLED", "false")
        assert HtmlSafeSettings.from_cli().plugins.enabled is False

    def test_flags_beat_env(self, workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTMLSAFE_VERBOSE", "false")
        assert HtmlSafeSettings.from_cli(verbose=True).verbose is True
