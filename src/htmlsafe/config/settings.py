"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``HTMLSAFE_*`` prefix
  3. TOML file    — ``htmlsafe.toml`` discovered via walk-up
  4. Code defaults — baked into the models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from htmlsafe.config.models import PluginsConfig

CONFIG_FILENAME = "htmlsafe.toml"
CONFIG_ENV_VAR = "HTMLSAFE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate htmlsafe.toml in *start* (default: cwd) or any parent directory.

    An ``HTMLSAFE_CONFIG`` env var short-circuits the search; if it points
    at a missing file, no config is used.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``htmlsafe.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class HtmlSafeSettings(BaseSettings):
    """Settings for the htmlsafe CLI and plugin loading.

    Attributes:
        config_path: The TOML file that was read, if any.
        encoding: Codec used to render byte fragments as text.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "HTMLSAFE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False

    # --- TOML ---
    encoding: str = "utf-8"
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> HtmlSafeSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, otherwise discovers ``htmlsafe.toml``
        by walking up from *start*. Flags that are None are left to the
        lower-priority sources.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        flags = {key: value for key, value in cli_flags.items() if value is not None}
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None
