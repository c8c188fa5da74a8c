"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, htmlsafe.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    disabled: list[str] = Field(default_factory=list)
