"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin load failures are warnings, never errors.
"""

from htmlsafe.plugins.hookspecs import hookimpl
from htmlsafe.plugins.manager import (
    PluginManager,
    get_plugin_manager,
    load_plugin_manager,
    set_plugin_manager,
)

__all__ = [
    "PluginManager",
    "get_plugin_manager",
    "hookimpl",
    "load_plugin_manager",
    "set_plugin_manager",
]
