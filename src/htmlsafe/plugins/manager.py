"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) in the ``htmlsafe.plugins`` group.
Capabilities: content conversions for third-party types.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

import pluggy

from htmlsafe.plugins.hookspecs import HtmlSafeHookSpec

if TYPE_CHECKING:
    from htmlsafe.config.settings import HtmlSafeSettings

PROJECT_NAME = "htmlsafe"
ENTRY_POINT_GROUP = "htmlsafe.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(HtmlSafeHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, disabled: Iterable[str] = ()) -> list[str]:
        """Load plugins advertised under the ``htmlsafe.plugins`` entry point group.

        Names in *disabled* are blocked before loading and never registered.

        Returns a list of loaded plugin names.
        """
        for name in disabled:
            self._pm.set_blocked(name)
            logger.debug("Blocked plugin: %s", name)
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching conversions."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry points may point at a class rather than an instance. Hook
        dispatch against a class leaves ``self`` unbound, so the class is
        swapped for an instance; classes that fail to instantiate are
        dropped with a warning.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("htmlsafe")`` sets an ``htmlsafe_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "htmlsafe_impl", None):
                return True
        return False


def load_plugin_manager(
    settings: HtmlSafeSettings | None = None,
    *,
    enabled: bool = True,
) -> PluginManager:
    """Build a manager according to the ``[plugins]`` settings section.

    Discovery is skipped when *enabled* is False or the settings disable
    plugins; names listed in ``plugins.disabled`` are blocked.
    """
    if settings is None:
        from htmlsafe.config.settings import HtmlSafeSettings

        settings = HtmlSafeSettings.from_cli()

    manager = PluginManager()
    if enabled and settings.plugins.enabled:
        manager.discover_and_load(disabled=settings.plugins.disabled)
    return manager


_default_manager: PluginManager | None = None
_default_lock = threading.Lock()


def get_plugin_manager() -> PluginManager:
    """Return the process-wide manager, building it from settings on first use."""
    global _default_manager
    manager = _default_manager
    if manager is not None:
        return manager
    with _default_lock:
        if _default_manager is None:
            _default_manager = load_plugin_manager()
        return _default_manager


def set_plugin_manager(manager: PluginManager | None) -> None:
    """Install *manager* as the process-wide manager.

    Passing None drops the current one so the next lookup rebuilds it.
    """
    global _default_manager
    with _default_lock:
        _default_manager = manager
