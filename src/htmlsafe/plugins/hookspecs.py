"""Pluggy hook specifications for htmlsafe extensions.

One conversion hook lets installed packages teach ``escape()`` how to turn
their own types into content, without the types implementing ``to_content``
themselves.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("htmlsafe")
hookimpl = pluggy.HookimplMarker("htmlsafe")


class HtmlSafeHookSpec:
    """Hook specifications for the htmlsafe plugin system."""

    @hookspec(firstresult=True)
    def htmlsafe_to_content(self, value: Any) -> Any:
        """Return *value* as unescaped content, or None to defer to other plugins."""
