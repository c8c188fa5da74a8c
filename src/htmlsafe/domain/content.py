"""Escapable capability — converting domain values into content.

Conversion never escapes. It only produces a content shape (text, bytes,
code points, sequences) that :func:`htmlsafe.domain.safe.escape` then runs
through the escaper.

Resolution order for :func:`to_content`:

1. Types registered on the ``singledispatch`` function, both the built-ins
   below and anything added with :func:`register_content`.
2. Objects implementing the :class:`Escapable` protocol.
3. Plugins implementing the ``htmlsafe_to_content`` hook.

Anything left over raises :class:`NotEscapableError`.
"""

from __future__ import annotations

import datetime
import numbers
from collections.abc import Callable
from enum import Enum
from functools import singledispatch
from typing import Any, Protocol, TypeVar, runtime_checkable

from htmlsafe.domain.errors import NotEscapableError
from htmlsafe.domain.escaper import Content

T = TypeVar("T")


@runtime_checkable
class Escapable(Protocol):
    """Anything that can describe itself as (unescaped) content."""

    def to_content(self) -> Content:
        """Return this value as content. The result is escaped by the caller."""
        ...


@singledispatch
def to_content(value: Any) -> Content:
    """Convert *value* into content without escaping it.

    Raises:
        NotEscapableError: If no conversion is known for ``type(value)``.
    """
    if isinstance(value, Escapable):
        return value.to_content()

    from htmlsafe.plugins.manager import get_plugin_manager

    result = get_plugin_manager().hook.htmlsafe_to_content(value=value)
    if result is not None:
        return result

    msg = f"No content conversion registered for {type(value).__name__!r}"
    raise NotEscapableError(msg)


def register_content(cls: type[T]) -> Callable[[Callable[[T], Content]], Callable[[T], Content]]:
    """Decorator registering a content conversion for *cls* and its subclasses.

    Example::

        @register_content(Money)
        def _money(value: Money) -> str:
            return f"{value.amount} {value.currency}"
    """
    return to_content.register(cls)


# ---------------------------------------------------------------------------
# Built-in conversions
# ---------------------------------------------------------------------------


@to_content.register(str)
@to_content.register(bytes)
@to_content.register(list)
@to_content.register(tuple)
def _identity(value: Content) -> Content:
    return value


@to_content.register(bytearray)
@to_content.register(memoryview)
def _buffer(value: bytearray | memoryview) -> bytes:
    return bytes(value)


@to_content.register(type(None))
def _none(value: None) -> str:
    return ""


@to_content.register(bool)
def _bool(value: bool) -> str:
    return "true" if value else "false"


# IntEnum members must dispatch to int, ahead of Enum.
@to_content.register(int)
@to_content.register(float)
@to_content.register(numbers.Number)
def _number(value: numbers.Number) -> str:
    return str(value)


@to_content.register(datetime.date)
@to_content.register(datetime.time)
def _iso(value: datetime.date | datetime.time) -> str:
    return value.isoformat()


@to_content.register(Enum)
def _enum(value: Enum) -> Content:
    return to_content(value.value)
