"""Entity escaping for text buffers, byte buffers, and nested sequences.

Buffer escaping follows a scan-then-decide rule: when nothing needs
substituting, the input buffer itself is returned. Callers rely on identity
(``escape_text(s) is s``) to skip copies on the hot path.

Sequence escaping is structural and always freezes: lists and tuples come
back as new tuples, recursively, so later changes to a caller's list cannot
reach escaped content. The result has the same length and ordering as the
input; a code point that needs substituting becomes its entity string at
the same position.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from htmlsafe.domain.entities import (
    BYTE_ENTITIES,
    BYTES_PATTERN,
    CODEPOINT_ENTITIES,
    ENTITIES,
    TEXT_PATTERN,
)
from htmlsafe.domain.errors import NotEscapableError

Content = str | bytes | int | list[Any] | tuple[Any, ...]
"""Recursive content shape: buffers, code points, and nested sequences."""

Fallback = Callable[[Any], Content]

MAX_CODEPOINT = 0x10FFFF


def _text_entity(match: re.Match[str]) -> str:
    return ENTITIES[match.group()]


def _bytes_entity(match: re.Match[bytes]) -> bytes:
    return BYTE_ENTITIES[match.group()]


def escape_text(value: str) -> str:
    """Escape markup-significant characters in *value*.

    Examples:
        >>> escape_text("<hello>")
        '&lt;hello&gt;'
        >>> escape_text("plain")
        'plain'
    """
    if TEXT_PATTERN.search(value) is None:
        return value
    return TEXT_PATTERN.sub(_text_entity, value)


def escape_bytes(value: bytes) -> bytes:
    """Byte-buffer counterpart of :func:`escape_text` (entities stay ASCII)."""
    if BYTES_PATTERN.search(value) is None:
        return value
    return BYTES_PATTERN.sub(_bytes_entity, value)


def escape_codepoint(value: int) -> str | int:
    """Map a single code point to its entity, or return it unchanged.

    Raises:
        NotEscapableError: If *value* is not a valid Unicode code point.
    """
    if not 0 <= value <= MAX_CODEPOINT:
        msg = f"Code point {value} is outside 0..{MAX_CODEPOINT:#x}"
        raise NotEscapableError(msg)
    return CODEPOINT_ENTITIES.get(value, value)


def escape_sequence(
    items: list[Any] | tuple[Any, ...],
    fallback: Fallback | None = None,
) -> tuple[Any, ...]:
    """Escape every element of *items* into a new tuple, position for position.

    Nested lists and tuples are escaped (and frozen) recursively.
    """
    return tuple(escape_content(item, fallback) for item in items)


def escape_content(content: Any, fallback: Fallback | None = None) -> Content:
    """Escape any content shape.

    Args:
        content: A ``str``, ``bytes``, code point ``int``, or a (nested)
            list/tuple of those.
        fallback: Called for elements that are not content, e.g. domain
            objects or ``Safe`` values embedded in a sequence. Its return
            value is spliced in unchanged, so it must already be escaped.

    Raises:
        NotEscapableError: If a non-content element is found and no
            *fallback* was given.
    """
    if isinstance(content, str):
        return escape_text(content)
    if isinstance(content, bytes):
        return escape_bytes(content)
    if isinstance(content, int) and not isinstance(content, bool):
        return escape_codepoint(content)
    if isinstance(content, (list, tuple)):
        return escape_sequence(content, fallback)
    if fallback is None:
        msg = f"Cannot escape {type(content).__name__!r} as content"
        raise NotEscapableError(msg)
    return fallback(content)


def freeze_content(content: Content) -> Content:
    """Return *content* with every list turned into a tuple, without escaping.

    Used for already-trusted content that is spliced into a new Safe.
    Buffers and code points pass through untouched.
    """
    if isinstance(content, (list, tuple)):
        return tuple(freeze_content(item) for item in content)
    return content
