"""Safe values and the concatenation engine.

A :class:`Safe` wraps content that may be emitted verbatim: either it was
escaped by :func:`escape`, or a caller vouched for it with :func:`wrap`.
Everything else is raw and gets escaped on its way into a Safe.

INVARIANT: Safe instances are only produced by ``wrap``, ``escape`` and
``concat``. Direct instantiation raises ``TypeError``.
INVARIANT: content that was already Safe is never escaped again.
"""

from __future__ import annotations

from collections.abc import Iterator
from functools import reduce
from typing import Any

from htmlsafe.domain.content import to_content
from htmlsafe.domain.errors import UnsafeWrapError
from htmlsafe.domain.escaper import Content, escape_content, escape_text, freeze_content

_UNSET: Any = object()


class Safe:
    """Immutable marker for content that is safe to emit as HTML.

    Attributes:
        content: ``str``, ``bytes``, a code point ``int``, or a nested
            list/tuple of those.
    """

    __slots__ = ("content",)

    content: Content

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        msg = "Safe values are created with wrap(), escape() or concat()"
        raise TypeError(msg)

    @classmethod
    def _from_content(cls, content: Content) -> Safe:
        obj = object.__new__(cls)
        object.__setattr__(obj, "content", content)
        return obj

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Safe values are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Safe values are immutable")

    def __reduce__(self) -> tuple[Any, tuple[Content]]:
        return wrap, (self.content,)

    def __repr__(self) -> str:
        return f"Safe({self.content!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Safe):
            return NotImplemented
        return self.content == other.content

    def __hash__(self) -> int:
        return hash(tuple(self.fragments()))

    def __add__(self, other: Any) -> Safe:
        return concat(self, other)

    def __radd__(self, other: Any) -> Safe:
        return concat(other, self)

    def __str__(self) -> str:
        return self.to_str()

    def __html__(self) -> str:
        """Render for template engines that honour the ``__html__`` protocol."""
        return self.to_str()

    def fragments(self) -> Iterator[str | bytes | int]:
        """Yield the flat, in-order buffers and code points of the content."""
        yield from _walk(self.content)

    def to_str(self, encoding: str = "utf-8") -> str:
        """Flatten to text. Byte fragments are decoded with *encoding*."""
        parts: list[str] = []
        for fragment in self.fragments():
            if isinstance(fragment, str):
                parts.append(fragment)
            elif isinstance(fragment, bytes):
                parts.append(fragment.decode(encoding))
            else:
                parts.append(chr(fragment))
        return "".join(parts)

    def to_bytes(self, encoding: str = "utf-8") -> bytes:
        """Flatten to bytes. Text fragments are encoded with *encoding*."""
        parts: list[bytes] = []
        for fragment in self.fragments():
            if isinstance(fragment, bytes):
                parts.append(fragment)
            elif isinstance(fragment, str):
                parts.append(fragment.encode(encoding))
            else:
                parts.append(chr(fragment).encode(encoding))
        return b"".join(parts)


def _walk(content: Any) -> Iterator[str | bytes | int]:
    if isinstance(content, Safe):
        yield from _walk(content.content)
    elif isinstance(content, (list, tuple)):
        for item in content:
            yield from _walk(item)
    else:
        yield content


@to_content.register(Safe)
def _safe_content(value: Safe) -> Content:
    return value.content


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------


def wrap(value: Any) -> Safe:
    """Mark *value* as safe without escaping it.

    This is a trust assertion: only use it for content that is already
    sanitised. Wrapping an existing Safe returns it unchanged.

    Examples:
        >>> wrap("<b>")
        Safe('<b>')
        >>> wrap(wrap("<b>"))
        Safe('<b>')

    Raises:
        UnsafeWrapError: If *value* is not a ``str``, ``bytes``, ``list``,
            ``tuple`` or Safe.
    """
    if isinstance(value, Safe):
        return value
    if isinstance(value, (str, bytes, list, tuple)):
        return Safe._from_content(value)
    msg = f"wrap() expects str, bytes, list, tuple or Safe, got {type(value).__name__!r}"
    raise UnsafeWrapError(msg)


def escape(value: Any) -> Safe:
    """Escape *value* and return it as a Safe.

    Safe values come back unchanged. Any other value is converted with
    :func:`~htmlsafe.domain.content.to_content` before escaping; sequences
    come back as tuples, so the Safe never shares a caller's list.

    Examples:
        >>> escape("<hello>")
        Safe('&lt;hello&gt;')
        >>> escape(1)
        Safe('1')
        >>> escape([60, 104, 62])
        Safe(('&lt;', 104, '&gt;'))
    """
    if isinstance(value, Safe):
        return value
    if isinstance(value, str):
        return Safe._from_content(escape_text(value))
    return Safe._from_content(escape_content(to_content(value), _escaped_content))


def _escaped_content(value: Any) -> Content:
    return freeze_content(escape(value).content)


def _join(left: Content, right: Content) -> Content:
    """Join two contents: same-kind buffers merge, anything else nests one level."""
    left = freeze_content(left)
    right = freeze_content(right)
    if isinstance(left, (str, bytes)) and not left:
        return right
    if isinstance(right, (str, bytes)) and not right:
        return left
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    if isinstance(left, bytes) and isinstance(right, bytes):
        return left + right
    return (left, right)


def concat(left: Any, right: Any = _UNSET) -> Safe:
    """Concatenate values into one Safe, escaping only the raw ones.

    With two arguments, each side is classified on its own:

    - Safe + Safe: contents joined verbatim.
    - Safe + raw / raw + Safe: the raw side is escaped, then joined.
    - raw + raw: both escaped independently, then joined.

    With a single list or tuple argument, its items are folded left to
    right with the pairwise rule, starting from ``wrap("")``.

    Examples:
        >>> concat(wrap("<hello>"), "<world>")
        Safe('<hello>&lt;world&gt;')
        >>> concat(["<hello>", wrap("safe"), "<world>"])
        Safe('&lt;hello&gt;safe&lt;world&gt;')
    """
    if right is _UNSET:
        if not isinstance(left, (list, tuple)):
            msg = f"concat() expects a list or tuple, got {type(left).__name__!r}"
            raise TypeError(msg)
        return reduce(concat, left, Safe._from_content(""))
    return Safe._from_content(_join(escape(left).content, escape(right).content))
