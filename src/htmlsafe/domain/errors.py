"""Exception types raised by the domain layer."""

from __future__ import annotations


class HtmlSafeError(Exception):
    """Base class for every error raised by htmlsafe."""


class UnsafeWrapError(HtmlSafeError, TypeError):
    """``wrap()`` was given a value that is not a buffer, sequence, or Safe."""


class NotEscapableError(HtmlSafeError, TypeError):
    """No content conversion is registered for a value passed to ``escape()``."""
