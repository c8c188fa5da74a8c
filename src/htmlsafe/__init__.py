"""htmlsafe — safe/unsafe HTML values with escaping and concatenation."""

from htmlsafe.domain.content import Escapable, register_content, to_content
from htmlsafe.domain.errors import HtmlSafeError, NotEscapableError, UnsafeWrapError
from htmlsafe.domain.escaper import escape_content
from htmlsafe.domain.safe import Safe, concat, escape, wrap

__version__ = "0.3.0"

__all__ = [
    "Escapable",
    "HtmlSafeError",
    "NotEscapableError",
    "Safe",
    "UnsafeWrapError",
    "__version__",
    "concat",
    "escape",
    "escape_content",
    "register_content",
    "to_content",
    "wrap",
]
