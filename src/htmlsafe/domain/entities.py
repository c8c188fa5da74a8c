"""HTML entity substitution table.

Five markup-significant characters are replaced by named or numeric entity
references. The table is exposed in three shapes so each buffer kind can be
scanned without converting between text and bytes.
"""

from __future__ import annotations

import re

ENTITIES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

BYTE_ENTITIES: dict[bytes, bytes] = {
    char.encode("ascii"): entity.encode("ascii") for char, entity in ENTITIES.items()
}

CODEPOINT_ENTITIES: dict[int, str] = {ord(char): entity for char, entity in ENTITIES.items()}

TEXT_PATTERN: re.Pattern[str] = re.compile("[&<>\"']")
BYTES_PATTERN: re.Pattern[bytes] = re.compile(b"[&<>\"']")
