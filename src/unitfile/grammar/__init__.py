"""Unit-file grammar module.

Exports the lexer event vocabulary and the byte-level constants of the format.
"""
from __future__ import annotations

from unitfile.grammar.tokens import (
    COMMENT_MARKERS,
    CONTINUATION,
    LINE_MAX,
    NEWLINE_BYTES,
    WHITESPACE,
    EventType,
    LexEvent,
)

__all__ = [
    "EventType",
    "LexEvent",
    "LINE_MAX",
    "NEWLINE_BYTES",
    "COMMENT_MARKERS",
    "CONTINUATION",
    "WHITESPACE",
]
