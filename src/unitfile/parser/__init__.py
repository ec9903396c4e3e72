"""Unit-file parser module.

Exports the ``Parser`` and ``Aggregator`` classes, the ``parse_*``
convenience functions, and the parse error types.
"""
from __future__ import annotations

from unitfile.errors import MisparseError, ParseError
from unitfile.parser.parser import (
    Aggregator,
    Parser,
    ParseResult,
    deserialize,
    parse,
    parse_options,
    parse_sections,
)

__all__ = [
    "Aggregator",
    "Parser",
    "ParseResult",
    "parse",
    "parse_options",
    "parse_sections",
    "deserialize",
    "ParseError",
    "MisparseError",
]
