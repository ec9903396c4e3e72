"""Error types raised while reading unit files.

Lexer errors carry the line and byte offset at which scanning stopped so
that the CLI can point at the offending input.  ``ParseError`` wraps any
failure of a parse call together with the records that were completed
before it, since a parse never recovers from its first error.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from unitfile.grammar.tokens import LINE_MAX

if TYPE_CHECKING:
    from unitfile.ast.nodes import UnitOption, UnitSection


class UnitError(Exception):
    """Base class for every error raised by this package."""


class LexError(UnitError):
    """Raised when the lexer encounters malformed input.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    line:
        1-based line number where the error occurred.
    offset:
        0-based byte offset in the input where the error occurred.
    """

    def __init__(self, message: str, line: int, offset: int) -> None:
        super().__init__(f"LexError at line {line} (offset {offset}): {message}")
        self.lex_message = message
        self.line = line
        self.offset = offset


class LineTooLongError(LexError):
    """A buffered line exceeds the systemd line-length limit."""

    def __init__(self, line: int, offset: int, limit: int = LINE_MAX) -> None:
        super().__init__(f"line too long (max {limit} bytes)", line, offset)
        self.limit = limit


class SectionError(LexError):
    """A section header is unterminated or followed by garbage."""


class OptionNameError(LexError):
    """A line break appeared before the ``=`` of an option."""


class UnexpectedEOFError(LexError):
    """Input ended in the middle of a token."""


class MisparseError(UnitError):
    """The event stream violated the section-before-option ordering."""


@dataclass(eq=False)
class ParseError(UnitError):
    """A parse call failed; carries the results produced before the failure.

    Parameters
    ----------
    cause:
        The lexer, consistency, or I/O error that stopped the parse.
    sections:
        Section blocks completed before the error.
    options:
        Flat option records completed before the error.
    """

    cause: Exception
    sections: list["UnitSection"] = field(default_factory=list)
    options: list["UnitOption"] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.args = (str(self),)

    def __str__(self) -> str:
        return (
            f"ParseError: {self.cause} "
            f"(after {len(self.sections)} section(s), {len(self.options)} option(s))"
        )
