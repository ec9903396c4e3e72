"""Unit-file parser: folds the lexer's event stream into records.

The ``Parser`` pulls events from the lexer one at a time and builds both
result views in a single pass.  Every ``SECTION_START`` event opens a new
block, even when a block of the same name is already open, so duplicate
sections such as repeated ``[Route]`` headers survive intact.

A parse stops at its first error.  The error is re-raised as a
``ParseError`` that carries everything completed before the failure,
chained to the original lexer or I/O error.
"""
from __future__ import annotations

import io
import logging
import warnings
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import BinaryIO, Union

from unitfile.ast.nodes import UnitEntry, UnitOption, UnitSection
from unitfile.errors import MisparseError, ParseError, UnitError
from unitfile.grammar.tokens import (
    DEFAULT_BUFFER_SIZE,
    LINE_MAX,
    EventType,
    LexEvent,
    encode,
)
from unitfile.lexer.lexer import Lexer

logger = logging.getLogger(__name__)

Source = Union[BinaryIO, bytes, bytearray, str]


@dataclass
class ParseResult:
    """Both views of one parsed unit file."""

    sections: list[UnitSection] = field(default_factory=list)
    options: list[UnitOption] = field(default_factory=list)


def _as_stream(source: Source) -> BinaryIO:
    if isinstance(source, str):
        return io.BytesIO(encode(source))
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return source


class Aggregator:
    """Folds a lexer event sequence into sections and options.

    One instance handles one event sequence; both views are built in the
    same pass.
    """

    def __init__(self) -> None:
        self._sections: list[UnitSection] = []
        self._entries: list[UnitEntry] = []
        self._options: list[UnitOption] = []

    def _close_section(self) -> None:
        if self._sections:
            last = self._sections[-1]
            self._sections[-1] = UnitSection(last.section, tuple(self._entries))
        self._entries = []

    def consume(self, events: Iterable[LexEvent]) -> ParseResult:
        """Drain ``events`` and return both views.

        Raises
        ------
        ParseError
            On any lexer error, ordering violation, or stream ``OSError``;
            the error carries the partial results.
        """
        try:
            for event in events:
                if event.type is EventType.SECTION_START:
                    self._close_section()
                    self._sections.append(UnitSection(event.section))
                    continue

                if not self._sections:
                    raise MisparseError("unit file misparse: option before section")
                option = UnitOption(event.section, event.name or "", event.value or "")
                self._options.append(option)
                self._entries.append(option.entry)
        except (UnitError, OSError) as exc:
            self._close_section()
            logger.debug("Parse failed after %d section(s): %s", len(self._sections), exc)
            raise ParseError(exc, self._sections, self._options) from exc

        self._close_section()
        logger.debug(
            "Parsed %d section(s), %d option(s)", len(self._sections), len(self._options)
        )
        return ParseResult(self._sections, self._options)


class Parser:
    """Runs the lexer over a source and aggregates its events.

    Parameters
    ----------
    source:
        A binary stream, or unit-file content as ``bytes`` or ``str``.
    line_max:
        Line-length guard passed to the lexer.
    buffer_size:
        Scanner chunk size passed to the lexer.
    """

    def __init__(
        self,
        source: Source,
        line_max: int = LINE_MAX,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._lexer = Lexer(_as_stream(source), line_max=line_max, buffer_size=buffer_size)

    def parse(self) -> ParseResult:
        """Consume the whole input and return both views.

        Returns
        -------
        ParseResult
            Section blocks and flat options, in input order.

        Raises
        ------
        ParseError
            If the input is malformed or the stream fails.
        """
        return Aggregator().consume(self._lexer.events())


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def parse(source: Source) -> ParseResult:
    """Parse a unit file into both its section and option views."""
    return Parser(source).parse()


def parse_options(source: Source) -> list[UnitOption]:
    """Parse a unit file into flat ``UnitOption`` records.

    Example
    -------
    ::

        from unitfile.parser import parse_options

        with open("foo.service", "rb") as fh:
            for opt in parse_options(fh):
                print(opt.section, opt.name, opt.value)
    """
    return Parser(source).parse().options


def parse_sections(source: Source) -> list[UnitSection]:
    """Parse a unit file into ``UnitSection`` blocks, duplicates kept."""
    return Parser(source).parse().sections


def deserialize(source: Source) -> list[UnitOption]:
    """Deprecated alias of :func:`parse_options`."""
    return _deprecated_parse_options(source, stacklevel=3)


def _deprecated_parse_options(source: Source, stacklevel: int) -> list[UnitOption]:
    # ``stacklevel`` counts from this function, so the warning names the
    # caller of whichever public alias was used.
    warnings.warn(
        "deserialize() is deprecated; use parse_options() instead",
        DeprecationWarning,
        stacklevel=stacklevel,
    )
    return parse_options(source)
