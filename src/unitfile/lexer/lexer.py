"""Unit-file lexer: a byte-level state machine over a ``Scanner``.

The lexer walks a small set of named states, one step at a time, and
yields a ``LexEvent`` whenever a section header or an option has been
fully recognised.  Before every step the scanner's line-length guard is
re-checked, because a value continued with trailing backslashes may grow
across many steps.

States
------
SEEK_SECTION
    Skip bytes until ``[`` or a comment marker.  End of input is clean.
SECTION_NAME
    Read through ``]``; the bytes in between are the section name.
SECTION_SUFFIX
    The rest of the header line must be blank.
SEEK_SECTION_OR_OPTION
    Skip whitespace, one character at a time so that Unicode spaces
    such as NBSP count; ``[`` opens a new section, a comment marker
    skips a comment, anything else starts an option name.  End of input
    is clean.
OPTION_NAME
    Accumulate bytes up to ``=``.
OPTION_VALUE
    Read one physical line of the value; trailing ``\\`` continues it.
COMMENT_SKIP
    Discard a comment, including continuation lines, then resume the
    state that entered it.

Section names, keys, and values are not validated: any byte other than
the delimiters above is accepted verbatim.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum, auto
from typing import BinaryIO

from unitfile.errors import OptionNameError, SectionError, UnexpectedEOFError
from unitfile.grammar.tokens import (
    ASSIGN,
    COMMENT_MARKERS,
    CONTINUATION,
    CR,
    DEFAULT_BUFFER_SIZE,
    LF,
    LINE_MAX,
    SECTION_CLOSE,
    SECTION_OPEN,
    EventType,
    LexEvent,
    decode,
    is_space,
    trim,
    trim_bytes,
)
from unitfile.lexer.scanner import Scanner

logger = logging.getLogger(__name__)


class LexState(Enum):
    """Named states of the unit-file lexer."""

    SEEK_SECTION = auto()
    SECTION_NAME = auto()
    SECTION_SUFFIX = auto()
    SEEK_SECTION_OR_OPTION = auto()
    OPTION_NAME = auto()
    OPTION_VALUE = auto()
    COMMENT_SKIP = auto()
    DONE = auto()


def _is_comment(byte: bytes) -> bool:
    return len(byte) == 1 and byte in COMMENT_MARKERS


class Lexer:
    """Single-pass, pull-based unit-file lexer.

    Parameters
    ----------
    stream:
        Binary stream containing unit-file text.
    line_max:
        Length guard; an unterminated buffered line of this many bytes
        aborts the lex with ``LineTooLongError``.
    buffer_size:
        Chunk size the scanner reads from ``stream``.
    """

    __slots__ = (
        "_scanner",
        "_line_max",
        "_state",
        "_section",
        "_option",
        "_value",
        "_resume",
        "_started",
    )

    def __init__(
        self,
        stream: BinaryIO,
        line_max: int = LINE_MAX,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._scanner = Scanner(stream, buffer_size=buffer_size)
        self._line_max = line_max
        self._state = LexState.SEEK_SECTION
        self._section: bytes = b""
        self._option: bytes = b""
        self._value = bytearray()
        self._resume = LexState.SEEK_SECTION
        self._started = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> LexState:
        """The state the next step will run."""
        return self._state

    def events(self) -> Iterator[LexEvent]:
        """Lex the stream, yielding events in input order.

        The generator can be consumed only once.  It stops cleanly at end
        of input in either seek state and raises on the first error.

        Raises
        ------
        unitfile.errors.LexError
            On malformed headers, newlines in option names, overlong
            lines, or end of input in the middle of a token.
        OSError
            Propagated unchanged from the underlying stream.
        """
        if self._started:
            raise RuntimeError("Lexer.events() can only be consumed once")
        self._started = True

        steps = {
            LexState.SEEK_SECTION: self._seek_section,
            LexState.SECTION_NAME: self._section_name,
            LexState.SECTION_SUFFIX: self._section_suffix,
            LexState.SEEK_SECTION_OR_OPTION: self._seek_section_or_option,
            LexState.OPTION_NAME: self._option_name,
            LexState.OPTION_VALUE: self._option_value,
            LexState.COMMENT_SKIP: self._comment_skip,
        }
        while self._state is not LexState.DONE:
            self._scanner.check_line_length(self._line_max)
            event = steps[self._state]()
            if event is not None:
                yield event

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, event_type: EventType, name: bytes | None = None, value: str | None = None) -> LexEvent:
        return LexEvent(
            type=event_type,
            section=decode(self._section),
            name=decode(name) if name is not None else None,
            value=value,
            line=self._scanner.line,
            offset=self._scanner.offset,
        )

    def _enter_comment(self, resume: LexState) -> None:
        self._resume = resume
        self._state = LexState.COMMENT_SKIP

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def _seek_section(self) -> LexEvent | None:
        byte = self._scanner.read_byte()
        if not byte:
            self._state = LexState.DONE
        elif byte == SECTION_OPEN:
            self._state = LexState.SECTION_NAME
        elif _is_comment(byte):
            self._enter_comment(LexState.SEEK_SECTION)
        return None

    def _section_name(self) -> LexEvent | None:
        raw, found = self._scanner.read_until(SECTION_CLOSE)
        if not found:
            raise SectionError(
                "unable to find end of section", self._scanner.line, self._scanner.offset
            )
        self._section = raw[:-1]
        self._state = LexState.SECTION_SUFFIX
        return None

    def _section_suffix(self) -> LexEvent | None:
        garbage, _ = self._scanner.read_line()
        garbage = trim_bytes(garbage)
        if garbage:
            raise SectionError(
                f"found garbage after section name {decode(self._section)}: {decode(garbage)!r}",
                self._scanner.line,
                self._scanner.offset,
            )
        logger.debug("Section [%s] at line %d", decode(self._section), self._scanner.line)
        self._state = LexState.SEEK_SECTION_OR_OPTION
        return self._emit(EventType.SECTION_START)

    def _seek_section_or_option(self) -> LexEvent | None:
        char = self._scanner.read_rune()
        if not char:
            self._state = LexState.DONE
        elif is_space(char):
            pass
        elif char == SECTION_OPEN:
            self._state = LexState.SECTION_NAME
        elif _is_comment(char):
            self._enter_comment(LexState.SEEK_SECTION_OR_OPTION)
        else:
            self._scanner.unread_byte()
            self._state = LexState.OPTION_NAME
        return None

    def _option_name(self) -> LexEvent | None:
        partial = bytearray()
        start_line = self._scanner.line
        while True:
            byte = self._scanner.read_byte()
            if not byte:
                raise UnexpectedEOFError(
                    "unexpected end of input while parsing option name",
                    start_line,
                    self._scanner.offset,
                )
            if byte in (LF, CR):
                raise OptionNameError(
                    "unexpected newline encountered while parsing option name",
                    start_line,
                    self._scanner.offset,
                )
            if byte == ASSIGN:
                break
            partial += byte
        self._option = trim_bytes(bytes(partial))
        self._value = bytearray()
        self._state = LexState.OPTION_VALUE
        return None

    def _option_value(self) -> LexEvent | None:
        line, at_eof = self._scanner.read_line()
        if trim_bytes(line):
            self._value += line
            if line.endswith(CONTINUATION):
                if not at_eof:
                    self._value += LF
                # Each continued line is lexed as its own step.
                return None

        value = decode(bytes(self._value))
        if value.endswith("\n"):
            # The last continued line was followed by a newline and then
            # nothing; keep exactly one trailing newline.
            value = trim(value) + "\n"
        else:
            value = trim(value)
        self._state = LexState.SEEK_SECTION_OR_OPTION
        return self._emit(EventType.OPTION, self._option, value)

    def _comment_skip(self) -> LexEvent | None:
        while True:
            line, _ = self._scanner.read_line()
            if line.endswith(b" "):
                line = line[:-1]
            if not line.endswith(CONTINUATION):
                break
        self._state = self._resume
        return None


def tokenize(
    stream: BinaryIO,
    line_max: int = LINE_MAX,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> Iterator[LexEvent]:
    """Return the lazy event stream for a unit file.

    Parameters
    ----------
    stream:
        Binary stream containing unit-file text.
    line_max:
        Line-length guard in bytes.
    buffer_size:
        Scanner chunk size.

    Example
    -------
    ::

        import io
        from unitfile.lexer import tokenize

        for event in tokenize(io.BytesIO(b"[Unit]\\nDescription=Foo\\n")):
            print(event)
    """
    return Lexer(stream, line_max=line_max, buffer_size=buffer_size).events()
