"""Lexical vocabulary for the systemd unit-file format.

Defines the byte-level constants the scanner and lexer agree on, and the
``LexEvent`` record the lexer yields to the parser.  The lexer works on
raw bytes; text is decoded only when an event is emitted, using UTF-8
with ``surrogateescape`` so that arbitrary input bytes survive a
parse/serialize round trip unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

# systemd truncates lines longer than LINE_MAX; on modern Linux that is 2048.
LINE_MAX: Final[int] = 2048

DEFAULT_BUFFER_SIZE: Final[int] = 4096

# ---------------------------------------------------------------------------
# Delimiters
# ---------------------------------------------------------------------------

NEWLINE_BYTES: Final[bytes] = b"\r\n"
LF: Final[bytes] = b"\n"
CR: Final[bytes] = b"\r"
COMMENT_MARKERS: Final[bytes] = b"#;"
CONTINUATION: Final[bytes] = b"\\"
SECTION_OPEN: Final[bytes] = b"["
SECTION_CLOSE: Final[bytes] = b"]"
ASSIGN: Final[bytes] = b"="

# ---------------------------------------------------------------------------
# Text codec
# ---------------------------------------------------------------------------

TEXT_ENCODING: Final[str] = "utf-8"
TEXT_ERRORS: Final[str] = "surrogateescape"


def decode(raw: bytes) -> str:
    """Decode raw unit-file bytes without ever failing."""
    return raw.decode(TEXT_ENCODING, TEXT_ERRORS)


def encode(text: str) -> bytes:
    """Inverse of :func:`decode`."""
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


# ---------------------------------------------------------------------------
# Whitespace
# ---------------------------------------------------------------------------

# ASCII \t \n \v \f \r and space, NEL, NBSP, and the Unicode space
# separators.  The \x1c-\x1f information separators that ``str.isspace``
# also accepts are not whitespace here and stay in names and values.
WHITESPACE: Final[str] = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def trim(text: str) -> str:
    """Strip leading and trailing ``WHITESPACE`` characters."""
    return text.strip(WHITESPACE)


def trim_bytes(raw: bytes) -> bytes:
    """Byte-level :func:`trim`; bytes that are not valid UTF-8 are kept."""
    return encode(trim(decode(raw)))


def is_space(raw: bytes) -> bool:
    """True when ``raw`` encodes exactly one ``WHITESPACE`` character."""
    text = decode(raw)
    return len(text) == 1 and text in WHITESPACE


# ---------------------------------------------------------------------------
# Lexer events
# ---------------------------------------------------------------------------


class EventType(Enum):
    """The two things the lexer can report."""

    SECTION_START = auto()
    OPTION = auto()


@dataclass(frozen=True, slots=True)
class LexEvent:
    """A single event produced by the lexer.

    Parameters
    ----------
    type:
        Whether a section header or an option was recognised.
    section:
        Name of the section the event belongs to.
    name:
        Option key; ``None`` for ``SECTION_START`` events.
    value:
        Option value; ``None`` for ``SECTION_START`` events.
    line:
        1-based line number at which the event was completed.
    offset:
        0-based byte offset at which the event was completed.
    """

    type: EventType
    section: str
    name: str | None = None
    value: str | None = None
    line: int = 0
    offset: int = 0

    def __repr__(self) -> str:
        if self.type is EventType.SECTION_START:
            return f"LexEvent(SECTION_START, {self.section!r}, {self.line})"
        return (
            f"LexEvent(OPTION, {self.section!r}, {self.name!r}={self.value!r}, "
            f"{self.line})"
        )
