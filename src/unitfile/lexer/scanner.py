"""Buffered byte reader used by the unit-file lexer.

The ``Scanner`` reads its input in fixed-size chunks and exposes the small
set of primitives the lexer needs: single-byte and single-character
reads with one step of push-back, delimiter-bounded reads, and physical-line reads.  It also owns
the line-length guard, which inspects only what is currently buffered so
that an unterminated line is rejected without reading the whole stream.
"""
from __future__ import annotations

from typing import BinaryIO

from unitfile.errors import LineTooLongError
from unitfile.grammar.tokens import CR, DEFAULT_BUFFER_SIZE, LF, LINE_MAX, TEXT_ENCODING


def _sequence_length(lead: int) -> int:
    """Length of the UTF-8 sequence announced by ``lead``; 1 if invalid."""
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 1


class Scanner:
    """Chunked reader over a binary stream.

    Parameters
    ----------
    stream:
        Any object with a ``read(n) -> bytes`` method.
    buffer_size:
        Number of bytes requested from ``stream`` per fill.
    """

    __slots__ = ("_stream", "_buf", "_pos", "_eof", "_buffer_size", "_offset", "_line", "_last")

    def __init__(self, stream: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self._stream = stream
        self._buf = bytearray()
        self._pos: int = 0
        self._eof: bool = False
        self._buffer_size = buffer_size
        self._offset: int = 0
        self._line: int = 1
        self._last: bytes | None = None

    # ------------------------------------------------------------------
    # Position tracking
    # ------------------------------------------------------------------

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._offset

    @property
    def line(self) -> int:
        """1-based line number of the next unconsumed byte."""
        return self._line

    @property
    def buffered(self) -> int:
        """Number of bytes read from the stream but not yet consumed."""
        return len(self._buf) - self._pos

    # ------------------------------------------------------------------
    # Buffer management
    # ------------------------------------------------------------------

    def _fill(self) -> bool:
        """Read one more chunk; return False once the stream is exhausted."""
        if self._eof:
            return False
        if self._pos:
            del self._buf[: self._pos]
            self._pos = 0
        chunk = self._stream.read(self._buffer_size)
        if not chunk:
            self._eof = True
            return False
        self._buf += chunk
        return True

    def _consume(self, n: int) -> bytes:
        data = bytes(self._buf[self._pos : self._pos + n])
        self._pos += n
        self._offset += n
        self._line += data.count(LF)
        self._last = None
        return data

    def peek(self, n: int) -> bytes:
        """Return up to ``n`` unconsumed bytes without consuming them."""
        while self.buffered < n and self._fill():
            pass
        return bytes(self._buf[self._pos : self._pos + n])

    def check_line_length(self, limit: int = LINE_MAX) -> None:
        """Reject an unterminated line of ``limit`` or more buffered bytes.

        Raises
        ------
        LineTooLongError
            If at least ``limit`` bytes are buffered and none of the first
            ``limit`` of them is a line terminator.
        """
        if self.buffered < limit:
            return
        window = self.peek(limit)
        if LF not in window and CR not in window:
            raise LineTooLongError(self._line, self._offset, limit)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_byte(self) -> bytes:
        """Consume one byte; return ``b""`` at end of input."""
        if self.buffered == 0 and not self._fill():
            return b""
        data = self._consume(1)
        self._last = data
        return data

    def read_rune(self) -> bytes:
        """Consume one UTF-8 encoded character; return ``b""`` at end of input.

        A byte that does not start a complete, valid UTF-8 sequence is
        returned on its own, so malformed input is still consumed one
        byte at a time.
        """
        head = self.peek(1)
        if not head:
            return b""
        size = _sequence_length(head[0])
        if size > 1:
            try:
                self.peek(size).decode(TEXT_ENCODING)
            except UnicodeDecodeError:
                size = 1
        data = self._consume(size)
        self._last = data
        return data

    def unread_byte(self) -> None:
        """Push back the result of the last ``read_byte`` or ``read_rune`` call."""
        if self._last is None or self._pos < len(self._last):
            raise RuntimeError("unread_byte called without a preceding read")
        self._pos -= len(self._last)
        self._offset -= len(self._last)
        self._line -= self._last.count(LF)
        self._last = None

    def read_until(self, delim: bytes) -> tuple[bytes, bool]:
        """Consume through the next ``delim`` byte.

        Returns
        -------
        tuple[bytes, bool]
            The bytes read (including ``delim`` when found) and whether
            ``delim`` was found before end of input.
        """
        start = 0
        while True:
            idx = self._buf.find(delim, self._pos + start)
            if idx != -1:
                return self._consume(idx - self._pos + 1), True
            start = self.buffered
            if not self._fill():
                return self._consume(self.buffered), False

    def read_line(self) -> tuple[bytes, bool]:
        """Consume one physical line and strip its terminator.

        A trailing ``\\n`` is removed, then a ``\\r`` preceding it.  The
        second element is True when the line ran into end of input
        instead of a ``\\n``.
        """
        line, found = self.read_until(LF)
        if found:
            line = line[:-1]
        if line.endswith(CR):
            line = line[:-1]
        return line, not found
