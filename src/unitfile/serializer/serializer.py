"""Unit-file serializer: records → unit-file text.

Two renderers are provided:

- ``render_options`` groups flat ``UnitOption`` records by section.  A
  section's block is placed where its name first occurs, and every later
  record for that name is appended to it, however far apart they are.
- ``render_sections`` writes ``UnitSection`` blocks exactly as given,
  one header per block, so duplicate sections stay separate.

Both emit ``[Section]`` headers, one ``Name=Value`` line per entry, and a
single blank line between blocks.  Nothing is escaped or validated:
newlines or other bytes inside names and values are written literally.

Usage
-----
::

    from unitfile.serializer import serialize_sections
    from unitfile.parser import parse_sections

    with open("foo.network", "rb") as fh:
        sections = parse_sections(fh)
    data = serialize_sections(sections).read()
"""
from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Sequence

from unitfile.ast.nodes import UnitEntry, UnitOption, UnitSection
from unitfile.grammar.tokens import encode

logger = logging.getLogger(__name__)


class UnitSerializer:
    """Renders parsed records back into unit-file text."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_options(self, options: Iterable[UnitOption]) -> str:
        """Render flat records, merging each section into one block.

        Parameters
        ----------
        options:
            Records in any order; relative order within a section is kept.

        Returns
        -------
        str
            Unit-file text; empty when ``options`` is empty.
        """
        grouped: dict[str, list[UnitEntry]] = {}
        for opt in options:
            grouped.setdefault(opt.section, []).append(opt.entry)
        logger.debug("Rendering %d grouped section(s)", len(grouped))
        return self._render(grouped.items())

    def render_sections(self, sections: Sequence[UnitSection]) -> str:
        """Render section blocks verbatim, in order, without merging.

        Parameters
        ----------
        sections:
            Blocks as produced by the parser or built by hand.

        Returns
        -------
        str
            Unit-file text; empty when ``sections`` is empty.
        """
        logger.debug("Rendering %d section block(s)", len(sections))
        return self._render((s.section, s.entries) for s in sections)

    def serialize_options(self, options: Iterable[UnitOption]) -> io.BytesIO:
        """Like ``render_options`` but return a readable byte stream."""
        return io.BytesIO(encode(self.render_options(options)))

    def serialize_sections(self, sections: Sequence[UnitSection]) -> io.BytesIO:
        """Like ``render_sections`` but return a readable byte stream."""
        return io.BytesIO(encode(self.render_sections(sections)))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, blocks: Iterable[tuple[str, Sequence[UnitEntry]]]) -> str:
        parts: list[str] = []
        for index, (section, entries) in enumerate(blocks):
            if index:
                parts.append("\n")
            parts.append(self._header(section))
            parts.extend(self._entry(e) for e in entries)
        return "".join(parts)

    def _header(self, section: str) -> str:
        return f"[{section}]\n"

    def _entry(self, entry: UnitEntry) -> str:
        return f"{entry.name}={entry.value}\n"


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def serialize_options(options: Iterable[UnitOption]) -> io.BytesIO:
    """Serialize flat records, grouped by section, to a byte stream.

    Example
    -------
    ::

        from unitfile.ast.nodes import UnitOption
        from unitfile.serializer import serialize_options

        stream = serialize_options([
            UnitOption("Unit", "Description", "Foo"),
            UnitOption("Service", "ExecStart", "/usr/bin/sleep infinity"),
        ])
        stream.read()
    """
    return UnitSerializer().serialize_options(options)


def serialize_sections(sections: Sequence[UnitSection]) -> io.BytesIO:
    """Serialize section blocks verbatim to a byte stream."""
    return UnitSerializer().serialize_sections(sections)


def render_options(options: Iterable[UnitOption]) -> str:
    """Grouped rendering as ``str``."""
    return UnitSerializer().render_options(options)


def render_sections(sections: Sequence[UnitSection]) -> str:
    """Verbatim rendering as ``str``."""
    return UnitSerializer().render_sections(sections)
