"""Value records produced by the unit-file parser.

A parsed unit file has two equivalent views:

- a list of ``UnitSection`` blocks, one per ``[Name]`` header in the
  order the headers appear, each owning its ``UnitEntry`` items; two
  headers with the same name stay two separate blocks;
- a flat list of ``UnitOption`` records, one per ``Name=Value`` line.

Every record is a frozen dataclass, so parse results can be shared and
hashed freely.  Names and values are plain ``str``; bytes that are not
valid UTF-8 are carried as surrogate escapes and written back unchanged
by the serializer.
"""
from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Block view
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnitEntry:
    """A single ``Name=Value`` line inside a section block."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class UnitSection:
    """One ``[Name]`` header and the entries that follow it.

    Parameters
    ----------
    section:
        The text between the brackets, unvalidated.
    entries:
        Entries in input order; repeated names are kept.
    """

    section: str
    entries: tuple[UnitEntry, ...] = ()

    def values(self, name: str) -> list[str]:
        """Return every value assigned to ``name`` in this block, in order."""
        return [e.value for e in self.entries if e.name == name]

    @property
    def names(self) -> list[str]:
        """Entry names in input order, duplicates included."""
        return [e.name for e in self.entries]

    def options(self) -> list["UnitOption"]:
        """Expand this block into flat records."""
        return [UnitOption(self.section, e.name, e.value) for e in self.entries]


# ---------------------------------------------------------------------------
# Flat view
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnitOption:
    """A ``(section, name, value)`` record for one option line."""

    section: str
    name: str
    value: str

    def __str__(self) -> str:
        return (
            f"{{Section: {_quote(self.section)}, Name: {_quote(self.name)}, "
            f"Value: {_quote(self.value)}}}"
        )

    def matches(self, other: "UnitOption") -> bool:
        """Return True if ``other`` has the same section, name and value."""
        return (
            self.section == other.section
            and self.name == other.name
            and self.value == other.value
        )

    @property
    def entry(self) -> UnitEntry:
        """This record without its section."""
        return UnitEntry(self.name, self.value)


def all_match(left: Sequence[UnitOption], right: Sequence[UnitOption]) -> bool:
    """Return True if both sequences hold matching options in the same order."""
    if len(left) != len(right):
        return False
    return all(a.matches(b) for a, b in zip(left, right))


def flatten(sections: Iterable[UnitSection]) -> list[UnitOption]:
    """Expand section blocks into flat records, preserving order."""
    options: list[UnitOption] = []
    for block in sections:
        options.extend(block.options())
    return options
