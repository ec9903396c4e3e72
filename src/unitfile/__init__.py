"""unitfile: round-trip parser and serializer for systemd unit files.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import unitfile

    with open("foo.service", "rb") as fh:
        options = unitfile.parse_options(fh)

    # Merge each section into one block, in first-seen order
    text = unitfile.serialize_options(options).read()

    # Keep repeated [Route] blocks apart
    sections = unitfile.parse_sections(b"[Route]\\nGateway=10.0.0.1\\n")
    text = unitfile.serialize_sections(sections).read()

    unitfile.__version__
    '0.1.0'
"""
from __future__ import annotations

import io
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from unitfile.ast.nodes import UnitOption, UnitSection
    from unitfile.parser.parser import Source


def parse_options(source: "Source") -> list["UnitOption"]:
    """Parse a unit file into flat ``UnitOption`` records.

    Parameters
    ----------
    source:
        A binary stream, or unit-file content as ``bytes`` or ``str``.

    Returns
    -------
    list[UnitOption]
        One record per option line, in input order.

    Raises
    ------
    unitfile.errors.ParseError
        If the input is malformed or the stream fails; carries the
        records parsed before the failure.
    """
    from unitfile.parser.parser import parse_options as _parse_options

    return _parse_options(source)


def parse_sections(source: "Source") -> list["UnitSection"]:
    """Parse a unit file into ``UnitSection`` blocks.

    Repeated section headers produce separate blocks.

    Raises
    ------
    unitfile.errors.ParseError
        If the input is malformed or the stream fails.
    """
    from unitfile.parser.parser import parse_sections as _parse_sections

    return _parse_sections(source)


def serialize_options(options: Iterable["UnitOption"]) -> io.BytesIO:
    """Serialize flat records, merging each section into one block.

    Returns
    -------
    io.BytesIO
        Unit-file text positioned at the start.
    """
    from unitfile.serializer.serializer import serialize_options as _serialize_options

    return _serialize_options(options)


def serialize_sections(sections: Sequence["UnitSection"]) -> io.BytesIO:
    """Serialize section blocks verbatim, duplicates and order preserved."""
    from unitfile.serializer.serializer import serialize_sections as _serialize_sections

    return _serialize_sections(sections)


def deserialize(source: "Source") -> list["UnitOption"]:
    """Deprecated alias of :func:`parse_options`."""
    from unitfile.parser.parser import _deprecated_parse_options

    return _deprecated_parse_options(source, stacklevel=3)


__all__ = [
    "__version__",
    "parse_options",
    "parse_sections",
    "serialize_options",
    "serialize_sections",
    "deserialize",
]
