"""Unit-file serializer module.

Exports the ``UnitSerializer`` class and the grouped and verbatim
convenience functions.
"""
from __future__ import annotations

from unitfile.serializer.serializer import (
    UnitSerializer,
    render_options,
    render_sections,
    serialize_options,
    serialize_sections,
)

__all__ = [
    "UnitSerializer",
    "serialize_options",
    "serialize_sections",
    "render_options",
    "render_sections",
]
