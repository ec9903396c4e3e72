"""Unit-file record module.

Exports the parsed record types and the serializer for dumping them to
and from JSON/YAML.
"""
from __future__ import annotations

from unitfile.ast.nodes import UnitEntry, UnitOption, UnitSection, all_match, flatten
from unitfile.ast.serializer import AstSerializer

__all__ = [
    # Record types
    "UnitEntry",
    "UnitSection",
    "UnitOption",
    # Helpers
    "all_match",
    "flatten",
    # Serializer
    "AstSerializer",
]
