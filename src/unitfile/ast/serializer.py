"""Dump parsed unit-file records to and from JSON and YAML.

A unit file parses into either a list of ``UnitSection`` blocks or a
list of ``UnitOption`` records.  ``AstSerializer`` maps both onto plain
dict/list structures with a ``"kind"`` discriminator so that a dump can
be loaded back without knowing which view produced it.

Usage
-----
::

    from unitfile.ast.serializer import AstSerializer
    from unitfile.parser import parse_sections

    serializer = AstSerializer()
    sections = parse_sections(b"[Unit]\\nDescription=Foo\\n")
    text = serializer.to_json(sections)
    assert serializer.from_json(text) == sections
"""
from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Union

import yaml

from unitfile.ast.nodes import UnitEntry, UnitOption, UnitSection

Records = Union[Sequence[UnitSection], Sequence[UnitOption]]

_SECTIONS_KIND = "UnitSections"
_OPTIONS_KIND = "UnitOptions"


class AstSerializer:
    """Converts parsed records to and from JSON-compatible dicts."""

    # ------------------------------------------------------------------
    # Serialization (records → dict)
    # ------------------------------------------------------------------

    def to_dict(self, records: Records) -> dict[str, object]:
        """Serialize a section list or an option list to a dict.

        An empty sequence is dumped as an empty section list.
        """
        if records and all(isinstance(r, UnitOption) for r in records):
            return {
                "kind": _OPTIONS_KIND,
                "options": [self._option_to_dict(o) for o in records],  # type: ignore[arg-type]
            }
        return {
            "kind": _SECTIONS_KIND,
            "sections": [self._section_to_dict(s) for s in records],  # type: ignore[arg-type]
        }

    def _entry_to_dict(self, e: UnitEntry) -> dict[str, str]:
        return {"name": e.name, "value": e.value}

    def _section_to_dict(self, s: UnitSection) -> dict[str, object]:
        if not isinstance(s, UnitSection):
            raise TypeError(f"Cannot mix record types in one dump: {type(s)}")
        return {
            "kind": "UnitSection",
            "section": s.section,
            "entries": [self._entry_to_dict(e) for e in s.entries],
        }

    def _option_to_dict(self, o: UnitOption) -> dict[str, str]:
        return {"kind": "UnitOption", "section": o.section, "name": o.name, "value": o.value}

    # ------------------------------------------------------------------
    # Deserialization (dict → records)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> list[UnitSection] | list[UnitOption]:
        """Restore the records from a dict produced by ``to_dict``.

        Raises
        ------
        ValueError
            If ``data`` does not carry a known ``"kind"``.
        """
        kind = data.get("kind")
        if kind == _SECTIONS_KIND:
            return [self._section_from_dict(s) for s in data["sections"]]  # type: ignore[union-attr]
        if kind == _OPTIONS_KIND:
            return [self._option_from_dict(o) for o in data["options"]]  # type: ignore[union-attr]
        raise ValueError(f"Unknown record dump kind: {kind!r}")

    def _entry_from_dict(self, d: dict[str, str]) -> UnitEntry:
        return UnitEntry(name=d["name"], value=d["value"])

    def _section_from_dict(self, d: dict[str, object]) -> UnitSection:
        return UnitSection(
            section=str(d["section"]),
            entries=tuple(self._entry_from_dict(e) for e in d.get("entries", [])),  # type: ignore[union-attr]
        )

    def _option_from_dict(self, d: dict[str, str]) -> UnitOption:
        return UnitOption(section=d["section"], name=d["name"], value=d["value"])

    # ------------------------------------------------------------------
    # JSON / YAML
    # ------------------------------------------------------------------

    def to_json(self, records: Records, indent: int = 2) -> str:
        """Serialize records to a JSON string."""
        return json.dumps(self.to_dict(records), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> list[UnitSection] | list[UnitOption]:
        """Deserialize records from a JSON string."""
        data: dict[str, object] = json.loads(text)
        return self.from_dict(data)

    def to_yaml(self, records: Records) -> str:
        """Serialize records to a YAML string."""
        return yaml.dump(
            self.to_dict(records), default_flow_style=False, allow_unicode=True, sort_keys=False
        )

    def from_yaml(self, text: str) -> list[UnitSection] | list[UnitOption]:
        """Deserialize records from a YAML string."""
        data: dict[str, object] = yaml.safe_load(text)
        return self.from_dict(data)
