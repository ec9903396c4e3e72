#!/usr/bin/env python3
"""Example: repeated sections — unitfile

systemd-networkd files repeat ``[Route]`` and ``[Address]`` sections.
``parse_sections`` keeps every block separate, and ``serialize_sections``
writes them back unmerged; ``serialize_options`` would fold them into one.

Usage:
    python examples/02_network_routes.py

Requirements:
    pip install unitfile
"""
from __future__ import annotations

import unitfile
from unitfile.ast import UnitEntry, UnitSection, flatten

NETWORK_SOURCE = b"""\
[Match]
Name=eth0

[Route]
Gateway=10.0.10.1
Destination=10.0.1.1/24

[Route]
Gateway=10.0.10.2
Destination=10.0.2.1/24
"""


def main() -> None:
    sections = unitfile.parse_sections(NETWORK_SOURCE)
    for block in sections:
        print(f"[{block.section}] {len(block.entries)} entries")

    # Append a third route as its own block
    sections.append(
        UnitSection(
            "Route",
            (UnitEntry("Gateway", "10.0.10.3"), UnitEntry("Destination", "10.0.3.1/24")),
        )
    )

    print("\nVerbatim:")
    print(unitfile.serialize_sections(sections).read().decode())

    print("Grouped (routes merged):")
    print(unitfile.serialize_options(flatten(sections)).read().decode())


if __name__ == "__main__":
    main()
