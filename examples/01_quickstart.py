#!/usr/bin/env python3
"""Example: Quickstart — unitfile

Minimal working example: parse a service unit, inspect its options,
and write it back out.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install unitfile
"""
from __future__ import annotations

import io

import unitfile
from unitfile.ast import UnitOption

UNIT_SOURCE = b"""\
# /etc/systemd/system/example.service
[Unit]
Description=Example service
After=network.target

[Service]
ExecStart=/usr/bin/example \\
  --config /etc/example.conf
Restart=on-failure

[Install]
WantedBy=multi-user.target
"""


def main() -> None:
    print(f"unitfile version: {unitfile.__version__}")

    # Step 1: Parse into flat (section, name, value) records
    options = unitfile.parse_options(io.BytesIO(UNIT_SOURCE))
    print(f"Parsed {len(options)} options")
    for opt in options:
        print(f"  {opt}")

    # Step 2: Change a value and add an option at the end
    updated = [
        UnitOption(o.section, o.name, "always") if o.name == "Restart" else o
        for o in options
    ]
    updated.append(UnitOption("Unit", "Wants", "network-online.target"))

    # Step 3: Serialize; the late [Unit] option joins the first [Unit] block
    print("\nSerialized:")
    print(unitfile.serialize_options(updated).read().decode())


if __name__ == "__main__":
    main()
