"""Shared test fixtures for unitfile.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from unitfile.ast.nodes import UnitEntry, UnitSection


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "unitfile"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def service_unit() -> bytes:
    """A small but realistic service unit with comments and continuations."""
    return (
        b"# Managed by hand\n"
        b"[Unit]\n"
        b"Description=Example service\n"
        b"After=network.target\n"
        b"After=time-sync.target\n"
        b"\n"
        b"[Service]\n"
        b"; the command spans two lines\n"
        b"ExecStart=/usr/bin/example \\\n"
        b"  --verbose\n"
        b"Restart=on-failure\n"
        b"\n"
        b"[Install]\n"
        b"WantedBy=multi-user.target\n"
    )


@pytest.fixture()
def duplicate_routes() -> list[UnitSection]:
    """Two ``[Route]`` blocks as found in systemd-networkd files."""
    return [
        UnitSection(
            "Route",
            (UnitEntry("Gateway", "10.0.10.1"), UnitEntry("Destination", "10.0.1.1/24")),
        ),
        UnitSection(
            "Route",
            (UnitEntry("Gateway", "10.0.10.2"), UnitEntry("Destination", "10.0.2.1/24")),
        ),
    ]
