"""CLI package.

The ``cli`` sub-package contains the Click application and its commands.
"""
from __future__ import annotations
