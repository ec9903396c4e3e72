"""Unit-file lexer module.

Exports the ``Lexer`` state machine, its ``Scanner``, and the ``tokenize``
convenience function.
"""
from __future__ import annotations

from unitfile.errors import LexError
from unitfile.lexer.lexer import Lexer, LexState, tokenize
from unitfile.lexer.scanner import Scanner

__all__ = ["Lexer", "LexState", "Scanner", "tokenize", "LexError"]
