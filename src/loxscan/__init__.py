"""Lexical scanner for the Lox scripting language."""

from __future__ import annotations

from loxscan.errors import LexError, UnexpectedCharacter, UnterminatedString
from loxscan.scanner import Scanner, ScanResult, scan, tokenize
from loxscan.tokens import KEYWORDS, Position, Span, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "KEYWORDS",
    "LexError",
    "Position",
    "ScanResult",
    "Scanner",
    "Span",
    "Token",
    "TokenType",
    "UnexpectedCharacter",
    "UnterminatedString",
    "scan",
    "tokenize",
]
