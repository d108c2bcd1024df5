"""Lox scanner — converts source text into a flat token stream."""

from __future__ import annotations

from dataclasses import dataclass, field

from loxscan.cursor import Cursor
from loxscan.errors import LexError, UnexpectedCharacter, UnterminatedString
from loxscan.tokens import (
    KEYWORDS,
    Span,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_ident_start,
)

_SINGLE: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# first char -> (kind without "=", kind with "=")
_WITH_EQUAL: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

_SKIP = frozenset(" \r\t\n")


@dataclass(slots=True)
class ScanResult:
    """Tokens plus every error found when scanning in error-collecting mode."""

    tokens: list[Token]
    errors: list[LexError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class Scanner:
    """Tokenize Lox source text into a list of Token objects.

    By default the first lexical error is raised. With ``collect_errors=True``
    errors are recorded instead and scanning resumes after the offending
    character.
    """

    def __init__(self, source: str, *, collect_errors: bool = False) -> None:
        self._source = source
        self._cursor = Cursor(source)
        self._tokens: list[Token] = []
        self._collect = collect_errors
        self.errors: list[LexError] = []

    def scan_tokens(self) -> list[Token]:
        """Scan the full source and return the token list ending in EOF."""
        cursor = self._cursor
        while not cursor.is_at_end():
            cursor.mark_start()
            self._scan_token()

        cursor.mark_start()
        self._add(TokenType.EOF)
        return self._tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _add(self, tt: TokenType, literal: str | None = None) -> None:
        cursor = self._cursor
        span = Span(cursor.start_position(), cursor.position())
        self._tokens.append(Token(tt, cursor.lexeme(), literal, span))

    def _report(self, error: LexError) -> None:
        if not self._collect:
            raise error
        self.errors.append(error)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        cursor = self._cursor
        ch = cursor.advance()

        if ch in _SINGLE:
            self._add(_SINGLE[ch])
        elif ch in _WITH_EQUAL:
            plain, with_equal = _WITH_EQUAL[ch]
            self._add(with_equal if cursor.match_if("=") else plain)
        elif ch == "/":
            if cursor.match_if("/"):
                # Line comment; the newline is left for the main loop
                while cursor.peek() != "\n" and not cursor.is_at_end():
                    cursor.advance()
            else:
                self._add(TokenType.SLASH)
        elif ch in _SKIP:
            pass
        elif ch == '"':
            self._string()
        elif is_digit(ch):
            self._number()
        elif is_ident_start(ch):
            self._identifier()
        else:
            self._report(UnexpectedCharacter(ch, self._cursor.start_position(), self._source))

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _string(self) -> None:
        cursor = self._cursor
        while cursor.peek() != '"' and not cursor.is_at_end():
            cursor.advance()

        if cursor.is_at_end():
            self._report(
                UnterminatedString(cursor.position(), cursor.start_position(), self._source)
            )
            return

        cursor.advance()  # closing quote
        self._add(TokenType.STRING, cursor.text(cursor.start + 1, cursor.current - 1))

    def _number(self) -> None:
        cursor = self._cursor
        while is_digit(cursor.peek()):
            cursor.advance()

        # A fractional part needs a digit after the dot
        if cursor.peek() == "." and is_digit(cursor.peek_next()):
            cursor.advance()
            while is_digit(cursor.peek()):
                cursor.advance()

        self._add(TokenType.NUMBER, cursor.lexeme())

    def _identifier(self) -> None:
        cursor = self._cursor
        while is_ident_char(cursor.peek()):
            cursor.advance()

        text = cursor.lexeme()
        keyword = KEYWORDS.get(text)
        if keyword is not None:
            self._add(keyword)
        else:
            self._add(TokenType.IDENTIFIER, text)


def tokenize(source: str) -> list[Token]:
    """Convenience function: scan source text, raising on the first error."""
    return Scanner(source).scan_tokens()


def scan(source: str) -> ScanResult:
    """Scan source text, collecting every lexical error instead of raising."""
    scanner = Scanner(source, collect_errors=True)
    tokens = scanner.scan_tokens()
    return ScanResult(tokens, scanner.errors)
