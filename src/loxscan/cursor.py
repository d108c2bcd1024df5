"""Scan position tracking and lookahead over a source string."""

from __future__ import annotations

from loxscan.tokens import Position


class Cursor:
    """Read head over the source text, owned by a single Scanner.

    ``start`` marks the first character of the lexeme being scanned and
    ``current`` the next unconsumed character; ``start <= current <= len(source)``.
    Line and column follow ``current``. Lookahead past the end yields ``""``.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._length = len(source)
        self.start = 0
        self.current = 0
        self.line = 1
        self.column = 1
        self._start_pos = Position(1, 1, 0)

    def is_at_end(self) -> bool:
        return self.current >= self._length

    def peek(self) -> str:
        if self.current >= self._length:
            return ""
        return self._source[self.current]

    def peek_next(self) -> str:
        idx = self.current + 1
        if idx >= self._length:
            return ""
        return self._source[idx]

    def advance(self) -> str:
        ch = self._source[self.current]
        self.current += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def match_if(self, expected: str) -> bool:
        """Consume the next character only if it equals expected."""
        if self.current >= self._length or self._source[self.current] != expected:
            return False
        self.advance()
        return True

    def mark_start(self) -> None:
        """Begin a new lexeme at the current position."""
        self.start = self.current
        self._start_pos = self.position()

    def position(self) -> Position:
        return Position(self.line, self.column, self.current)

    def start_position(self) -> Position:
        return self._start_pos

    def lexeme(self) -> str:
        return self._source[self.start : self.current]

    def text(self, lo: int, hi: int) -> str:
        return self._source[lo:hi]
