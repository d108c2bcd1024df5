"""Lexical error types with formatted source context."""

from __future__ import annotations

from loxscan.tokens import Position


class LexError(Exception):
    """Base class for scan errors, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    @property
    def line(self) -> int:
        return self.position.line

    def summary(self) -> str:
        """Return the one-line ``line N: message`` form."""
        return f"line {self.line}: {self.message}"

    def format(self, filename: str = "<input>") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)
        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class UnexpectedCharacter(LexError):
    """A character outside every recognised class."""

    def __init__(self, char: str, position: Position, source: str) -> None:
        self.char = char
        super().__init__(f"unexpected character {char!r}", position, source)


class UnterminatedString(LexError):
    """A string literal still open when the source ran out.

    ``position`` is where scanning stopped (end of input); ``opened_at`` is the
    opening quote.
    """

    def __init__(self, position: Position, opened_at: Position, source: str) -> None:
        self.opened_at = opened_at
        super().__init__("unterminated string", position, source)
