"""Token stream dumps for the CLI: plain text lines or JSON."""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

from loxscan.tokens import Token, TokenType


def token_to_dict(token: Token) -> dict[str, Any]:
    return {
        "type": token.type.name,
        "lexeme": token.lexeme,
        "literal": token.literal,
        "line": token.line,
        "column": token.span.start.column,
        "start": token.span.start.offset,
        "end": token.span.end.offset,
    }


def tokens_to_json(tokens: list[Token], *, show_eof: bool = True) -> str:
    """Serialize tokens as a JSON array of objects."""
    items = [token_to_dict(t) for t in tokens if show_eof or t.type != TokenType.EOF]
    return json.dumps(items, indent=2, ensure_ascii=False)


def dump_tokens(
    tokens: list[Token],
    *,
    fmt: str = "text",
    show_eof: bool = True,
    file: TextIO = sys.stdout,
) -> None:
    """Print tokens to *file*, one ``line N: TYPE 'lexeme' literal`` per line."""
    if fmt == "json":
        file.write(tokens_to_json(tokens, show_eof=show_eof))
        file.write("\n")
        return
    for token in tokens:
        if token.type == TokenType.EOF and not show_eof:
            continue
        file.write(f"{token}\n")
