"""Minimal LSP server for Lox — lexical diagnostics only."""

from __future__ import annotations

import logging

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from loxscan import __version__
from loxscan.errors import LexError
from loxscan.scanner import scan

logger = logging.getLogger(__name__)

server = LanguageServer("loxscan-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _to_diagnostic(exc: LexError, doc: TextDocument) -> Diagnostic:
    # LexError columns are 1-based code points; the client counts UTF-16 units
    line = exc.position.line - 1
    col = exc.position.column - 1
    span = Range(
        start=Position(line=line, character=col),
        end=Position(line=line, character=col + 1),
    )
    return Diagnostic(
        range=doc.position_codec.range_to_client_units(doc.lines, span),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="loxscan",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish one diagnostic per lexical error."""
    doc = ls.workspace.get_text_document(uri)
    result = scan(doc.source)
    diagnostics = [_to_diagnostic(exc, doc) for exc in result.errors]
    logger.debug("%s: %d tokens, %d errors", uri, len(result.tokens), len(diagnostics))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
