"""Minimal LSP server for mini0, diagnostics only."""

from __future__ import annotations

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

from mini0 import __version__
from mini0.errors import Diagnostic as CheckDiagnostic
from mini0.parser import check

server = LanguageServer("mini0-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _to_lsp(diag: CheckDiagnostic) -> Diagnostic:
    start = diag.span.start
    end = diag.span.end
    if end.line != start.line:
        # Newline tokens run onto the next line; mark just their first character
        end_line, end_col = start.line - 1, start.column
    else:
        end_line, end_col = end.line - 1, max(end.column - 1, start.column)
    return Diagnostic(
        range=Range(
            start=Position(line=start.line - 1, character=start.column - 1),
            end=Position(line=end_line, character=end_col),
        ),
        message=diag.message,
        severity=DiagnosticSeverity.Error,
        source="mini0",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Check the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    result = check(doc.source)
    diagnostics = [_to_lsp(d) for d in result.diagnostics]

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
