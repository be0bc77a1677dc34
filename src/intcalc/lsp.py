"""Minimal LSP server for intcalc files (one expression per line), diagnostics only."""

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

from intcalc import __version__
from intcalc.errors import CalcError, EvalError, split_lines
from intcalc.parser import evaluate

server = LanguageServer(
    "intcalc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _utf16_column(text: str, column: int) -> int:
    """Convert a 1-based code point column to a 0-based UTF-16 offset."""
    return len(text[: column - 1].encode("utf-16-le")) // 2


def _diagnostic(exc: CalcError, text: str) -> Diagnostic:
    # Lex and parse failures are errors; well-formed lines that cannot be
    # evaluated are warnings.
    if isinstance(exc, EvalError):
        severity = DiagnosticSeverity.Warning
    else:
        severity = DiagnosticSeverity.Error
    return Diagnostic(
        range=Range(
            start=Position(
                line=exc.span.start.line - 1,
                character=_utf16_column(text, exc.span.start.column),
            ),
            end=Position(
                line=exc.span.end.line - 1,
                character=_utf16_column(text, exc.span.end.column),
            ),
        ),
        message=f"{exc.kind}: {exc.message}",
        severity=severity,
        source="intcalc",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Evaluate every non-blank line and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for line_no, text in enumerate(split_lines(doc.source), start=1):
        if not text.strip():
            continue
        try:
            evaluate(text, line=line_no)
        except CalcError as exc:
            diagnostics.append(_diagnostic(exc, text))

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
