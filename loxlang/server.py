"""
Lox Language Server entry point.

This server provides basic language features for Lox source files using
`pygls`. It reuses the Lox lexer, parser and resolver (through
:mod:`loxlang.symbols`) to publish diagnostics and to build a symbol index
supporting definition lookup, hover information, and document symbols.


File: server.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from loxlang.errors import Diagnostic as LoxDiagnostic
from loxlang.exceptions import ModuleResolutionError
from loxlang.modules import find_module
from loxlang.nodes import Import
from loxlang.symbols import LoxSymbol, analyze

SYMBOL_KINDS = {
    "class": SymbolKind.Class,
    "method": SymbolKind.Method,
    "function": SymbolKind.Function,
    "variable": SymbolKind.Variable,
    "module": SymbolKind.Module,
}


@dataclass
class IndexedSymbol:
    """A symbol located in a specific document."""

    symbol: LoxSymbol
    uri: str

    @property
    def range(self) -> Range:
        """Range covering the symbol name on its (0-based) line."""
        line = max(self.symbol.line - 1, 0)
        return Range(
            start=Position(line=line, character=0),
            end=Position(line=line, character=len(self.symbol.name)),
        )


def to_lsp_diagnostic(diagnostic: LoxDiagnostic) -> Diagnostic:
    """Convert a reporter diagnostic to its LSP form."""
    line = max(diagnostic.line - 1, 0)
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=0),
            end=Position(line=line + 1, character=0),
        ),
        message=f"Error{diagnostic.where}: {diagnostic.message}",
        severity=DiagnosticSeverity.Error,
        source="lox",
    )


class LoxLanguageServer(LanguageServer):
    """Language server for Lox source files."""

    def __init__(self) -> None:
        super().__init__("lox-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[IndexedSymbol]] = {}
        self.global_symbols: Dict[str, List[IndexedSymbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Parse all `.lox` files under the current workspace."""
        root = self._workspace_root()
        if not root:
            self.indexed_workspace = True
            return
        for path in Path(root).rglob("*.lox"):
            uri = path.as_uri()
            if uri in self.symbols_by_uri:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                print(f"[LSP] Failed to read {path}: {e}", file=sys.stderr)
                continue
            self.update_index(uri, text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> List[LoxDiagnostic]:
        """Analyse ``text``, update the symbol index for ``uri`` and return
        the diagnostics found."""
        analysis = analyze(text)
        self.symbols_by_uri[uri] = [IndexedSymbol(sym, uri) for sym in analysis.symbols]
        self._rebuild_global_index()
        for stmt in analysis.statements:
            if isinstance(stmt, Import):
                self._index_import(stmt.path.literal)
        return analysis.diagnostics

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.symbol.name, []).append(sym)

    def _index_import(self, path: str) -> None:
        """Parse an imported file and record its symbols."""
        root = self._workspace_root()
        try:
            module_path = find_module(path, root).resolve()
            uri = module_path.as_uri()
            if uri in self.symbols_by_uri:
                return
            text = module_path.read_text(encoding="utf-8")
        except (ModuleResolutionError, OSError) as e:
            print(f"[LSP] Failed to index import {path}: {e}", file=sys.stderr)
            return
        self.update_index(uri, text)

    def _workspace_root(self) -> Optional[str]:
        """Root folder of the client workspace, if one has been opened."""
        try:
            return self.workspace.root_path or None
        except (AttributeError, RuntimeError):
            return None

    def lookup(self, word: str) -> Optional[IndexedSymbol]:
        """First indexed symbol named ``word``."""
        if not self.indexed_workspace:
            self._index_workspace()
        matches = self.global_symbols.get(word)
        if not matches:
            return None
        return matches[0]


lang_server = LoxLanguageServer()


def _refresh(ls: LoxLanguageServer, uri: str, text: str) -> None:
    diagnostics = ls.update_index(uri, text)
    ls.publish_diagnostics(uri, [to_lsp_diagnostic(d) for d in diagnostics])


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LoxLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document and publish its diagnostics when it is opened."""
    _refresh(ls, params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LoxLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    _refresh(ls, params.text_document.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: LoxLanguageServer, params: DefinitionParams):
    """Return the definition location for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(word)
    if sym is None:
        return None
    return Location(uri=sym.uri, range=sym.range)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: LoxLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(word)
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.symbol.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: LoxLanguageServer, params: DocumentSymbolParams):
    """Return symbols for the given document, with methods nested under
    their class."""
    indexed = ls.symbols_by_uri.get(params.text_document.uri, [])
    result: List[DocumentSymbol] = []
    classes: Dict[str, DocumentSymbol] = {}
    for sym in indexed:
        doc_symbol = DocumentSymbol(
            name=sym.symbol.name,
            kind=SYMBOL_KINDS[sym.symbol.kind],
            range=sym.range,
            selection_range=sym.range,
            detail=sym.symbol.detail,
        )
        container = classes.get(sym.symbol.container) if sym.symbol.container else None
        if container is not None:
            if container.children is None:
                container.children = []
            container.children.append(doc_symbol)
            continue
        if sym.symbol.kind == "class":
            classes[sym.symbol.name] = doc_symbol
        result.append(doc_symbol)
    return result


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
