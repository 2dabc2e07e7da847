"""Symbol and diagnostic extraction for editor tooling.

Runs the front end (lexer, parser, resolver) over a document without
executing it and without printing anything, and returns the top-level
declarations and the reported errors as plain records.


File: symbols.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass

from loxlang.errors import Diagnostic, ErrorReporter
from loxlang.lexer import tokenize
from loxlang.modules import module_name
from loxlang.nodes import Class, Function, FunctionKind, Import, Stmt, Var
from loxlang.parser import Parser
from loxlang.resolver import Resolver


@dataclass
class LoxSymbol:
    """A declaration found in a Lox document."""

    name: str
    kind: str
    line: int
    detail: str
    container: str | None = None


@dataclass
class Analysis:
    """Result of analysing one document."""

    statements: list[Stmt]
    symbols: list[LoxSymbol]
    diagnostics: list[Diagnostic]


def _signature(name: str, params) -> str:
    return f"{name}({', '.join(p.lexeme for p in params)})"


def symbols_from_statements(statements: list[Stmt]) -> list[LoxSymbol]:
    """
    Collect top-level classes (and their methods), functions, variables and
    imports. Line numbers are 1-based.
    """
    symbols: list[LoxSymbol] = []
    for stmt in statements:
        match stmt:
            case Class(name=name, superclass=superclass, methods=methods):
                detail = f"class {name.lexeme}"
                if superclass is not None:
                    detail += f" < {superclass.name.lexeme}"
                symbols.append(LoxSymbol(name.lexeme, "class", name.line, detail))
                for method in methods:
                    prefix = "class " if method.kind == FunctionKind.STATIC_METHOD else ""
                    symbols.append(
                        LoxSymbol(
                            method.name.lexeme,
                            "method",
                            method.name.line,
                            prefix + _signature(f"{name.lexeme}.{method.name.lexeme}", method.function.params),
                            container=name.lexeme,
                        )
                    )
            case Function(name=name, function=function):
                symbols.append(
                    LoxSymbol(name.lexeme, "function", name.line, "fun " + _signature(name.lexeme, function.params))
                )
            case Var(name=name):
                symbols.append(LoxSymbol(name.lexeme, "variable", name.line, f"var {name.lexeme}"))
            case Import(path=path, alias=alias):
                bound = alias.lexeme if alias is not None else module_name(path.literal)
                line = alias.line if alias is not None else path.line
                symbols.append(LoxSymbol(bound, "module", line, f"import {path.lexeme}"))
    return symbols


def analyze(source: str) -> Analysis:
    """
    Lex, parse and (when parsing succeeded) resolve ``source``.
    """
    reporter = ErrorReporter(silent=True)
    tokens = tokenize(source, reporter)
    statements = Parser(tokens, reporter).parse()
    if not reporter.had_error:
        Resolver(reporter).resolve(statements)
    return Analysis(statements, symbols_from_statements(statements), list(reporter.diagnostics))
