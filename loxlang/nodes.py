"""AST node definitions for Lox.

The tree is made of two closed families: expressions (:class:`Expr`) and
statements (:class:`Stmt`). Each variant carries only the fields it needs.

Nodes compare and hash by identity (``eq=False``). The resolver keys its
scope-distance table on expression nodes, so two structurally equal
references in different places must stay distinct entries.


File: nodes.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from loxlang.lexer import Token


class FunctionKind(str, Enum):
    """
    How a function was declared.
    """
    FUNCTION = "function"
    METHOD = "method"
    STATIC_METHOD = "static method"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


# ---- Expressions ----

@dataclass(eq=False)
class Expr:
    """Base class for expression nodes."""


@dataclass(eq=False)
class Literal(Expr):
    value: Any


@dataclass(eq=False)
class Grouping(Expr):
    expression: Expr


@dataclass(eq=False)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(eq=False)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(eq=False)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(eq=False)
class Ternary(Expr):
    condition: Expr
    then_branch: Expr
    else_branch: Expr


@dataclass(eq=False)
class Variable(Expr):
    name: Token


@dataclass(eq=False)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(eq=False)
class Get(Expr):
    object: Expr
    name: Token


@dataclass(eq=False)
class Set(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass(eq=False)
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: list[Expr]


@dataclass(eq=False)
class AnonymousFunction(Expr):
    params: list[Token]
    body: list[Stmt]


@dataclass(eq=False)
class Super(Expr):
    keyword: Token
    method: Token


@dataclass(eq=False)
class This(Expr):
    keyword: Token


# ---- Statements ----

@dataclass(eq=False)
class Stmt:
    """Base class for statement nodes."""


@dataclass(eq=False)
class Expression(Stmt):
    expression: Expr


@dataclass(eq=False)
class Print(Stmt):
    expression: Expr


@dataclass(eq=False)
class Var(Stmt):
    name: Token
    initializer: Expr | None = None


@dataclass(eq=False)
class Block(Stmt):
    statements: list[Stmt]


@dataclass(eq=False)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt | None = None


@dataclass(eq=False)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(eq=False)
class Return(Stmt):
    keyword: Token
    value: Expr | None = None


@dataclass(eq=False)
class Break(Stmt):
    keyword: Token


@dataclass(eq=False)
class Function(Stmt):
    name: Token
    function: AnonymousFunction
    kind: FunctionKind = FunctionKind.FUNCTION


@dataclass(eq=False)
class Class(Stmt):
    name: Token
    superclass: Variable | None
    methods: list[Function]


@dataclass(eq=False)
class Import(Stmt):
    path: Token
    alias: Token | None = None
