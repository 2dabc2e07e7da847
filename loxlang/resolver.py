"""Static scope resolver.

The resolver walks the AST once before execution and works out, for every
local variable reference, how many frames up the environment chain its
declaration lives. The interpreter reads that distance instead of searching
by name, so a closure always reaches the binding that was in scope where it
was written.

1. Scopes
A stack of dicts mirrors the frames the interpreter will create: one per
block, one per function call (holding the parameters), one holding
``super`` around the methods of a subclass and one holding ``this`` around
each method. Top-level code has no scope on the stack; names that are not
found in any scope are globals and are looked up by name at runtime.

2. Declared vs. defined
A name maps to ``False`` while its own initializer is being resolved and
``True`` afterwards, which is how ``var a = a;`` is caught.

3. Structural checks
``break`` outside a loop, ``return`` at top level or with a value in an
initializer, ``this``/``super`` outside a method, duplicate method names
and redeclarations within one scope are reported. Resolution carries on
after each error so one pass reports them all.


File: resolver.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum, auto

from loxlang.errors import ErrorReporter
from loxlang.lexer import Token
from loxlang.modules import module_name
from loxlang.nodes import (
    AnonymousFunction,
    Assign,
    Binary,
    Block,
    Break,
    Call,
    Class,
    Expr,
    Expression,
    Function,
    FunctionKind,
    Get,
    Grouping,
    If,
    Import,
    Literal,
    Logical,
    Print,
    Return,
    Set,
    Stmt,
    Super,
    Ternary,
    This,
    Unary,
    Var,
    Variable,
    While,
)
from loxlang.token_types import TokenType


class FunctionType(Enum):
    """Kind of function body currently being resolved."""
    NONE = auto()
    FUNCTION = auto()
    METHOD = auto()
    STATIC_METHOD = auto()
    INITIALIZER = auto()


class ClassType(Enum):
    """Kind of class body currently being resolved."""
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver:
    """Computes scope distances for local variable references."""

    def __init__(self, reporter: ErrorReporter | None = None):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.scopes: list[dict[str, bool]] = []
        self.locals: dict[Expr, int] = {}
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        self.loop_depth = 0

    def resolve(self, statements: list[Stmt]) -> dict[Expr, int]:
        """
        Resolve a program.

        Parameters:
            statements (list): Top-level statements.

        Returns:
            dict: Maps each resolved Variable, Assign, This and Super node to
                its scope distance. Global references are absent.
        """
        self.scopes = []
        self.locals = {}
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        self.loop_depth = 0
        self._resolve_statements(statements)
        return self.locals

    # ------------------------------------------------------------------
    # Scope bookkeeping
    # ------------------------------------------------------------------

    def _begin_scope(self) -> None:
        self.scopes.append({})

    def _end_scope(self) -> None:
        self.scopes.pop()

    def _declare(self, name) -> None:
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.reporter.token_error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def _define(self, name) -> None:
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def _resolve_local(self, expr: Expr, name: str) -> None:
        for distance, scope in enumerate(reversed(self.scopes)):
            if name in scope:
                self.locals[expr] = distance
                return

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _resolve_statements(self, statements: list[Stmt]) -> None:
        for stmt in statements:
            self._resolve_stmt(stmt)

    def _resolve_stmt(self, stmt: Stmt) -> None:
        match stmt:
            case Block(statements=statements):
                self._begin_scope()
                self._resolve_statements(statements)
                self._end_scope()

            case Var(name=name, initializer=initializer):
                self._declare(name)
                if initializer is not None:
                    self._resolve_expr(initializer)
                self._define(name)

            case Function(name=name, function=function, kind=kind):
                self._declare(name)
                self._define(name)
                self._resolve_function(function, FunctionType.FUNCTION)

            case Class():
                self._resolve_class(stmt)

            case Expression(expression=expression) | Print(expression=expression):
                self._resolve_expr(expression)

            case If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                self._resolve_expr(condition)
                self._resolve_stmt(then_branch)
                if else_branch is not None:
                    self._resolve_stmt(else_branch)

            case While(condition=condition, body=body):
                self._resolve_expr(condition)
                self.loop_depth += 1
                self._resolve_stmt(body)
                self.loop_depth -= 1

            case Return(keyword=keyword, value=value):
                if self.current_function == FunctionType.NONE:
                    self.reporter.token_error(keyword, "Can't return from top-level code.")
                if value is not None:
                    if self.current_function == FunctionType.INITIALIZER:
                        self.reporter.token_error(keyword, "Can't return a value from an initializer.")
                    self._resolve_expr(value)

            case Break(keyword=keyword):
                if self.loop_depth == 0:
                    self.reporter.token_error(keyword, "break statement must be inside a loop structure.")

            case Import(path=path, alias=alias):
                # The module is bound under its alias or its file stem.
                if alias is None:
                    alias = Token(TokenType.IDENTIFIER, module_name(path.literal), None, path.line)
                self._declare(alias)
                self._define(alias)

            case _:
                raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def _resolve_class(self, stmt: Class) -> None:
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self._declare(stmt.name)
        self._define(stmt.name)

        if stmt.superclass is not None:
            if stmt.superclass.name.lexeme == stmt.name.lexeme:
                self.reporter.token_error(stmt.superclass.name, "A class can't inherit from itself.")
            self.current_class = ClassType.SUBCLASS
            self._resolve_expr(stmt.superclass)
            self._begin_scope()
            self.scopes[-1]["super"] = True

        self._begin_scope()
        self.scopes[-1]["this"] = True

        seen = set()
        for method in stmt.methods:
            if method.name.lexeme in seen:
                self.reporter.token_error(method.name, "Methods must have different names.")
            seen.add(method.name.lexeme)

            if method.kind == FunctionKind.STATIC_METHOD:
                declaration = FunctionType.STATIC_METHOD
            elif method.name.lexeme == "init":
                declaration = FunctionType.INITIALIZER
            else:
                declaration = FunctionType.METHOD
            self._resolve_function(method.function, declaration)

        self._end_scope()
        if stmt.superclass is not None:
            self._end_scope()

        self.current_class = enclosing_class

    def _resolve_function(self, function: AnonymousFunction, function_type: FunctionType) -> None:
        enclosing_function = self.current_function
        enclosing_loop_depth = self.loop_depth
        self.current_function = function_type
        self.loop_depth = 0

        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)
        self._resolve_statements(function.body)
        self._end_scope()

        self.current_function = enclosing_function
        self.loop_depth = enclosing_loop_depth

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _resolve_expr(self, expr: Expr) -> None:
        match expr:
            case Variable(name=name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self.reporter.token_error(name, "Can't read local variable in its own initializer.")
                self._resolve_local(expr, name.lexeme)

            case Assign(name=name, value=value):
                self._resolve_expr(value)
                self._resolve_local(expr, name.lexeme)

            case Binary(left=left, right=right) | Logical(left=left, right=right):
                self._resolve_expr(left)
                self._resolve_expr(right)

            case Ternary(condition=condition, then_branch=then_branch, else_branch=else_branch):
                self._resolve_expr(condition)
                self._resolve_expr(then_branch)
                self._resolve_expr(else_branch)

            case Unary(right=right):
                self._resolve_expr(right)

            case Grouping(expression=expression):
                self._resolve_expr(expression)

            case Call(callee=callee, arguments=arguments):
                self._resolve_expr(callee)
                for argument in arguments:
                    self._resolve_expr(argument)

            case Get(object=obj):
                self._resolve_expr(obj)

            case Set(object=obj, value=value):
                self._resolve_expr(value)
                self._resolve_expr(obj)

            case AnonymousFunction():
                self._resolve_function(expr, FunctionType.FUNCTION)

            case This(keyword=keyword):
                if self.current_class == ClassType.NONE:
                    self.reporter.token_error(keyword, "Can't use 'this' outside of a class.")
                    return
                self._resolve_local(expr, keyword.lexeme)

            case Super(keyword=keyword):
                if self.current_class == ClassType.NONE:
                    self.reporter.token_error(keyword, "Can't use 'super' outside of a class.")
                elif self.current_class != ClassType.SUBCLASS:
                    self.reporter.token_error(keyword, "Can't use 'super' in a class with no superclass.")
                self._resolve_local(expr, keyword.lexeme)

            case Literal():
                pass

            case _:
                raise TypeError(f"Unknown expression type: {type(expr).__name__}")
