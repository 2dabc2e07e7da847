"""AST printer.

Renders expressions and statements as parenthesised prefix text, e.g.
``1 + 2 * x`` becomes ``(+ 1 (* 2 x))``. Used for ``LOXDEBUG`` dumps and in
parser tests.


File: printer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

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
from loxlang.runtime import stringify


class AstPrinter:
    """Parenthesised prefix rendering of AST nodes."""

    def print(self, node: Expr | Stmt) -> str:
        """
        Render an expression or statement.
        """
        if isinstance(node, Stmt):
            return self._stmt(node)
        return self._expr(node)

    def _parenthesize(self, name: str, *parts) -> str:
        rendered = [name]
        for part in parts:
            if isinstance(part, (Expr, Stmt)):
                rendered.append(self.print(part))
            else:
                rendered.append(str(part))
        return "(" + " ".join(rendered) + ")"

    def _function(self, label: str, function: AnonymousFunction) -> str:
        params = " ".join(p.lexeme for p in function.params)
        return self._parenthesize(label, f"({params})", *function.body)

    def _expr(self, expr: Expr) -> str:
        match expr:
            case Literal(value=value):
                if isinstance(value, str):
                    return repr(value)
                return stringify(value)
            case Grouping(expression=expression):
                return self._parenthesize("group", expression)
            case Unary(operator=operator, right=right):
                return self._parenthesize(operator.lexeme, right)
            case Binary(left=left, operator=operator, right=right) | Logical(
                left=left, operator=operator, right=right
            ):
                return self._parenthesize(operator.lexeme, left, right)
            case Ternary(condition=condition, then_branch=then_branch, else_branch=else_branch):
                return self._parenthesize("?:", condition, then_branch, else_branch)
            case Variable(name=name):
                return name.lexeme
            case Assign(name=name, value=value):
                return self._parenthesize("=", name.lexeme, value)
            case Get(object=obj, name=name):
                return self._parenthesize(".", obj, name.lexeme)
            case Set(object=obj, name=name, value=value):
                return self._parenthesize("=", self._parenthesize(".", obj, name.lexeme), value)
            case Call(callee=callee, arguments=arguments):
                return self._parenthesize("call", callee, *arguments)
            case AnonymousFunction():
                return self._function("fun", expr)
            case Super(method=method):
                return self._parenthesize("super", method.lexeme)
            case This():
                return "this"
            case _:
                return f"<expr {type(expr).__name__}>"

    def _stmt(self, stmt: Stmt) -> str:
        match stmt:
            case Expression(expression=expression):
                return self._parenthesize(";", expression)
            case Print(expression=expression):
                return self._parenthesize("print", expression)
            case Var(name=name, initializer=None):
                return self._parenthesize("var", name.lexeme)
            case Var(name=name, initializer=initializer):
                return self._parenthesize("var", name.lexeme, "=", initializer)
            case Block(statements=statements):
                return self._parenthesize("block", *statements)
            case If(condition=condition, then_branch=then_branch, else_branch=None):
                return self._parenthesize("if", condition, then_branch)
            case If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                return self._parenthesize("if-else", condition, then_branch, else_branch)
            case While(condition=condition, body=body):
                return self._parenthesize("while", condition, body)
            case Return(value=None):
                return "(return)"
            case Return(value=value):
                return self._parenthesize("return", value)
            case Break():
                return "(break)"
            case Function(name=name, function=function, kind=kind):
                return self._function(f"{kind} {name.lexeme}", function)
            case Class(name=name, superclass=superclass, methods=methods):
                header = f"class {name.lexeme}"
                if superclass is not None:
                    header += f" < {superclass.name.lexeme}"
                return self._parenthesize(header, *methods)
            case Import(path=path, alias=None):
                return self._parenthesize("import", path.lexeme)
            case Import(path=path, alias=alias):
                return self._parenthesize("import", path.lexeme, "as", alias.lexeme)
            case _:
                return f"<stmt {type(stmt).__name__}>"
