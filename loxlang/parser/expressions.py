"""
Expression parsing utilities for Lox.

These functions operate on a `loxlang.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity. From lowest to highest:

    comma → assignment → ternary → or → and → equality → comparison
    → term (+ -) → factor (* / %) → unary (! -) → call/property → primary


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from loxlang.nodes import (
    AnonymousFunction,
    Assign,
    Binary,
    Call,
    Expr,
    Get,
    Grouping,
    Literal,
    Logical,
    Set,
    Super,
    Ternary,
    This,
    Unary,
    Variable,
)
from loxlang.token_types import TokenType

MAX_ARGUMENTS = 255

if TYPE_CHECKING:
    from loxlang.parser import Parser


# ---- Lowest precedence ----

def parse_expression(parser: 'Parser') -> Expr:
    """
    Parse a comma-sequenced expression. The comma becomes the operator of a
    `Binary` node whose value is its right operand.

    Syntax:
        <assignment> ( , <assignment> )*
    """
    expr = parser.assignment()
    while not parser.in_parens and parser.match(TokenType.COMMA):
        comma = parser.previous()
        right = parser.assignment()
        expr = Binary(expr, comma, right)
    return expr


def parse_assignment(parser: 'Parser') -> Expr:
    """
    Parse an assignment. Only variables and property accesses are valid
    targets; anything else is reported without aborting the parse.

    Syntax:
        <identifier> = <assignment> | <call>.<identifier> = <assignment>
    """
    expr = parser.ternary()

    if parser.match(TokenType.EQUAL):
        equals = parser.previous()
        value = parser.assignment()

        if isinstance(expr, Variable):
            return Assign(expr.name, value)
        if isinstance(expr, Get):
            return Set(expr.object, expr.name, value)

        parser.error(equals, "Invalid assignment target.")

    return expr


def parse_ternary(parser: 'Parser') -> Expr:
    """
    Parse a conditional expression. Both branches are full expressions, so
    a ternary in the else branch nests to the right.

    Syntax:
        <or> ? <expression> : <expression>
    """
    expr = parser.logical_or()
    if parser.match(TokenType.QUESTION_MARK):
        then_branch = parser.expression()
        parser.eat(TokenType.COLON, "Expect ':' after expression.")
        else_branch = parser.expression()
        return Ternary(expr, then_branch, else_branch)
    return expr


def parse_logical_or(parser: 'Parser') -> Expr:
    """Parse short-circuit OR expressions."""
    expr = parser.logical_and()
    while parser.match(TokenType.OR):
        operator = parser.previous()
        right = parser.logical_and()
        expr = Logical(expr, operator, right)
    return expr


def parse_logical_and(parser: 'Parser') -> Expr:
    """Parse short-circuit AND expressions."""
    expr = parser.equality()
    while parser.match(TokenType.AND):
        operator = parser.previous()
        right = parser.equality()
        expr = Logical(expr, operator, right)
    return expr


def parse_equality(parser: 'Parser') -> Expr:
    """Parse ``==`` and ``!=`` expressions."""
    expr = parser.comparison()
    while parser.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
        operator = parser.previous()
        right = parser.comparison()
        expr = Binary(expr, operator, right)
    return expr


def parse_comparison(parser: 'Parser') -> Expr:
    """Parse relational expressions."""
    expr = parser.term()
    while parser.match(
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
    ):
        operator = parser.previous()
        right = parser.term()
        expr = Binary(expr, operator, right)
    return expr


def parse_term(parser: 'Parser') -> Expr:
    """Parse addition and subtraction expressions."""
    expr = parser.factor()
    while parser.match(TokenType.MINUS, TokenType.PLUS):
        operator = parser.previous()
        right = parser.factor()
        expr = Binary(expr, operator, right)
    return expr


def parse_factor(parser: 'Parser') -> Expr:
    """Parse multiplication, division, and modulus expressions."""
    expr = parser.unary()
    while parser.match(TokenType.STAR, TokenType.SLASH, TokenType.PERCENT):
        operator = parser.previous()
        right = parser.unary()
        expr = Binary(expr, operator, right)
    return expr


def parse_unary(parser: 'Parser') -> Expr:
    """Parse prefix ``!`` and ``-``."""
    if parser.match(TokenType.BANG, TokenType.MINUS):
        operator = parser.previous()
        right = parser.unary()
        return Unary(operator, right)
    return parser.call()


def parse_call(parser: 'Parser') -> Expr:
    """
    Parse calls and property accesses chained in any order, e.g. ``a.b(c).d``.
    """
    expr = parser.primary()
    while True:
        if parser.match(TokenType.LEFT_PAREN):
            expr = _finish_call(parser, expr)
        elif parser.match(TokenType.DOT):
            name = parser.eat(TokenType.IDENTIFIER, "Expect property name after '.'.")
            expr = Get(expr, name)
        else:
            break
    return expr


def _finish_call(parser: 'Parser', callee: Expr) -> Expr:
    """Parse the argument list of a call once the '(' is consumed."""
    arguments: list[Expr] = []
    saved = parser.in_parens
    parser.in_parens = True
    try:
        if not parser.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    parser.error(parser.curr_token, f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(parser.expression())
                if not parser.match(TokenType.COMMA):
                    break
        paren = parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
    finally:
        parser.in_parens = saved
    return Call(callee, paren, arguments)


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> Expr:
    """
    Parse a literal, variable, grouping, ``this``, ``super`` access or
    anonymous function.
    """
    if parser.match(TokenType.FALSE):
        return Literal(False)
    if parser.match(TokenType.TRUE):
        return Literal(True)
    if parser.match(TokenType.NIL):
        return Literal(None)
    if parser.match(TokenType.NUMBER, TokenType.STRING):
        return Literal(parser.previous().literal)

    if parser.match(TokenType.SUPER):
        keyword = parser.previous()
        parser.eat(TokenType.DOT, "Expect '.' after 'super'.")
        method = parser.eat(TokenType.IDENTIFIER, "Expect superclass method name.")
        return Super(keyword, method)

    if parser.match(TokenType.THIS):
        return This(parser.previous())

    if parser.match(TokenType.FUN):
        parser.eat(TokenType.LEFT_PAREN, "Expect '(' after 'fun'.")
        return parser.function_body()

    if parser.match(TokenType.LEFT_PAREN):
        saved = parser.in_parens
        parser.in_parens = True
        try:
            expr = parser.expression()
            parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
        finally:
            parser.in_parens = saved
        return Grouping(expr)

    if parser.match(TokenType.IDENTIFIER):
        return Variable(parser.previous())

    if parser.check(TokenType.QUESTION_MARK):
        # Report the missing condition and let the ternary rule carry on.
        parser.error(parser.curr_token, "Expect expression before ? operator.")
        return Literal(None)

    raise parser.error(parser.curr_token, "Expect expression.")


def parse_function_body(parser: 'Parser') -> AnonymousFunction:
    """
    Parse a parameter list and body. Shared by named declarations, methods
    and anonymous ``fun`` expressions.

    Syntax:
        <params> ) { <declaration>* }
    """
    params = []
    if not parser.check(TokenType.RIGHT_PAREN):
        while True:
            if len(params) >= MAX_ARGUMENTS:
                parser.error(parser.curr_token, f"Can't have more than {MAX_ARGUMENTS} parameters.")
            params.append(parser.eat(TokenType.IDENTIFIER, "Expect parameter name."))
            if not parser.match(TokenType.COMMA):
                break
    parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
    parser.eat(TokenType.LEFT_BRACE, "Expect '{' before function body.")

    saved = parser.in_parens
    parser.in_parens = False
    try:
        body = parser.block()
    finally:
        parser.in_parens = saved
    return AnonymousFunction(params, body)
