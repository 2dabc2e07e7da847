"""
Main parser entry point for Lox.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`loxlang.parser.expressions` and `loxlang.parser.statements`.

Syntax errors are reported through the shared
:class:`~loxlang.errors.ErrorReporter`. After an error the parser discards
tokens up to the next statement boundary and carries on, so one run can
report several independent errors.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from loxlang.errors import ErrorReporter
from loxlang.exceptions import ParseError
from loxlang.lexer import Token
from loxlang.nodes import Expr, Stmt
from loxlang.token_types import TokenType

from . import expressions as _expr
from . import statements as _stmt

# Keywords that start a statement; panic-mode recovery resumes at these.
_SYNC_KEYWORDS = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})


class Parser:
    """Lox parser."""

    def __init__(self, tokens: list[Token], reporter: ErrorReporter | None = None):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with EOF.
            reporter (ErrorReporter): Receives syntax errors.
        """
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.position = 0
        # Set while parsing call arguments or a parenthesised group, where a
        # comma separates arguments instead of sequencing expressions.
        self.in_parens = False

    # Token helpers
    @property
    def curr_token(self) -> Token:
        """
        The token about to be consumed.
        """
        return self.tokens[self.position]

    def peek_next(self) -> Token:
        """
        The token after the current one (EOF at the end of input).
        """
        if self.is_at_end():
            return self.curr_token
        return self.tokens[self.position + 1]

    def previous(self) -> Token:
        """
        The most recently consumed token.
        """
        return self.tokens[self.position - 1]

    def is_at_end(self) -> bool:
        """
        Whether the current token is EOF.
        """
        return self.curr_token.type == TokenType.EOF

    def check(self, token_type: TokenType) -> bool:
        """
        Whether the current token has the given type, without consuming it.
        """
        if self.is_at_end():
            return False
        return self.curr_token.type == token_type

    def advance(self) -> Token:
        """
        Consume the current token and return it.
        """
        if not self.is_at_end():
            self.position += 1
        return self.previous()

    def match(self, *token_types: TokenType) -> bool:
        """
        Consume the current token if it has any of the given types.
        """
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def eat(self, token_type: TokenType, message: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (TokenType): The expected token type.
            message (str): The error reported when it does not match.

        Raises:
            ParseError: If the token does not match the expected type.
        """
        if self.check(token_type):
            return self.advance()
        raise self.error(self.curr_token, message)

    def error(self, token: Token, message: str) -> ParseError:
        """
        Report a syntax error at ``token`` and return the unwinding signal.
        Callers raise it when parsing cannot continue in place.
        """
        self.reporter.token_error(token, message)
        return ParseError(message)

    def synchronize(self) -> None:
        """
        Discard tokens until a likely statement boundary.
        """
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.curr_token.type in _SYNC_KEYWORDS:
                return
            self.advance()

    # Expression wrappers
    def expression(self) -> Expr:
        """
        Parse a full expression, including comma sequencing.
        """
        return _expr.parse_expression(self)

    def assignment(self) -> Expr:
        """
        Parse an assignment to a variable or property.
        """
        return _expr.parse_assignment(self)

    def ternary(self) -> Expr:
        """
        Parse a conditional ``?:`` expression.
        """
        return _expr.parse_ternary(self)

    def logical_or(self) -> Expr:
        """
        Parse a logical OR expression.
        """
        return _expr.parse_logical_or(self)

    def logical_and(self) -> Expr:
        """
        Parse a logical AND expression.
        """
        return _expr.parse_logical_and(self)

    def equality(self) -> Expr:
        """
        Parse an equality expression.
        """
        return _expr.parse_equality(self)

    def comparison(self) -> Expr:
        """
        Parse a comparison expression using relational operators.
        """
        return _expr.parse_comparison(self)

    def term(self) -> Expr:
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_term(self)

    def factor(self) -> Expr:
        """
        Parse a multiplication, division or modulo expression.
        """
        return _expr.parse_factor(self)

    def unary(self) -> Expr:
        """
        Parse a prefix ``!`` or ``-`` expression.
        """
        return _expr.parse_unary(self)

    def call(self) -> Expr:
        """
        Parse a chain of calls and property accesses.
        """
        return _expr.parse_call(self)

    def primary(self) -> Expr:
        """
        Parse a literal, name, group, ``this``, ``super`` or function literal.
        """
        return _expr.parse_primary(self)

    def function_body(self) -> Expr:
        """
        Parse a parameter list and body once the opening '(' is consumed.
        """
        return _expr.parse_function_body(self)

    # Statement wrappers
    def declaration(self) -> Stmt | None:
        """
        Parse a declaration or statement, recovering from syntax errors.
        """
        return _stmt.parse_declaration(self)

    def statement(self) -> Stmt:
        """
        Parse a single non-declaration statement.
        """
        return _stmt.parse_statement(self)

    def block(self) -> list[Stmt]:
        """
        Parse the statements of a block once the '{' is consumed.
        """
        return _stmt.parse_block(self)

    def parse(self) -> list[Stmt]:
        """
        Parse the full input into a list of statements.

        Statements that failed to parse are dropped; their errors are on
        the reporter.
        """
        statements = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements
