"""Lexer for Lox.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its kind, lexeme, literal value and source line number.

Tokens cover literals (numbers, strings), identifiers and keywords
(``class``, ``fun``, ``while`` …), operators and delimiters. Comment text
beginning with ``//`` or enclosed within ``/* … */`` is skipped during
tokenization, and newlines inside comments and strings still advance the
line counter so diagnostics stay accurate.

Lexical errors never abort the scan: they are reported through the
:class:`~loxlang.errors.ErrorReporter` and scanning resumes with the next
character.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import re
from typing import Any

from loxlang.errors import ErrorReporter
from loxlang.token_types import KEYWORDS, TokenType


class Token:
    """
    Represents a lexical token with a kind, lexeme, literal and line.
    """
    __slots__ = ("type", "lexeme", "literal", "line")

    def __init__(self, type_: TokenType, lexeme: str, literal: Any, line: int):
        """
        Initialize a new token.

        Parameters:
            type_ (TokenType): The token kind.
            lexeme (str): The exact source text of the token.
            literal (Any): The literal value for numbers and strings, else None.
            line (int): The line the token was scanned on.
        """
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)

    def __setattr__(self, name, value):
        raise AttributeError("Token is immutable")

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.lexeme!r}, {self.literal!r}, line={self.line})"


_SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    '?': TokenType.QUESTION_MARK,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    ':': TokenType.COLON,
    '/': TokenType.SLASH,
    '*': TokenType.STAR,
    '%': TokenType.PERCENT,
    '!': TokenType.BANG,
    '=': TokenType.EQUAL,
    '>': TokenType.GREATER,
    '<': TokenType.LESS,
}

_DOUBLE_CHAR_TOKENS = {
    '!=': TokenType.BANG_EQUAL,
    '==': TokenType.EQUAL_EQUAL,
    '>=': TokenType.GREATER_EQUAL,
    '<=': TokenType.LESS_EQUAL,
}

_TOKEN_PATTERNS: list[tuple[str, str]] = [
    # Comments
    ('LINE_COMMENT',   r'//[^\n]*'),
    ('BLOCK_COMMENT',  r'/\*.*?\*/'),
    ('OPEN_COMMENT',   r'/\*.*'),

    # Literals
    ('NUMBER',         r'\d+(?:\.\d+)?'),
    ('STRING',         r'"[^"]*"'),
    ('OPEN_STRING',    r'"[^"]*'),

    # Identifiers and keywords
    ('IDENTIFIER',     r'[A-Za-z_][A-Za-z0-9_]*'),

    # Operators and delimiters
    ('DOUBLE',         r'!=|==|>=|<='),
    ('SINGLE',         r'[(){}?,.\-+;:/*%!=<>]'),

    # Miscellaneous
    ('NEWLINE',        r'\n'),
    ('SKIP',           r'[ \t\r]+'),
    ('MISMATCH',       r'.'),
]

_TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in _TOKEN_PATTERNS),
    re.DOTALL,
)


def tokenize(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        source (str): The source code to tokenize.
        reporter (ErrorReporter): Receives lexical errors. A default reporter
            writing to stderr is used when omitted.

    Returns:
        list[Token]: The tokens in source order, terminated by an EOF token.
    """
    if reporter is None:
        reporter = ErrorReporter()

    tokens: list[Token] = []
    line_num = 1

    for match_obj in _TOKEN_REGEX.finditer(source):
        kind = match_obj.lastgroup
        value = match_obj.group()

        if kind == 'NEWLINE':
            line_num += 1
            continue
        if kind in ('SKIP', 'LINE_COMMENT'):
            continue
        if kind in ('BLOCK_COMMENT', 'OPEN_COMMENT'):
            line_num += value.count('\n')
            continue
        if kind == 'MISMATCH':
            reporter.error(line_num, f"Unexpected character: {value}.")
            continue

        if kind == 'NUMBER':
            tokens.append(Token(TokenType.NUMBER, value, float(value), line_num))
        elif kind == 'STRING':
            line_num += value.count('\n')
            tokens.append(Token(TokenType.STRING, value, value[1:-1], line_num))
        elif kind == 'OPEN_STRING':
            line_num += value.count('\n')
            reporter.error(line_num, "Unterminated string.")
        elif kind == 'IDENTIFIER':
            type_ = KEYWORDS.get(value, TokenType.IDENTIFIER)
            tokens.append(Token(type_, value, None, line_num))
        elif kind == 'DOUBLE':
            tokens.append(Token(_DOUBLE_CHAR_TOKENS[value], value, None, line_num))
        else:
            tokens.append(Token(_SINGLE_CHAR_TOKENS[value], value, None, line_num))

    tokens.append(Token(TokenType.EOF, "", None, line_num))
    return tokens
