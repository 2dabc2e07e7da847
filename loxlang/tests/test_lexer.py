"""
Tests for the Lox lexer
"""
import pytest

from loxlang.errors import ErrorReporter
from loxlang.lexer import Token, tokenize
from loxlang.token_types import TokenType


def types_of(source: str) -> list[TokenType]:
    return [t.type for t in tokenize(source, ErrorReporter(silent=True))]


def test_simple_declaration():
    """
    Test that a declaration yields the expected token kinds and literal.
    """
    tokens = tokenize("var x = 1.5;")
    assert [t.type for t in tokens] == [
        TokenType.VAR,
        TokenType.IDENTIFIER,
        TokenType.EQUAL,
        TokenType.NUMBER,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert tokens[3].literal == 1.5
    assert tokens[1].lexeme == "x"


def test_numbers_are_floats():
    tokens = tokenize("42")
    assert tokens[0].literal == 42.0
    assert isinstance(tokens[0].literal, float)


def test_two_character_operators():
    assert types_of("!= == <= >= ! = < > %") == [
        TokenType.BANG_EQUAL,
        TokenType.EQUAL_EQUAL,
        TokenType.LESS_EQUAL,
        TokenType.GREATER_EQUAL,
        TokenType.BANG,
        TokenType.EQUAL,
        TokenType.LESS,
        TokenType.GREATER,
        TokenType.PERCENT,
        TokenType.EOF,
    ]


def test_keywords_and_identifiers():
    assert types_of("break import as classy") == [
        TokenType.BREAK,
        TokenType.IMPORT,
        TokenType.AS,
        TokenType.IDENTIFIER,
        TokenType.EOF,
    ]


def test_string_literal_strips_quotes():
    tokens = tokenize('"hello"')
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].lexeme == '"hello"'
    assert tokens[0].literal == "hello"


def test_comments_are_skipped_and_count_lines():
    """
    Test that comments produce no tokens and block comment newlines still
    advance the line counter.
    """
    tokens = tokenize("// line comment\n/* a\nb */ x")
    assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.EOF]
    assert tokens[0].line == 3


def test_multiline_string_takes_end_line():
    tokens = tokenize('"a\nb";\nx')
    assert tokens[0].literal == "a\nb"
    assert tokens[0].line == 2
    assert tokens[2].lexeme == "x"
    assert tokens[2].line == 3


def test_unexpected_character_reports_and_continues():
    """
    Test that an unknown character is reported and scanning carries on.
    """
    reporter = ErrorReporter(silent=True)
    tokens = tokenize("var @ x;", reporter)
    assert [t.type for t in tokens] == [
        TokenType.VAR,
        TokenType.IDENTIFIER,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert reporter.had_error
    assert str(reporter.diagnostics[0]) == "[line 1] Error: Unexpected character: @."


def test_unterminated_string():
    reporter = ErrorReporter(silent=True)
    tokenize('print "abc', reporter)
    assert [d.message for d in reporter.diagnostics] == ["Unterminated string."]


def test_unterminated_block_comment_runs_to_end():
    reporter = ErrorReporter(silent=True)
    tokens = tokenize("x /* never closed\n y", reporter)
    assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.EOF]
    assert not reporter.had_error


def test_eof_token_is_on_last_line():
    tokens = tokenize("a\nb\n")
    assert tokens[-1].type == TokenType.EOF
    assert tokens[-1].line == 3


def test_tokens_are_immutable():
    token = Token(TokenType.IDENTIFIER, "x", None, 1)
    with pytest.raises(AttributeError):
        token.lexeme = "y"
