"""Statement parsing utilities for Lox.

These functions operate on a `loxlang.parser.parser.Parser` instance and
handle declarations and the various statement forms in the language such
as blocks, conditionals, loops, classes and imports.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from loxlang.exceptions import ParseError
from loxlang.nodes import (
    Block,
    Break,
    Class,
    Expression,
    Function,
    FunctionKind,
    If,
    Import,
    Literal,
    Print,
    Return,
    Stmt,
    Var,
    Variable,
    While,
)
from loxlang.token_types import TokenType

if TYPE_CHECKING:
    from loxlang.parser import Parser


def parse_declaration(parser: 'Parser') -> Stmt | None:
    """
    Parse a declaration, falling back to a plain statement. On a syntax
    error the parser resynchronizes and ``None`` is returned.

    Syntax:
        <class> | <fun> | <var> | <import> | <statement>
    """
    try:
        if parser.match(TokenType.CLASS):
            return parse_class_declaration(parser)
        if parser.check(TokenType.FUN) and parser.peek_next().type == TokenType.IDENTIFIER:
            parser.advance()
            return parse_function_declaration(parser, FunctionKind.FUNCTION)
        if parser.match(TokenType.VAR):
            return parse_var_declaration(parser)
        if parser.match(TokenType.IMPORT):
            return parse_import_declaration(parser)
        return parser.statement()
    except ParseError:
        parser.synchronize()
        return None


def parse_class_declaration(parser: 'Parser') -> Class:
    """
    Parse a class declaration. A method prefixed with ``class`` is static.

    Syntax:
        class <identifier> [< <identifier>] { ( [class] <method> )* }

    Args:
        parser: The parser instance.

    Returns:
        Class: the class declaration node.
    """
    name = parser.eat(TokenType.IDENTIFIER, "Expect class name.")

    superclass = None
    if parser.match(TokenType.LESS):
        parser.eat(TokenType.IDENTIFIER, "Expect superclass name after '<'.")
        superclass = Variable(parser.previous())

    parser.eat(TokenType.LEFT_BRACE, "Expect '{' before class body.")
    methods = []
    while not parser.check(TokenType.RIGHT_BRACE) and not parser.is_at_end():
        kind = FunctionKind.STATIC_METHOD if parser.match(TokenType.CLASS) else FunctionKind.METHOD
        methods.append(parse_function_declaration(parser, kind))
    parser.eat(TokenType.RIGHT_BRACE, "Expect '}' after class body.")

    return Class(name, superclass, methods)


def parse_function_declaration(parser: 'Parser', kind: FunctionKind) -> Function:
    """
    Parse a named function or method.

    Syntax:
        <identifier> ( <params> ) { <block> }

    Args:
        parser: The parser instance.
        kind: Whether this is a function, method or static method.

    Returns:
        Function: the declaration node.
    """
    name = parser.eat(TokenType.IDENTIFIER, f"Expect {kind} name.")
    parser.eat(TokenType.LEFT_PAREN, f"Expect '(' after '{name.lexeme}'.")
    function = parser.function_body()
    return Function(name, function, kind)


def parse_var_declaration(parser: 'Parser') -> Var:
    """
    Parse a variable declaration.

    Syntax:
        var <identifier> [= <expression>] ;
    """
    name = parser.eat(TokenType.IDENTIFIER, "Expect identifier after 'var'.")
    initializer = None
    if parser.match(TokenType.EQUAL):
        initializer = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
    return Var(name, initializer)


def parse_import_declaration(parser: 'Parser') -> Import:
    """
    Parse an import statement.

    Syntax:
        import <string> [as <identifier>] ;
    """
    path = parser.eat(TokenType.STRING, "Expect module path after 'import'.")
    alias = None
    if parser.match(TokenType.AS):
        alias = parser.eat(TokenType.IDENTIFIER, "Expect identifier after 'as'.")
    parser.eat(TokenType.SEMICOLON, "Expect ';' after module import.")
    return Import(path, alias)


def parse_statement(parser: 'Parser') -> Stmt:
    """
    Parse a single statement.

    Syntax:
        <print> | <block> | <if> | <while> | <for> | <return> | <break>
        | <expression> ;
    """
    if parser.match(TokenType.PRINT):
        return parse_print(parser)
    if parser.match(TokenType.LEFT_BRACE):
        return Block(parser.block())
    if parser.match(TokenType.IF):
        return parse_if(parser)
    if parser.match(TokenType.WHILE):
        return parse_while(parser)
    if parser.match(TokenType.FOR):
        return parse_for(parser)
    if parser.match(TokenType.RETURN):
        return parse_return(parser)
    if parser.match(TokenType.BREAK):
        return parse_break(parser)
    return parse_expression_statement(parser)


def parse_block(parser: 'Parser') -> list[Stmt]:
    """
    Parse the declarations of a block enclosed in braces.

    Syntax:
        { <declaration>* }
    """
    statements = []
    while not parser.check(TokenType.RIGHT_BRACE) and not parser.is_at_end():
        stmt = parser.declaration()
        if stmt is not None:
            statements.append(stmt)
    parser.eat(TokenType.RIGHT_BRACE, "Expect '}' after block.")
    return statements


def parse_print(parser: 'Parser') -> Print:
    """
    Parse a 'print' statement.

    Syntax:
        print <expression> ;
    """
    value = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after value.")
    return Print(value)


def parse_if(parser: 'Parser') -> If:
    """
    Parse a conditional 'if' statement with an optional else branch.

    Syntax:
        if ( <condition> ) <statement> [else <statement>]
    """
    parser.eat(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
    condition = parser.expression()
    parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after 'if'.")
    then_branch = parser.statement()
    else_branch = None
    if parser.match(TokenType.ELSE):
        else_branch = parser.statement()
    return If(condition, then_branch, else_branch)


def parse_while(parser: 'Parser') -> While:
    """
    Parse a 'while' loop.

    Syntax:
        while ( <condition> ) <statement>
    """
    parser.eat(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
    condition = parser.expression()
    parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
    body = parser.statement()
    return While(condition, body)


def parse_for(parser: 'Parser') -> Stmt:
    """
    Parse a 'for' loop and desugar it into a 'while' loop:

        { <init> while (<cond>) { <body> <increment>; } }

    A missing condition loops forever. The initializer is declared once,
    so all iterations share the same loop variable.

    Syntax:
        for ( [<var>|<expression>] ; [<condition>] ; [<increment>] ) <statement>
    """
    parser.eat(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

    if parser.match(TokenType.SEMICOLON):
        initializer = None
    elif parser.match(TokenType.VAR):
        initializer = parse_var_declaration(parser)
    else:
        initializer = parse_expression_statement(parser)

    condition = None
    if not parser.check(TokenType.SEMICOLON):
        condition = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after for loop condition.")

    increment = None
    if not parser.check(TokenType.RIGHT_PAREN):
        increment = parser.expression()
    parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

    body = parser.statement()

    if increment is not None:
        body = Block([body, Expression(increment)])
    if condition is None:
        condition = Literal(True)
    body = While(condition, body)
    if initializer is not None:
        body = Block([initializer, body])
    return body


def parse_return(parser: 'Parser') -> Return:
    """
    Parse a 'return' statement.

    Syntax:
        return [<expression>] ;
    """
    keyword = parser.previous()
    value = None
    if not parser.check(TokenType.SEMICOLON):
        value = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after return value.")
    return Return(keyword, value)


def parse_break(parser: 'Parser') -> Break:
    """
    Parse a 'break' control statement. Whether it sits inside a loop is
    checked by the resolver.

    Syntax:
        break ;
    """
    keyword = parser.previous()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after 'break'.")
    return Break(keyword)


def parse_expression_statement(parser: 'Parser') -> Expression:
    """
    Parse an expression evaluated for its side effects.

    Syntax:
        <expression> ;
    """
    expr = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after expression.")
    return Expression(expr)
