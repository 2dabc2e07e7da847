"""
Tests for the static scope resolver
"""
import pytest

from loxlang.errors import ErrorReporter
from loxlang.resolver import Resolver
from loxlang.tests.utils import resolve_source


def resolve_errors(source: str) -> list[str]:
    reporter = ErrorReporter(silent=True)
    resolve_source(source, reporter)
    return [d.message for d in reporter.diagnostics]


def test_resolution_is_deterministic():
    """
    Test that resolving the same AST twice yields the same table.
    """
    source = (
        "var g = 1;\n"
        "fun outer(a) {\n"
        "  var b = a;\n"
        "  fun inner() { return a + b + g; }\n"
        "  { var c = b; print c; }\n"
        "  return inner;\n"
        "}\n"
        "class A { m() { return this; } }\n"
        "class B < A { m() { return super.m(); } }\n"
    )
    statements, first = resolve_source(source)
    resolver = Resolver(ErrorReporter(silent=True))
    second = resolver.resolve(statements)
    third = resolver.resolve(statements)
    assert first == second == third
    assert len(first) > 0


def test_globals_are_left_unresolved():
    _, table = resolve_source("var g = 1; print g; g = 2;")
    assert table == {}


def test_block_local_distance():
    statements, table = resolve_source("{ var a = 1; { print a; } }")
    variable = statements[0].statements[1].statements[0].expression
    assert table[variable] == 1


def test_closure_captures_enclosing_parameter():
    statements, table = resolve_source("fun f(x) { return fun () { return x; }; }")
    anonymous = statements[0].function.body[0].value
    variable = anonymous.body[0].value
    assert table[variable] == 1


def test_this_and_super_distances():
    statements, table = resolve_source(
        "class A { m() {} }\n"
        "class B < A { m() { super.m(); return this; } }\n"
    )
    body = statements[1].methods[0].function.body
    super_expr = body[0].expression.callee
    this_expr = body[1].value
    assert table[super_expr] == 2
    assert table[this_expr] == 1


@pytest.mark.parametrize(
    "source, message",
    [
        ("{ var a = 1; var a = 2; }", "Already a variable with this name in this scope."),
        ("{ var a = a; }", "Can't read local variable in its own initializer."),
        ("return 1;", "Can't return from top-level code."),
        ("class A { init() { return 1; } }", "Can't return a value from an initializer."),
        ("print this;", "Can't use 'this' outside of a class."),
        ("fun f() { return this; }", "Can't use 'this' outside of a class."),
        ("print super.x;", "Can't use 'super' outside of a class."),
        ("class A { m() { super.m(); } }", "Can't use 'super' in a class with no superclass."),
        ("class A < A {}", "A class can't inherit from itself."),
        ("break;", "break statement must be inside a loop structure."),
        ("while (true) { fun f() { break; } }", "break statement must be inside a loop structure."),
        ("class A { m() {} m() {} }", "Methods must have different names."),
    ],
)
def test_structural_errors(source, message):
    assert resolve_errors(source) == [message]


def test_valid_programs_have_no_errors():
    source = (
        "var a = a;\n"
        "class A { init() { return; } class make() { return A(); } }\n"
        "while (true) { if (true) break; }\n"
        "for (;;) { { break; } }\n"
    )
    assert resolve_errors(source) == []


def test_errors_do_not_stop_resolution():
    """
    Test that every independent error in a program is reported.
    """
    assert resolve_errors("break;\nreturn;\nprint this;\n") == [
        "break statement must be inside a loop structure.",
        "Can't return from top-level code.",
        "Can't use 'this' outside of a class.",
    ]


def test_error_format_points_at_token():
    reporter = ErrorReporter(silent=True)
    resolve_source("\n\nbreak;", reporter)
    assert str(reporter.diagnostics[0]) == (
        "[line 3] Error at 'break': break statement must be inside a loop structure."
    )
