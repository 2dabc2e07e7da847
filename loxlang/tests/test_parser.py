"""
Tests for the Lox parser
"""
from loxlang.errors import ErrorReporter
from loxlang.nodes import (
    AnonymousFunction,
    Block,
    Class,
    Expression,
    FunctionKind,
    Import,
    Literal,
    Print,
    Ternary,
    Var,
    While,
)
from loxlang.printer import AstPrinter
from loxlang.tests.utils import parse_source


def render(source: str) -> list[str]:
    printer = AstPrinter()
    return [printer.print(stmt) for stmt in parse_source(source)]


def test_precedence():
    """
    Test that multiplication binds tighter than addition and comparison.
    """
    assert render("1 + 2 * 3 < 4 == true;") == ["(; (== (< (+ 1 (* 2 3)) 4) true))"]


def test_unary_and_grouping():
    assert render("-(1 + 2);") == ["(; (- (group (+ 1 2))))"]
    assert render("!!x;") == ["(; (! (! x)))"]


def test_ternary_nests_to_the_right():
    assert render("a ? b : c ? d : e;") == ["(; (?: a b (?: c d e)))"]


def test_logical_operators():
    assert render("a or b and c;") == ["(; (or a (and b c)))"]


def test_call_and_property_chains():
    """
    Test that calls and property accesses chain in any order.
    """
    assert render("a.b(c).d;") == ["(; (. (call (. a b) c) d))"]


def test_property_assignment():
    assert render("a.b = 1;") == ["(; (= (. a b) 1))"]


def test_comma_sequences_outside_parentheses():
    assert render("1, 2;") == ["(; (, 1 2))"]


def test_comma_separates_call_arguments():
    assert render("f(1, 2);") == ["(; (call f 1 2))"]
    assert render("f(g(1, 2), 3);") == ["(; (call f (call g 1 2) 3))"]


def test_comma_sequences_inside_function_body_in_call():
    """
    Test that a function body inside call arguments parses commas as
    sequencing again.
    """
    assert render("f(fun () { a, b; });") == ["(; (call f (fun () (; (, a b)))))"]


def test_for_loop_desugars_to_while():
    """
    Test that a for loop becomes { init; while (cond) { body; incr; } }.
    """
    statements = parse_source("for (var i = 0; i < 3; i = i + 1) print i;")
    assert len(statements) == 1
    outer = statements[0]
    assert isinstance(outer, Block)
    assert isinstance(outer.statements[0], Var)
    loop = outer.statements[1]
    assert isinstance(loop, While)
    assert isinstance(loop.body, Block)
    assert isinstance(loop.body.statements[0], Print)
    assert isinstance(loop.body.statements[1], Expression)


def test_for_loop_without_clauses():
    statements = parse_source("for (;;) break;")
    loop = statements[0]
    assert isinstance(loop, While)
    assert isinstance(loop.condition, Literal)
    assert loop.condition.value is True


def test_class_with_static_method():
    statements = parse_source(
        "class B < A {\n"
        "  class make() { return B(); }\n"
        "  greet() { print 1; }\n"
        "}\n"
    )
    klass = statements[0]
    assert isinstance(klass, Class)
    assert klass.superclass.name.lexeme == "A"
    assert [m.name.lexeme for m in klass.methods] == ["make", "greet"]
    assert [m.kind for m in klass.methods] == [FunctionKind.STATIC_METHOD, FunctionKind.METHOD]


def test_anonymous_function_expression_statement():
    statements = parse_source("fun (a) { return a; };")
    assert isinstance(statements[0], Expression)
    assert isinstance(statements[0].expression, AnonymousFunction)
    assert [p.lexeme for p in statements[0].expression.params] == ["a"]


def test_import_with_alias():
    statements = parse_source('import "lib/utils.lox" as u;')
    stmt = statements[0]
    assert isinstance(stmt, Import)
    assert stmt.path.literal == "lib/utils.lox"
    assert stmt.alias.lexeme == "u"


def test_invalid_assignment_target_is_reported_without_abort():
    reporter = ErrorReporter(silent=True)
    statements = parse_source("1 = 2;", reporter)
    assert len(statements) == 1
    assert [str(d) for d in reporter.diagnostics] == [
        "[line 1] Error at '=': Invalid assignment target."
    ]


def test_missing_semicolon_at_end():
    reporter = ErrorReporter(silent=True)
    parse_source("print 1", reporter)
    assert [str(d) for d in reporter.diagnostics] == [
        "[line 1] Error at end: Expect ';' after value."
    ]


def test_panic_mode_reports_multiple_errors():
    """
    Test that the parser recovers after an error and reports the next one.
    """
    reporter = ErrorReporter(silent=True)
    statements = parse_source("var = 1;\nprint 1;\nvar = 2;\n", reporter)
    assert [str(d) for d in reporter.diagnostics] == [
        "[line 1] Error at '=': Expect identifier after 'var'.",
        "[line 3] Error at '=': Expect identifier after 'var'.",
    ]
    assert len(statements) == 1
    assert isinstance(statements[0], Print)


def test_leading_question_mark():
    reporter = ErrorReporter(silent=True)
    statements = parse_source("? 1 : 2;", reporter)
    assert [d.message for d in reporter.diagnostics] == ["Expect expression before ? operator."]
    ternary = statements[0].expression
    assert isinstance(ternary, Ternary)
    assert ternary.condition.value is None


def test_too_many_arguments():
    reporter = ErrorReporter(silent=True)
    args = ", ".join(["1"] * 256)
    parse_source(f"f({args});", reporter)
    assert [d.message for d in reporter.diagnostics] == ["Can't have more than 255 arguments."]


def test_if_and_for_clause_messages():
    reporter = ErrorReporter(silent=True)
    parse_source("if (true print 1;\nfor (; true true) {}\n", reporter)
    assert [str(d) for d in reporter.diagnostics] == [
        "[line 1] Error at 'print': Expect ')' after 'if'.",
        "[line 2] Error at 'true': Expect ';' after for loop condition.",
    ]
