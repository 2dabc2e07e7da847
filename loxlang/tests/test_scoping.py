"""
Tests for scoping rules in Lox
"""
from loxlang.tests.utils import messages, run_source


def test_block_scoping(capsys):
    """
    Test that a block-local declaration shadows the outer one only inside
    the block.
    """
    run_source("var x = 1; { var x = 2; print x; } print x;")
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["2", "1"]


def test_redeclaration_in_same_scope_is_runtime_error(capsys):
    interpreter = run_source("var x = 1;\nvar x = 2;\nprint x;")
    assert messages(interpreter) == ["Variable 'x' already exist in scope."]
    assert interpreter.reporter.had_runtime_error
    assert not interpreter.reporter.had_error
    assert capsys.readouterr().out == ""


def test_redeclaration_in_block_is_caught_before_running(capsys):
    interpreter = run_source('print "start";\n{ var a = 1; var a = 2; }')
    assert interpreter.reporter.had_error
    assert messages(interpreter) == ["Already a variable with this name in this scope."]
    assert capsys.readouterr().out == ""


def test_undefined_variable():
    interpreter = run_source("print y;")
    assert messages(interpreter) == ["Undefined variable 'y'."]


def test_assign_to_undefined_variable():
    interpreter = run_source("y = 1;")
    assert messages(interpreter) == ["Undefined variable 'y'."]


def test_functions_have_fresh_env(capsys):
    """
    Test that functions have a fresh environment and do not leak variables.
    """
    source = (
        "fun inner() {\n"
        "    var x = 1;\n"
        "    return x;\n"
        "}\n"
        "fun outer() {\n"
        "    var x = 2;\n"
        "    return inner();\n"
        "}\n"
        "print outer();\n"
    )
    run_source(source)
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["1"]


def test_functions_modify_globals(capsys):
    run_source("var x = 1;\nfun f() { x = 2; }\nf();\nprint x;")
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["2"]


def test_closure_keeps_its_own_counter(capsys):
    """
    Test that a closure mutates the captured binding, not a copy.
    """
    source = (
        "fun makeCounter() {\n"
        "  var i = 0;\n"
        "  fun count() { i = i + 1; return i; }\n"
        "  return count;\n"
        "}\n"
        "var a = makeCounter();\n"
        "var b = makeCounter();\n"
        "print a();\n"
        "print a();\n"
        "print b();\n"
    )
    run_source(source)
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["1", "2", "1"]


def test_closures_share_captured_frame(capsys):
    source = (
        "var get;\n"
        "fun pair() {\n"
        "  var n = 0;\n"
        "  fun inc() { n = n + 1; }\n"
        "  fun read() { return n; }\n"
        "  get = read;\n"
        "  return inc;\n"
        "}\n"
        "var inc = pair();\n"
        "inc();\n"
        "inc();\n"
        "print get();\n"
    )
    run_source(source)
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["2"]


def test_closure_binding_is_fixed_at_resolution(capsys):
    """
    Test that a later declaration in the same block does not change which
    binding an earlier closure reads.
    """
    source = (
        'var a = "global";\n'
        "{\n"
        "  fun show() { print a; }\n"
        "  show();\n"
        '  var a = "block";\n'
        "  show();\n"
        "}\n"
    )
    run_source(source)
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["global", "global"]


def test_block_environment_is_restored_after_error(capsys):
    """
    Test that a runtime error inside a block does not leave the interpreter
    in the block's scope.
    """
    interpreter = run_source("var x = 1;\n{ var x = 2; print 1 / 0; }")
    assert messages(interpreter) == ["Division by zero."]
    assert interpreter.environment is interpreter.globals
    interpreter.run("print x;")
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["1"]
