"""
Tests for the native built-ins clock, read and readNumber
"""
import io
import sys

from loxlang.tests.utils import messages, run_source


def feed_stdin(monkeypatch, text: str) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))


def test_clock_returns_seconds(capsys):
    run_source("var t = clock();\nprint t > 1000000000;\nprint clock() - t >= 0;")
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["true", "true"]


def test_read_returns_line_without_newline(monkeypatch, capsys):
    feed_stdin(monkeypatch, "hello world\nsecond\n")
    run_source('print read() + "!";\nprint read();')
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["hello world!", "second"]


def test_read_at_end_of_input_is_runtime_error(monkeypatch):
    feed_stdin(monkeypatch, "")
    interpreter = run_source("read();")
    assert messages(interpreter) == ["No line found."]


def test_read_number(monkeypatch, capsys):
    """
    Test that readNumber skips blank lines and parses the first token.
    """
    feed_stdin(monkeypatch, "\n   42 and more\n2.5\n")
    run_source("print readNumber() + 1;\nprint readNumber();")
    captured = capsys.readouterr().out.strip().splitlines()
    assert captured == ["43", "2.5"]


def test_read_number_rejects_non_numbers(monkeypatch):
    feed_stdin(monkeypatch, "abc\n")
    interpreter = run_source("\nreadNumber();")
    assert messages(interpreter) == ["Cannot convert input to a number."]
    assert interpreter.reporter.diagnostics[0].line == 2


def test_natives_check_arity():
    interpreter = run_source("clock(1);")
    assert messages(interpreter) == ["Expected 0 arguments but got 1."]
