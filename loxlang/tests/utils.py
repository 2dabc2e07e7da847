"""
Utility functions shared across Lox Language tests.
"""
from pathlib import Path
import sys

from loxlang.errors import ErrorReporter
from loxlang.interpreter import Interpreter
from loxlang.lexer import tokenize
from loxlang.parser import Parser
from loxlang.resolver import Resolver

# Ensure the project root is on the Python path
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))


def parse_source(source: str, reporter: ErrorReporter | None = None):
    """
    Parse source code and return the AST.
    """
    reporter = reporter if reporter is not None else ErrorReporter(silent=True)
    tokens = tokenize(source, reporter)
    return Parser(tokens, reporter).parse()


def resolve_source(source: str, reporter: ErrorReporter | None = None):
    """
    Parse and resolve source code. Returns the AST and the scope table.
    """
    reporter = reporter if reporter is not None else ErrorReporter(silent=True)
    statements = parse_source(source, reporter)
    return statements, Resolver(reporter).resolve(statements)


def run_source(source: str, **kwargs) -> Interpreter:
    """
    Run source code and return the interpreter instance after execution.
    Errors are recorded on ``interpreter.reporter`` and also printed to
    stderr.
    """
    interpreter = Interpreter(ErrorReporter(), "<test>", **kwargs)
    interpreter.run(source)
    return interpreter


def messages(interpreter: Interpreter) -> list[str]:
    """
    Messages of every diagnostic the interpreter reported.
    """
    return [d.message for d in interpreter.reporter.diagnostics]
