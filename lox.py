"""
Lox Language Interpreter

This is the main entry point for the Lox language interpreter.

Workflow:
1. The source script is read from the file specified on the command line,
   or line by line from standard input in interactive mode.
2. The lexer tokenizes the source code into tokens.
3. The parser processes tokens into an AST following the language grammar.
4. The resolver computes the scope distance of every local reference.
5. The interpreter walks the AST, evaluating expressions and executing statements.

Exit codes follow the BSD sysexits convention: 64 for bad usage, 65 when
the script has syntax or resolution errors, 66 when it cannot be read and
70 when it fails at runtime.


File: lox.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import sys

from loxlang.errors import ErrorReporter
from loxlang.exceptions import LoxFatalError
from loxlang.interpreter import Interpreter

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

RECURSION_LIMIT = 10_000


def print_usage():
    """
    Print usage.
    """
    print()
    print("Lox Language Interpreter")
    print()
    print("Usage:")
    print("    lox [script.lox]")
    print()
    print("Arguments:")
    print("    <script.lox>")
    print("        Path to a Lox source file to execute.")
    print()
    print("Example:")
    print("    lox hello.lox")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")
    print()
    print("Environment:")
    print("    LOXDEBUG   Print tokens and AST before running.")
    print("    LOXPATH    Directory searched for imported modules.")


def run_script(script_name: str) -> int:
    """
    Run a Lox script and return the process exit code.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(f"Could not read '{script_name}': {e.strerror or e}", file=sys.stderr)
        return EX_NOINPUT

    reporter = ErrorReporter()
    interpreter = Interpreter(reporter, script_name)
    try:
        interpreter.run(code)
    except LoxFatalError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return EX_SOFTWARE

    if reporter.had_error:
        return EX_DATAERR
    if reporter.had_runtime_error:
        return EX_SOFTWARE
    return EX_OK


def run_repl() -> int:
    """
    Run the interactive REPL. Every line is a separate program sharing one
    interpreter, so declarations persist between lines.
    """
    print("Lox Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    reporter = ErrorReporter()
    interpreter = Interpreter(reporter, "<stdin>", repl=True)
    while True:
        try:
            line = input("> ")
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break

        if line.strip() in {"exit", "quit"}:
            break

        try:
            interpreter.run(line)
        except LoxFatalError as e:
            print(f"Fatal error: {e}", file=sys.stderr)
            return EX_SOFTWARE
        reporter.reset()
    return EX_OK


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return exit code 64.
    """
    args = argv[1:]
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return EX_OK

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    if not args:
        return run_repl()
    if len(args) == 1:
        return run_script(args[0])
    print_usage()
    return EX_USAGE


def cli() -> None:
    """
    Console-script entry point.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    cli()
