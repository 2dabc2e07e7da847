"""Error reporting.

The reporter prints syntax, resolution and runtime errors in the fixed
``[line N] Error<where>: <message>`` format, keeps the sticky flags the
driver uses to pick an exit code, and records every diagnostic so tools
can consume them without reading stderr.


File: errors.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import sys
from dataclasses import dataclass
from typing import TextIO

from loxlang.token_types import TokenType


@dataclass(frozen=True)
class Diagnostic:
    """A reported error."""

    line: int
    where: str
    message: str
    kind: str = "syntax"

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ErrorReporter:
    """
    Collects and prints diagnostics.

    Parameters:
        stream (TextIO | None): Where diagnostics are printed. ``None`` means
            the current ``sys.stderr`` at the time of reporting.
        silent (bool): Record diagnostics without printing them.
    """

    def __init__(self, stream: TextIO | None = None, silent: bool = False):
        self.stream = stream
        self.silent = silent
        self.had_error = False
        self.had_runtime_error = False
        self.diagnostics: list[Diagnostic] = []

    def error(self, line: int, message: str) -> None:
        """
        Report a syntax error at ``line`` with no token context.
        """
        self._report(Diagnostic(line, "", message))

    def token_error(self, token, message: str) -> None:
        """
        Report a syntax or resolution error at ``token``.
        """
        if token.type == TokenType.EOF:
            where = " at end"
        else:
            where = f" at '{token.lexeme}'"
        self._report(Diagnostic(token.line, where, message))

    def runtime_error(self, error) -> None:
        """
        Report a runtime error raised during evaluation.
        """
        diagnostic = Diagnostic(error.line, "", error.message, "runtime")
        self.diagnostics.append(diagnostic)
        self.had_runtime_error = True
        self._write(str(diagnostic))

    def reset(self) -> None:
        """
        Clear the sticky flags, as the REPL does between lines.
        """
        self.had_error = False
        self.had_runtime_error = False

    def _report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        self.had_error = True
        self._write(str(diagnostic))

    def _write(self, text: str) -> None:
        if self.silent:
            return
        print(text, file=self.stream if self.stream is not None else sys.stderr)
