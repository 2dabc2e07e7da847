"""Errors.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


class ParseError(SyntaxError):
    """
    Unwinds the parser to the nearest statement boundary after a syntax error.
    The error itself has already been reported when this is raised.
    """


class LoxRuntimeError(RuntimeError):
    """
    Error raised while evaluating a program.
    """
    def __init__(self, token, message):
        self.token = token
        self.message = message
        super().__init__(message)

    @property
    def line(self):
        """
        Line of the offending token.
        """
        return self.token.line if self.token is not None else 0


class UndefinedVariableError(LoxRuntimeError):
    """
    Error for undefined variables.
    """
    def __init__(self, token):
        self.varname = token.lexeme
        super().__init__(token, f"Undefined variable '{token.lexeme}'.")


class ModuleResolutionError(Exception):
    """
    Error for module paths that match no file, or more than one.
    """
    def __init__(self, path, matches=0):
        self.path = path
        self.matches = matches
        if matches == 0:
            message = f"Can't find '{path}'."
        else:
            message = f"{matches} modules named '{path}' found."
        super().__init__(message)


class LoxFatalError(Exception):
    """
    Unrecoverable host failure while running guest code, such as exhausting
    the interpreter stack.
    """
