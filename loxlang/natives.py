"""Native built-ins.

The standard library is deliberately tiny: ``clock``, ``read`` and
``readNumber``. Failures are raised as ordinary Python exceptions; the
interpreter turns them into runtime errors at the call site.


File: natives.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import sys
import time

from loxlang.environment import Environment
from loxlang.runtime import NativeFunction


def clock() -> float:
    """
    Seconds since the epoch, as a fractional number.
    """
    return time.time()


def read() -> str:
    """
    One line from standard input, without the trailing newline.

    Raises:
        EOFError: At end of input.
    """
    line = sys.stdin.readline()
    if line == "":
        raise EOFError("No line found.")
    return line.rstrip("\r\n")


def read_number() -> float:
    """
    The first whitespace-separated token of the next non-blank input line,
    parsed as a number.

    Raises:
        ValueError: If the token is not numeric or input ran out.
    """
    while True:
        line = sys.stdin.readline()
        if line == "":
            raise ValueError("Cannot convert input to a number.")
        parts = line.split()
        if parts:
            break
    try:
        return float(parts[0])
    except ValueError:
        raise ValueError("Cannot convert input to a number.") from None


NATIVES = (
    NativeFunction("clock", 0, clock),
    NativeFunction("read", 0, read),
    NativeFunction("readNumber", 0, read_number),
)


def define_natives(environment: Environment) -> None:
    """
    Bind every native built-in in ``environment``.
    """
    for native in NATIVES:
        environment.define(native.name, native)
