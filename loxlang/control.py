"""Statement completion results.

Executing a statement yields how it finished: normally, by ``break``, or by
``return`` with a value. Blocks, loops and calls pass these results up
explicitly, so exceptions are only ever used for genuine errors.


File: control.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass
from typing import Any


class Completion:
    """Base class of statement results."""


class Normal(Completion):
    """Execution continues with the next statement."""

    def __repr__(self) -> str:
        return "NORMAL"


class Broke(Completion):
    """A ``break`` is unwinding to the nearest loop."""

    def __repr__(self) -> str:
        return "BREAK"


@dataclass(frozen=True)
class Returned(Completion):
    """A ``return`` is unwinding to the nearest call."""

    value: Any = None


NORMAL = Normal()
BREAK = Broke()
