"""Scope frames.

An :class:`Environment` maps names to values and links to its enclosing
frame. Frames are shared by reference: every block, call and closure that
captured a frame sees the same bindings, so a write through one holder is
visible to all of them.


File: environment.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

from typing import Any

from loxlang.exceptions import UndefinedVariableError


class Environment:
    """A single scope frame."""

    def __init__(self, enclosing: Environment | None = None):
        self.values: dict[str, Any] = {}
        self.enclosing = enclosing

    def define(self, name: str, value: Any) -> None:
        """
        Bind ``name`` in this frame, replacing any existing binding.
        """
        self.values[name] = value

    def contains(self, name: str) -> bool:
        """
        Whether ``name`` is bound in this frame (enclosing frames excluded).
        """
        return name in self.values

    def get(self, token) -> Any:
        """
        Look ``token`` up through the chain of frames.

        Raises:
            UndefinedVariableError: If no frame binds the name.
        """
        env = self
        while env is not None:
            if token.lexeme in env.values:
                return env.values[token.lexeme]
            env = env.enclosing
        raise UndefinedVariableError(token)

    def assign(self, token, value: Any) -> None:
        """
        Rebind ``token`` in the nearest frame that defines it.

        Raises:
            UndefinedVariableError: If no frame binds the name.
        """
        env = self
        while env is not None:
            if token.lexeme in env.values:
                env.values[token.lexeme] = value
                return
            env = env.enclosing
        raise UndefinedVariableError(token)

    def ancestor(self, distance: int) -> Environment:
        """
        The frame ``distance`` hops up the chain.
        """
        env = self
        for _ in range(distance):
            env = env.enclosing
        return env

    @property
    def root(self) -> Environment:
        """
        The outermost frame of the chain: the globals of the program (or
        module) this frame belongs to.
        """
        env = self
        while env.enclosing is not None:
            env = env.enclosing
        return env

    def get_at(self, distance: int, name: str) -> Any:
        """
        Read ``name`` from the frame the resolver said declares it.
        """
        return self.ancestor(distance).values[name]

    def assign_at(self, distance: int, token, value: Any) -> None:
        """
        Write ``token`` in the frame the resolver said declares it.
        """
        self.ancestor(distance).values[token.lexeme] = value

    def __repr__(self) -> str:
        depth = 0
        env = self.enclosing
        while env is not None:
            depth += 1
            env = env.enclosing
        return f"Environment({sorted(self.values)}, depth={depth})"
