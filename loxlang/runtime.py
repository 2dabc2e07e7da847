"""Runtime object model.

Runtime values are plain Python objects: ``None`` for nil, ``bool``,
``float`` for every number and ``str``. Everything else is defined here:

- :class:`LoxCallable` is the capability shared by everything that can be
  called: native functions, user functions and classes.
- :class:`LoxFunction` is a closure. Binding it to an instance returns a
  *new* function whose captured frame defines ``this``; functions are never
  mutated in place.
- :class:`LoxInstance` stores fields; methods are found through its class
  and bound lazily on every access.
- :class:`LoxClass` is itself an instance, of its metaclass. The metaclass
  holds the static methods, so property access on a class value uses the
  same lookup as property access on an ordinary instance.
- :class:`LoxModule` exposes the global frame of an imported program.


File: runtime.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable

from loxlang.control import Returned
from loxlang.environment import Environment
from loxlang.exceptions import LoxRuntimeError
from loxlang.nodes import AnonymousFunction, FunctionKind

if TYPE_CHECKING:
    from loxlang.interpreter import Interpreter


class LoxCallable(ABC):
    """Anything that can appear as the callee of a call expression."""

    @abstractmethod
    def arity(self) -> int:
        """Number of arguments the callee accepts."""

    @abstractmethod
    def call(self, interpreter: Interpreter, arguments: list[Any]) -> Any:
        """Invoke the callee with already-evaluated, arity-checked arguments."""


class NativeFunction(LoxCallable):
    """A built-in implemented in Python."""

    def __init__(self, name: str, arity: int, function: Callable[..., Any]):
        self.name = name
        self._arity = arity
        self.function = function

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter, arguments):
        return self.function(*arguments)

    def __str__(self) -> str:
        return "<native fn>"


class LoxFunction(LoxCallable):
    """A user-defined function, method or anonymous function."""

    def __init__(
        self,
        name: str | None,
        kind: FunctionKind,
        declaration: AnonymousFunction,
        closure: Environment,
        is_initializer: bool = False,
    ):
        self.name = name if name is not None else "anonymous"
        self.kind = kind if name is not None else FunctionKind.FUNCTION
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        result = interpreter.execute_block(self.declaration.body, environment)

        if self.is_initializer:
            return self.closure.get_at(0, "this")
        if isinstance(result, Returned):
            return result.value
        return None

    def bind(self, instance: LoxInstance) -> LoxFunction:
        """
        Return a copy of this function whose frame defines ``this``.
        """
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.name, self.kind, self.declaration, environment, self.is_initializer)

    def __str__(self) -> str:
        return f"<{self.kind} {self.name}>"


class LoxInstance:
    """An object with fields, created by calling a class."""

    def __init__(self, klass: LoxClass | None):
        self.klass = klass
        self.fields: dict[str, Any] = {}

    def get(self, name) -> Any:
        """
        Read a field, or else a method bound to this instance.

        Raises:
            LoxRuntimeError: If neither exists.
        """
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise LoxRuntimeError(name, f"Undefined property '{name.lexeme}'.")

    def set(self, name, value: Any) -> None:
        self.fields[name.lexeme] = value

    def __str__(self) -> str:
        return f"<{self.klass.name} instance>"


class LoxClass(LoxInstance, LoxCallable):
    """
    A class value. Calling it constructs an instance.

    Parameters:
        name (str): The class name.
        superclass (LoxClass | None): The class inherited from, if any.
        methods (dict): Methods looked up on instances of this class.
        metaclass (LoxClass | None): Class of this class value. A class
            created without one is its own metaclass, which ends the chain.
    """

    def __init__(
        self,
        name: str,
        superclass: LoxClass | None,
        methods: dict[str, LoxFunction],
        metaclass: LoxClass | None = None,
    ):
        super().__init__(metaclass)
        if metaclass is None:
            self.klass = self
        self.name = name
        self.superclass = superclass
        self.methods = methods

    @classmethod
    def build(
        cls,
        name: str,
        superclass: LoxClass | None,
        methods: dict[str, LoxFunction],
    ) -> LoxClass:
        """
        Build a class and its metaclass from a mixed table of methods.
        Static methods go to the metaclass, whose superclass is the
        superclass's metaclass so static methods are inherited too.
        """
        instance_methods = {}
        static_methods = {}
        for method_name, method in methods.items():
            if method.kind == FunctionKind.STATIC_METHOD:
                static_methods[method_name] = method
            else:
                instance_methods[method_name] = method

        meta_super = superclass.klass if superclass is not None else None
        metaclass = cls(f"{name} meta", meta_super, static_methods)
        return cls(name, superclass, instance_methods, metaclass)

    def find_method(self, name: str) -> LoxFunction | None:
        """
        Look a method up on this class, then up the superclass chain.
        """
        if name in self.methods:
            return self.methods[name]
        if self.superclass is not None:
            return self.superclass.find_method(name)
        return None

    def arity(self) -> int:
        initializer = self.find_method("init")
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, interpreter, arguments):
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self) -> str:
        return f"<class {self.name}>"


class LoxModule:
    """
    An imported program. Only its global frame is visible to the importer.
    """

    def __init__(self, name: str, globals_: Environment, locals_: dict):
        self.name = name
        self.globals = globals_
        self.locals = locals_

    def get(self, name) -> Any:
        """
        Read a global binding of the module.

        Raises:
            UndefinedVariableError: If the module defines no such name.
        """
        return self.globals.get(name)

    def __str__(self) -> str:
        return f"<module {self.name}>"


def stringify(value: Any) -> str:
    """
    Render a runtime value the way ``print`` shows it.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = _format_number(value)
        return text[:-2] if text.endswith(".0") else text
    return str(value)


def _format_number(value: float) -> str:
    """
    Shortest round-tripping form of ``value``: plain decimal for magnitudes
    in [1e-3, 1e7), otherwise scientific as in ``1.5E-5`` or ``1.0E20``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0 or 1e-3 <= abs(value) < 1e7:
        return repr(value)

    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    mantissa = str(digits[0]) + "." + ("".join(map(str, digits[1:])) or "0")
    return f"{'-' if sign else ''}{mantissa}E{len(digits) - 1 + exponent}"
