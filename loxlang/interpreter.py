"""Interpreter.

This is a tree-walk interpreter for the AST produced by the parser. It
supports arithmetic, strings, variables, closures, classes with single
inheritance and static methods, loops with ``break``, and module imports.

1. Execution Model
Statements are executed by :meth:`Interpreter.execute` and expressions are
evaluated by :meth:`Interpreter.evaluate`. Both dispatch with ``match`` over
the node dataclasses in :mod:`loxlang.nodes`.

2. Environment
The interpreter keeps a *current* :class:`~loxlang.environment.Environment`,
initially the global frame. Blocks and calls swap in a child frame and put
the previous one back on every exit path. Local references are read at the
scope distance computed by the resolver; references the resolver left out
are globals and are looked up in the outermost frame of the current chain,
which for code defined in an imported module is that module's globals.

3. Control Flow
Executing a statement returns a completion from :mod:`loxlang.control`:
``NORMAL``, ``BREAK`` or ``Returned(value)``. Blocks stop at the first
non-normal completion and hand it up; loops consume ``BREAK``; calls consume
``Returned``. No exception is ever used for ``break`` or ``return``.

4. Error Handling
Runtime errors are :class:`~loxlang.exceptions.LoxRuntimeError` carrying the
offending token. :meth:`Interpreter.interpret` stops at the first one and
reports it. Exhausting the host stack is re-raised as
:class:`~loxlang.exceptions.LoxFatalError`.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
import os
from typing import Any

from loxlang.control import BREAK, NORMAL, Completion, Returned
from loxlang.environment import Environment
from loxlang.errors import ErrorReporter
from loxlang.exceptions import LoxFatalError, LoxRuntimeError, ModuleResolutionError
from loxlang.lexer import Token, tokenize
from loxlang.modules import find_module, module_name
from loxlang.natives import define_natives
from loxlang.nodes import (
    AnonymousFunction,
    Assign,
    Binary,
    Block,
    Break,
    Call,
    Class,
    Expr,
    Expression,
    Function,
    FunctionKind,
    Get,
    Grouping,
    If,
    Import,
    Literal,
    Logical,
    Print,
    Return,
    Set,
    Stmt,
    Super,
    Ternary,
    This,
    Unary,
    Var,
    Variable,
    While,
)
from loxlang.parser import Parser
from loxlang.printer import AstPrinter
from loxlang.resolver import Resolver
from loxlang.runtime import (
    LoxCallable,
    LoxClass,
    LoxFunction,
    LoxInstance,
    LoxModule,
    NativeFunction,
    stringify,
)
from loxlang.token_types import TokenType

# Host exceptions a native built-in may raise; reported as runtime errors.
NATIVE_ERRORS = (ValueError, OSError, EOFError)


def is_truthy(value: Any) -> bool:
    """
    Only ``nil`` and ``false`` are falsy.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


class Interpreter:
    """Tree-walk interpreter for Lox."""

    def __init__(
        self,
        reporter: ErrorReporter | None = None,
        file: str = "<script>",
        repl: bool = False,
        module_root: str | os.PathLike | None = None,
    ):
        """
        Initialize the interpreter.

        Parameters:
            reporter (ErrorReporter): Receives syntax and runtime errors.
            file (str): Name of the program being run, for debug output.
            repl (bool): Echo the value of top-level expression statements.
            module_root (str | PathLike | None): Directory searched by
                ``import``. Defaults to ``LOXPATH`` or the working directory.
        """
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.file = file
        self.repl = repl
        self.module_root = module_root
        self.globals = Environment()
        self.environment = self.globals
        self.locals: dict[Expr, int] = {}
        define_natives(self.globals)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def compile(self, source: str) -> list[Stmt] | None:
        """
        Lex, parse and resolve ``source``.

        Returns:
            list | None: The resolved statements, or None if any syntax or
                resolution error was reported.
        """
        reported = len(self.reporter.diagnostics)
        tokens = tokenize(source, self.reporter)
        statements = Parser(tokens, self.reporter).parse()

        if os.environ.get("LOXDEBUG"):
            debug_print_tokens_ast(tokens, statements)

        if len(self.reporter.diagnostics) > reported:
            return None

        resolved = Resolver(self.reporter).resolve(statements)
        if len(self.reporter.diagnostics) > reported:
            return None

        self.locals.update(resolved)
        return statements

    def run(self, source: str) -> None:
        """
        Run a complete program. Errors are reported, never raised, except
        :class:`LoxFatalError` when the host stack runs out while parsing,
        resolving or executing.
        """
        try:
            statements = self.compile(source)
        except RecursionError as e:
            raise LoxFatalError("Stack overflow.") from e
        if statements is None:
            return
        self.interpret(statements)

    def interpret(self, statements: list[Stmt]) -> None:
        """
        Execute top-level statements, stopping at the first runtime error.

        Raises:
            LoxFatalError: If the host stack is exhausted.
        """
        try:
            for stmt in statements:
                if self.repl and isinstance(stmt, Expression):
                    print(stringify(self.evaluate(stmt.expression)))
                else:
                    self.execute(stmt)
        except LoxRuntimeError as e:
            self.reporter.runtime_error(e)
        except RecursionError as e:
            raise LoxFatalError("Stack overflow.") from e

    # ------------------------------------------------------------------
    # Module system
    # ------------------------------------------------------------------

    def import_module(self, path_token: Token) -> LoxModule:
        """
        Load and run another program and return it as a module value.

        The module runs in its own interpreter with its own globals. Its
        resolution table is merged into this interpreter's so functions it
        defines can be called from here.

        Raises:
            LoxRuntimeError: If the file cannot be found or read, or contains
                syntax errors. Runtime errors raised by the module itself
                propagate unchanged.
        """
        path = path_token.literal
        try:
            module_path = find_module(path, self.module_root)
            code = module_path.read_text(encoding="utf-8")
        except ModuleResolutionError as e:
            raise LoxRuntimeError(path_token, str(e)) from e
        except OSError as e:
            raise LoxRuntimeError(path_token, f"Error accessing module '{path}'.") from e

        module_interpreter = Interpreter(
            self.reporter, str(module_path), module_root=self.module_root
        )
        try:
            statements = module_interpreter.compile(code)
        except RecursionError as e:
            raise LoxFatalError("Stack overflow.") from e
        if statements is None:
            raise LoxRuntimeError(path_token, f"Error accessing module '{path}'.")

        for stmt in statements:
            module_interpreter.execute(stmt)

        self.locals.update(module_interpreter.locals)
        return LoxModule(module_name(path), module_interpreter.globals, module_interpreter.locals)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute_block(self, statements: list[Stmt], environment: Environment) -> Completion:
        """
        Execute ``statements`` in ``environment``, restoring the current
        environment afterwards.

        Returns:
            Completion: ``NORMAL``, or the first ``BREAK``/``Returned``.
        """
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                result = self.execute(stmt)
                if result is not NORMAL:
                    return result
            return NORMAL
        finally:
            self.environment = previous

    def execute(self, stmt: Stmt) -> Completion:
        """
        Execute one statement and return how it completed.
        """
        match stmt:
            case Expression(expression=expression):
                self.evaluate(expression)
                return NORMAL

            case Print(expression=expression):
                print(stringify(self.evaluate(expression)))
                return NORMAL

            case Var(name=name, initializer=initializer):
                if self.environment.contains(name.lexeme):
                    raise LoxRuntimeError(name, f"Variable '{name.lexeme}' already exist in scope.")
                value = self.evaluate(initializer) if initializer is not None else None
                self.environment.define(name.lexeme, value)
                return NORMAL

            case Block(statements=statements):
                return self.execute_block(statements, Environment(self.environment))

            case If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                if is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
                return NORMAL

            case While(condition=condition, body=body):
                while is_truthy(self.evaluate(condition)):
                    result = self.execute(body)
                    if result is BREAK:
                        break
                    if isinstance(result, Returned):
                        return result
                return NORMAL

            case Return(value=value):
                return Returned(self.evaluate(value) if value is not None else None)

            case Break():
                return BREAK

            case Function(name=name, function=function, kind=kind):
                self.environment.define(
                    name.lexeme, LoxFunction(name.lexeme, kind, function, self.environment)
                )
                return NORMAL

            case Class():
                self._execute_class(stmt)
                return NORMAL

            case Import(path=path, alias=alias):
                module = self.import_module(path)
                bound_as = alias.lexeme if alias is not None else module.name
                self.environment.define(bound_as, module)
                return NORMAL

            case _:
                raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def _execute_class(self, stmt: Class) -> None:
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        environment = self.environment
        if superclass is not None:
            environment = Environment(environment)
            environment.define("super", superclass)

        methods = {}
        for method in stmt.methods:
            if method.name.lexeme in methods:
                raise LoxRuntimeError(method.name, "Methods must have different names.")
            is_initializer = (
                method.name.lexeme == "init" and method.kind != FunctionKind.STATIC_METHOD
            )
            methods[method.name.lexeme] = LoxFunction(
                method.name.lexeme, method.kind, method.function, environment, is_initializer
            )

        klass = LoxClass.build(stmt.name.lexeme, superclass, methods)
        self.environment.assign(stmt.name, klass)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def evaluate(self, expr: Expr) -> Any:
        """
        Evaluate an expression to a runtime value.
        """
        match expr:
            case Literal(value=value):
                return value

            case Grouping(expression=expression):
                return self.evaluate(expression)

            case Variable(name=name):
                return self._look_up_variable(name, expr)

            case This(keyword=keyword):
                return self._look_up_variable(keyword, expr)

            case Assign(name=name, value=value_expr):
                value = self.evaluate(value_expr)
                distance = self.locals.get(expr)
                if distance is None:
                    self.environment.root.assign(name, value)
                else:
                    self.environment.assign_at(distance, name, value)
                return value

            case Unary(operator=operator, right=right):
                operand = self.evaluate(right)
                if operator.type == TokenType.BANG:
                    return not is_truthy(operand)
                if not _is_number(operand):
                    raise LoxRuntimeError(operator, f"Operand of '{operator.lexeme}' must be a number.")
                return -operand

            case Logical(left=left, operator=operator, right=right):
                value = self.evaluate(left)
                if operator.type == TokenType.OR:
                    if is_truthy(value):
                        return value
                elif not is_truthy(value):
                    return value
                return self.evaluate(right)

            case Ternary(condition=condition, then_branch=then_branch, else_branch=else_branch):
                if is_truthy(self.evaluate(condition)):
                    return self.evaluate(then_branch)
                return self.evaluate(else_branch)

            case Binary(left=left, operator=operator, right=right):
                return self._binary(operator, self.evaluate(left), self.evaluate(right))

            case Call():
                return self._call(expr)

            case Get(object=obj, name=name):
                target = self.evaluate(obj)
                match target:
                    case LoxModule():
                        return target.get(name)
                    case LoxInstance():
                        # A class is an instance of its metaclass, so this
                        # also covers static method lookup.
                        return target.get(name)
                    case _:
                        raise LoxRuntimeError(name, "Only instances have properties.")

            case Set(object=obj, name=name, value=value_expr):
                target = self.evaluate(obj)
                if isinstance(target, LoxModule):
                    raise LoxRuntimeError(name, "Imported modules are read-only.")
                if not isinstance(target, LoxInstance):
                    raise LoxRuntimeError(name, "Only instances have fields.")
                value = self.evaluate(value_expr)
                target.set(name, value)
                return value

            case Super(keyword=keyword, method=method_name):
                distance = self.locals[expr]
                superclass = self.environment.get_at(distance, "super")
                receiver = self.environment.get_at(distance - 1, "this")
                if isinstance(receiver, LoxClass):
                    # Inside a static method: search the static side.
                    superclass = superclass.klass
                method = superclass.find_method(method_name.lexeme)
                if method is None:
                    raise LoxRuntimeError(method_name, f"Undefined property '{method_name.lexeme}'.")
                return method.bind(receiver)

            case AnonymousFunction():
                return LoxFunction(None, FunctionKind.FUNCTION, expr, self.environment)

            case _:
                raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _look_up_variable(self, name: Token, expr: Expr) -> Any:
        distance = self.locals.get(expr)
        if distance is None:
            return self.environment.root.get(name)
        return self.environment.get_at(distance, name.lexeme)

    def _binary(self, operator: Token, left: Any, right: Any) -> Any:
        op = operator.type

        if op == TokenType.COMMA:
            return right

        if op == TokenType.PLUS:
            if _is_number(left) and _is_number(right):
                return left + right
            if isinstance(left, str) or isinstance(right, str):
                return stringify(left) + stringify(right)
            raise LoxRuntimeError(operator, "Operands of '+' must be two numbers or include a string.")

        if not (_is_number(left) and _is_number(right)):
            raise LoxRuntimeError(operator, f"Operands of '{operator.lexeme}' must be numbers.")

        match op:
            case TokenType.MINUS:
                return left - right
            case TokenType.STAR:
                return left * right
            case TokenType.SLASH:
                if right == 0:
                    raise LoxRuntimeError(operator, "Division by zero.")
                return left / right
            case TokenType.PERCENT:
                if right == 0:
                    raise LoxRuntimeError(operator, "Modulo by zero.")
                return math.fmod(left, right)
            case TokenType.GREATER:
                return left > right
            case TokenType.GREATER_EQUAL:
                return left >= right
            case TokenType.LESS:
                return left < right
            case TokenType.LESS_EQUAL:
                return left <= right
            case TokenType.EQUAL_EQUAL:
                return left == right
            case TokenType.BANG_EQUAL:
                return left != right
            case _:
                raise LoxRuntimeError(operator, f"Unknown operator '{operator.lexeme}'.")

    def _call(self, expr: Call) -> Any:
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                expr.paren,
                f"Expected {callee.arity()} arguments but got {len(arguments)}.",
            )

        if isinstance(callee, NativeFunction):
            try:
                return callee.call(self, arguments)
            except NATIVE_ERRORS as e:
                raise LoxRuntimeError(expr.paren, str(e)) from e
        return callee.call(self, arguments)


def debug_print_tokens_ast(tokens: list[Token], statements: list[Stmt]) -> None:
    """
    Print tokenized source and AST.
    """
    print("\nTokens:\n")
    for token in tokens:
        print(token)
    print("\nAST:\n")
    printer = AstPrinter()
    for stmt in statements:
        print(printer.print(stmt))
    print(" ")
