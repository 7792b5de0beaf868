"""Tree-walking evaluator for Lox.

The interpreter executes the statement list produced by the parser,
using the binding table computed by the resolver to find local
variables. It owns two pieces of state: the permanent ``globals``
environment (seeded with the native functions) and ``environment``, the
scope currently in effect, which changes as blocks and calls are
entered and is always restored on the way out, error paths included.

``return`` is implemented by raising :class:`ReturnSignal`, which unwinds
through blocks and loops until the function call that is executing
catches it. Runtime failures raise :class:`LoxRuntimeError` and abort the
whole ``run``; output already written stays written.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Dict, List, Optional, Sequence, TextIO, Union

from .ast import (
    Expr, Stmt, Assign, Binary, Call, Grouping, Literal, Logical, Unary,
    Variable, Block, Expression, Function, If, Print, Return, Var, While,
)
from .callables import LoxCallable, UserFunction
from .environment import Environment
from .errors import LoxRuntimeError, ReturnSignal
from .parser import Parser
from .resolver import Resolver
from .scanner import Scanner
from .std import populate_globals
from .types import Token, TokenType, format_number

# each Lox call nests several Python frames
RECURSION_LIMIT = 4000


def stringify(value: Any) -> str:
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def is_truthy(value: Any) -> bool:
    # only nil and false are falsy
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # kinds never compare equal across types (true != 1)
    if type(a) is not type(b):
        return False
    if isinstance(a, LoxCallable):
        return a is b
    return a == b


class Interpreter:
    """Executes resolved Lox statements."""
    def __init__(self, output: Optional[TextIO] = None, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.globals = populate_globals(Environment())
        self.environment = self.globals
        self.locals: Dict[Expr, int] = {}
        self.output = output
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp: Optional[TextIO] = None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp is None:
                self.debug_fp = open(self.debug_file, 'a', encoding='utf-8')
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, statements: Sequence[Stmt], bindings: Optional[Dict[Expr, int]] = None) -> None:
        if bindings:
            self.locals.update(bindings)
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        self.debug(f"run {len(statements)} statements")
        try:
            for stmt in statements:
                self.execute(stmt)
        except ReturnSignal:
            raise AssertionError('return escaped to top level; the resolver should have rejected it')
        self.debug('run finished')

    def execute_block(self, statements: Sequence[Stmt], environment: Environment) -> None:
        previous = self.environment
        self.environment = environment
        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    def execute(self, stmt: Stmt) -> None:
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression)
            return
        if isinstance(stmt, Print):
            value = self.evaluate(stmt.expression)
            out = self.output if self.output is not None else sys.stdout
            out.write(stringify(value) + '\n')
            return
        if isinstance(stmt, Var):
            value = None
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer)
            self.environment.define(stmt.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {stmt.name.lexeme} = {stringify(value)}")
            return
        if isinstance(stmt, Block):
            self.execute_block(stmt.statements, Environment(parent=self.environment))
            return
        if isinstance(stmt, Function):
            function = UserFunction(stmt, self.environment)
            self.environment.define(stmt.name.lexeme, function)
            if self.debug_level >= 2:
                self.debug(f"define function {stmt.name.lexeme}/{function.arity()}")
            return
        if isinstance(stmt, If):
            cond = self.evaluate(stmt.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {stringify(cond)} -> {truthy}")
            if truthy:
                self.execute(stmt.then_branch)
            elif stmt.else_branch is not None:
                self.execute(stmt.else_branch)
            return
        if isinstance(stmt, While):
            while is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.body)
            return
        if isinstance(stmt, Return):
            value = None
            if stmt.value is not None:
                value = self.evaluate(stmt.value)
            raise ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(stmt)}")

    def evaluate(self, expr: Expr) -> Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, Variable):
            return self.look_up_variable(expr.name, expr)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            distance = self.locals.get(expr)
            if distance is not None:
                self.environment.assign_at(distance, expr.name, value)
            else:
                self.globals.assign(expr.name, value)
            return value
        if isinstance(expr, Logical):
            left = self.evaluate(expr.left)
            if expr.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right)
        if isinstance(expr, Unary):
            right = self.evaluate(expr.right)
            if expr.operator.type == TokenType.BANG:
                return not is_truthy(right)
            if expr.operator.type == TokenType.MINUS:
                self.check_number_operand(expr.operator, right)
                return -right
            raise LoxRuntimeError(expr.operator, f"Unknown unary operator '{expr.operator.lexeme}'.")
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self.apply_binary_op(expr.operator, left, right)
        if isinstance(expr, Call):
            callee = self.evaluate(expr.callee)
            arguments = [self.evaluate(argument) for argument in expr.arguments]
            return self.call_function(callee, arguments, expr.paren)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr)}")

    def look_up_variable(self, name: Token, expr: Expr) -> Any:
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def call_function(self, callee: Any, arguments: List[Any], paren: Token) -> Any:
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(paren, 'Can only call functions and classes.')
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        if self.debug_level >= 3:
            self.debug(f"call {callee!r} with {len(arguments)} arguments")
        return callee.call(self, arguments)

    @staticmethod
    def check_number_operand(operator: Token, operand: Any) -> None:
        if isinstance(operand, float):
            return
        raise LoxRuntimeError(operator, 'Operand must be a number.')

    @staticmethod
    def check_number_operands(operator: Token, left: Any, right: Any) -> None:
        if isinstance(left, float) and isinstance(right, float):
            return
        raise LoxRuntimeError(operator, 'Operands must be numbers.')

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if isinstance(a, float) and isinstance(b, float):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError(operator, 'Operands must be two numbers or two strings.')
        if op == TokenType.EQUAL_EQUAL:
            return values_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not values_equal(a, b)
        self.check_number_operands(operator, a, b)
        if op == TokenType.MINUS:
            return a - b
        if op == TokenType.STAR:
            return a * b
        if op == TokenType.SLASH:
            return self.divide(a, b)
        if op == TokenType.GREATER:
            return a > b
        if op == TokenType.GREATER_EQUAL:
            return a >= b
        if op == TokenType.LESS:
            return a < b
        if op == TokenType.LESS_EQUAL:
            return a <= b
        raise LoxRuntimeError(operator, f"Unknown operator '{operator.lexeme}'.")

    @staticmethod
    def divide(a: float, b: float) -> float:
        # IEEE-754 semantics instead of ZeroDivisionError
        if b == 0.0:
            if a == 0.0 or math.isnan(a):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return a / b


def run_program(source: Union[str, bytes], output: Optional[TextIO] = None, debug_level: int = 0) -> Interpreter:
    """Scan, parse, resolve and run a Lox program from source.

    The first error of the first failing phase is raised. Returns the
    interpreter so callers can inspect its globals.
    """
    tokens = Scanner(source).scan_tokens()
    parser = Parser(tokens)
    statements = parser.parse()
    if parser.errors:
        raise parser.errors[0]
    interpreter = Interpreter(output=output, debug_level=debug_level)
    bindings = Resolver(interpreter.globals.values).resolve(statements)
    try:
        interpreter.run(statements, bindings)
    finally:
        interpreter.close()
    return interpreter
