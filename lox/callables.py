"""Callable runtime values.

Every value a Lox call expression can invoke is a :class:`LoxCallable`.
There are exactly two kinds: functions declared in Lox source
(:class:`UserFunction`) and functions implemented in Python
(:class:`NativeFunction`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, List

from .ast import Function
from .environment import Environment
from .errors import ReturnSignal

if TYPE_CHECKING:
    from .interpreter import Interpreter


class LoxCallable(ABC):
    @abstractmethod
    def arity(self) -> int:
        ...

    @abstractmethod
    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        ...


class UserFunction(LoxCallable):
    """A function declared in Lox, paired with the environment it closes over."""
    def __init__(self, declaration: Function, closure: Environment):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        # parameters live in a fresh scope chained to the closure, not the caller
        environment = Environment(parent=self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)
        try:
            interpreter.execute_block(self.declaration.body, environment)
        except ReturnSignal as r:
            return r.value
        return None

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return f"<function {self.name}>"


class NativeFunction(LoxCallable):
    """A function implemented in Python.

    ``fn`` receives the interpreter and the evaluated argument list.
    """
    def __init__(self, name: str, arity: int, fn: Callable[['Interpreter', List[Any]], Any]):
        self.name = name
        self._arity = arity
        self.fn = fn

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        return self.fn(interpreter, arguments)

    def __str__(self) -> str:
        return '<native fn>'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
