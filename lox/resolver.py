"""Static scope resolution for Lox.

Before anything runs, the resolver walks the whole program once and
works out, for every local variable reference, how many enclosing scopes
separate the use from the declaration. The interpreter uses these
distances to jump straight to the right environment instead of searching
outward by name, which keeps closures bound to the scope they were
written in even if an inner scope later shadows the name.

References that are not found in any block scope are globals. No entry
is recorded for them and the interpreter looks them up by name.

The resolver rejects three static mistakes: reading a variable inside
its own initializer, ``return`` outside a function, and declaring the
same name twice in one local scope. Inside an initializer the name being
declared is not yet in scope, so ``{ var a = a + 1; }`` reads the
enclosing ``a``; it is only an error when there is no enclosing ``a``
(a local in an outer block, or a global that is already defined).
"""

from __future__ import annotations

import enum
from typing import Dict, Iterable, List, Sequence

from .ast import (
    Expr, Stmt, Assign, Binary, Call, Grouping, Literal, Logical, Unary,
    Variable, Block, Expression, Function, If, Print, Return, Var, While,
)
from .errors import ResolveError
from .std import NATIVES
from .types import Token


class FunctionType(enum.Enum):
    NONE = 'none'
    FUNCTION = 'function'


class Resolver:
    def __init__(self, known_globals: Iterable[str] = ()):
        self.scopes: List[Dict[str, bool]] = []
        # name -> ready flag for top-level declarations
        self.globals: Dict[str, bool] = {name: True for name in known_globals}
        self.current_function = FunctionType.NONE
        self.locals: Dict[Expr, int] = {}

    def resolve(self, statements: Sequence[Stmt]) -> Dict[Expr, int]:
        try:
            self.resolve_statements(statements)
        except ResolveError:
            # leave the resolver usable for the next REPL line
            self.scopes.clear()
            self.current_function = FunctionType.NONE
            self.globals = {name: ready for name, ready in self.globals.items() if ready}
            raise
        return self.locals

    def resolve_statements(self, statements: Sequence[Stmt]) -> None:
        for stmt in statements:
            self.resolve_stmt(stmt)

    def resolve_stmt(self, stmt: Stmt) -> None:
        if isinstance(stmt, Block):
            self.begin_scope()
            self.resolve_statements(stmt.statements)
            self.end_scope()
            return
        if isinstance(stmt, Var):
            self.declare(stmt.name)
            if stmt.initializer is not None:
                self.resolve_expr(stmt.initializer)
            self.define(stmt.name)
            return
        if isinstance(stmt, Function):
            # the name is ready before the body so the function can recurse
            self.declare(stmt.name)
            self.define(stmt.name)
            self.resolve_function(stmt, FunctionType.FUNCTION)
            return
        if isinstance(stmt, Expression):
            self.resolve_expr(stmt.expression)
            return
        if isinstance(stmt, If):
            self.resolve_expr(stmt.condition)
            self.resolve_stmt(stmt.then_branch)
            if stmt.else_branch is not None:
                self.resolve_stmt(stmt.else_branch)
            return
        if isinstance(stmt, Print):
            self.resolve_expr(stmt.expression)
            return
        if isinstance(stmt, Return):
            if self.current_function is FunctionType.NONE:
                raise ResolveError(stmt.keyword, "Can't return from top-level code.")
            if stmt.value is not None:
                self.resolve_expr(stmt.value)
            return
        if isinstance(stmt, While):
            self.resolve_expr(stmt.condition)
            self.resolve_stmt(stmt.body)
            return
        raise NotImplementedError(f"resolve: unexpected statement type {type(stmt)}")

    def resolve_expr(self, expr: Expr) -> None:
        if isinstance(expr, Variable):
            self.resolve_variable(expr)
            return
        if isinstance(expr, Assign):
            self.resolve_expr(expr.value)
            self.resolve_local(expr, expr.name)
            return
        if isinstance(expr, (Binary, Logical)):
            self.resolve_expr(expr.left)
            self.resolve_expr(expr.right)
            return
        if isinstance(expr, Call):
            self.resolve_expr(expr.callee)
            for argument in expr.arguments:
                self.resolve_expr(argument)
            return
        if isinstance(expr, Grouping):
            self.resolve_expr(expr.expression)
            return
        if isinstance(expr, Unary):
            self.resolve_expr(expr.right)
            return
        if isinstance(expr, Literal):
            return
        raise NotImplementedError(f"resolve: unexpected expression type {type(expr)}")

    def resolve_variable(self, expr: Variable) -> None:
        name = expr.name
        if not self.scopes:
            if self.globals.get(name.lexeme) is False:
                raise ResolveError(name, "Can't read local variable in its own initializer.")
            return
        if self.scopes[-1].get(name.lexeme) is False:
            # inside its own initializer the name still means the shadowed outer variable
            if not self.resolve_local(expr, name, skip=1) and not self.globals.get(name.lexeme):
                raise ResolveError(name, "Can't read local variable in its own initializer.")
            return
        self.resolve_local(expr, name)

    def resolve_local(self, expr: Expr, name: Token, skip: int = 0) -> bool:
        for depth, scope in enumerate(reversed(self.scopes)):
            if depth >= skip and name.lexeme in scope:
                self.locals[expr] = depth
                return True
        return False

    def resolve_function(self, function: Function, function_type: FunctionType) -> None:
        enclosing_function = self.current_function
        self.current_function = function_type
        self.begin_scope()
        try:
            for param in function.params:
                self.declare(param)
                self.define(param)
            self.resolve_statements(function.body)
        finally:
            self.end_scope()
            self.current_function = enclosing_function

    def begin_scope(self) -> None:
        self.scopes.append({})

    def end_scope(self) -> None:
        self.scopes.pop()

    def declare(self, name: Token) -> None:
        if not self.scopes:
            # an already defined global stays readable while it is redeclared
            if not self.globals.get(name.lexeme):
                self.globals[name.lexeme] = False
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            raise ResolveError(name, 'Already a variable with this name in this scope.')
        scope[name.lexeme] = False

    def define(self, name: Token) -> None:
        if not self.scopes:
            self.globals[name.lexeme] = True
            return
        self.scopes[-1][name.lexeme] = True


def resolve(statements: Sequence[Stmt]) -> Dict[Expr, int]:
    """Resolve a program and return its binding table."""
    return Resolver(native.name for native in NATIVES).resolve(statements)
