"""Abstract Syntax Tree (AST) definitions for Lox.

The AST classes defined in this module represent the syntactic structure
of parsed Lox programs. Nodes are immutable once built and compare and
hash by identity, so the resolver can key its binding table by the exact
node it resolved even when two expressions look the same. Nodes keep a
reference to the token they came from for error reporting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .types import Token


@dataclass(frozen=True, eq=False)
class Expr:
    """Base class for expression nodes."""
    pass


@dataclass(frozen=True, eq=False)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True, eq=False)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, eq=False)
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used to locate call errors
    arguments: Tuple[Expr, ...]


@dataclass(frozen=True, eq=False)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Literal(Expr):
    value: Any  # None, bool, float or str


@dataclass(frozen=True, eq=False)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, eq=False)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True, eq=False)
class Variable(Expr):
    name: Token


@dataclass(frozen=True, eq=False)
class Stmt:
    """Base class for statement nodes."""
    pass


@dataclass(frozen=True, eq=False)
class Block(Stmt):
    statements: Tuple[Stmt, ...]


@dataclass(frozen=True, eq=False)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Function(Stmt):
    name: Token
    params: Tuple[Token, ...]
    body: Tuple[Stmt, ...]


@dataclass(frozen=True, eq=False)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True, eq=False)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True, eq=False)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr]


@dataclass(frozen=True, eq=False)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True, eq=False)
class While(Stmt):
    condition: Expr
    body: Stmt
