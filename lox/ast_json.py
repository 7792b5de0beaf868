"""Debug views of the Lox AST.

Two one-way renderings used by the CLI for inspecting what the parser
built: :func:`ast_to_string` prints nodes in a parenthesised prefix
form, and :func:`ast_to_obj` converts nodes into plain dict/list
structures suitable for JSON encoding. Neither is meant to be parsed
back; they drop detail such as token positions of operators.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .ast import (
    Assign, Binary, Call, Grouping, Literal, Logical, Unary, Variable,
    Block, Expression, Function, If, Print, Return, Var, While,
)
from .interpreter import stringify
from .types import Token


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {"lexeme": token.lexeme, "line": token.line}


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, (list, tuple)):
        return [ast_to_obj(n) for n in node]

    # Expressions
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "operator": node.operator.lexeme,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "arguments": ast_to_obj(node.arguments),
            "line": node.paren.line,
        }
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Literal):
        # None/bool/float/str are already JSON-compatible
        return {"type": "Literal", "value": node.value}
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "operator": node.operator.lexeme,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": node.operator.lexeme, "right": ast_to_obj(node.right)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}

    # Statements
    if isinstance(node, Block):
        return {"type": "Block", "statements": ast_to_obj(node.statements)}
    if isinstance(node, Expression):
        return {"type": "Expression", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Function):
        return {
            "type": "Function",
            "name": token_to_obj(node.name),
            "params": [p.lexeme for p in node.params],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, Print):
        return {"type": "Print", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Return):
        return {"type": "Return", "line": node.keyword.line, "value": ast_to_obj(node.value)}
    if isinstance(node, Var):
        return {"type": "Var", "name": token_to_obj(node.name), "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    raise TypeError(f"Unsupported node for serialization: {type(node)}")


def parenthesize(name: str, parts: Iterable[Any]) -> str:
    inner = ' '.join(ast_to_string(p) for p in parts)
    return f"({name} {inner})" if inner else f"({name})"


def literal_to_string(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    return stringify(value)


def ast_to_string(node: Optional[Any]) -> str:
    """Render a node in parenthesised prefix form, e.g. ``(* (- 123) (group 45.67))``."""
    if node is None:
        return 'nil'
    if isinstance(node, Literal):
        return literal_to_string(node.value)
    if isinstance(node, Variable):
        return node.name.lexeme
    if isinstance(node, Assign):
        return f"(= {node.name.lexeme} {ast_to_string(node.value)})"
    if isinstance(node, (Binary, Logical)):
        return parenthesize(node.operator.lexeme, (node.left, node.right))
    if isinstance(node, Unary):
        return parenthesize(node.operator.lexeme, (node.right,))
    if isinstance(node, Grouping):
        return parenthesize('group', (node.expression,))
    if isinstance(node, Call):
        return parenthesize('call', (node.callee,) + node.arguments)

    if isinstance(node, Expression):
        return f"(; {ast_to_string(node.expression)})"
    if isinstance(node, Print):
        return parenthesize('print', (node.expression,))
    if isinstance(node, Var):
        if node.initializer is None:
            return f"(var {node.name.lexeme})"
        return f"(var {node.name.lexeme} {ast_to_string(node.initializer)})"
    if isinstance(node, Block):
        return parenthesize('block', node.statements)
    if isinstance(node, If):
        parts = (node.condition, node.then_branch)
        if node.else_branch is not None:
            parts += (node.else_branch,)
        return parenthesize('if', parts)
    if isinstance(node, While):
        return parenthesize('while', (node.condition, node.body))
    if isinstance(node, Return):
        if node.value is None:
            return '(return)'
        return parenthesize('return', (node.value,))
    if isinstance(node, Function):
        params = ' '.join(p.lexeme for p in node.params)
        body = ' '.join(ast_to_string(s) for s in node.body)
        text = f"(fun {node.name.lexeme} ({params})"
        return f"{text} {body})" if body else f"{text})"
    raise TypeError(f"Unsupported node for printing: {type(node)}")
