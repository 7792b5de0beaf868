"""Token and literal definitions for Lox.

This module defines the immutable value types produced by the scanner and
shared by every later stage: the token kinds, the tagged literal value a
token may carry, and the token itself. Tokens are created once by the
scanner and then referenced (never copied) by the parser and AST nodes.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Any, Dict, Tuple


class TokenType(enum.Enum):
    # Single-character tokens.
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    COMMA = ','
    DOT = '.'
    MINUS = '-'
    PLUS = '+'
    SEMICOLON = ';'
    SLASH = '/'
    STAR = '*'

    # One or two character tokens.
    BANG = '!'
    BANG_EQUAL = '!='
    EQUAL = '='
    EQUAL_EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    # Literals.
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'

    # Keywords.
    AND = 'and'
    CLASS = 'class'
    ELSE = 'else'
    FALSE = 'false'
    FUN = 'fun'
    FOR = 'for'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    SUPER = 'super'
    THIS = 'this'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    EOF = 'eof'

    def __repr__(self) -> str:
        return f"TokenType.{self.name}"


KEYWORDS: Dict[str, TokenType] = {
    'and': TokenType.AND,
    'class': TokenType.CLASS,
    'else': TokenType.ELSE,
    'false': TokenType.FALSE,
    'for': TokenType.FOR,
    'fun': TokenType.FUN,
    'if': TokenType.IF,
    'nil': TokenType.NIL,
    'or': TokenType.OR,
    'print': TokenType.PRINT,
    'return': TokenType.RETURN,
    'super': TokenType.SUPER,
    'this': TokenType.THIS,
    'true': TokenType.TRUE,
    'var': TokenType.VAR,
    'while': TokenType.WHILE,
}


class LiteralKind(enum.Enum):
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'
    BOOL = 'bool'
    NIL = 'nil'


def float_bits(value: float) -> Tuple[int, int, int]:
    """Decompose a float into ``(mantissa, exponent, sign)``.

    The parts are taken straight from the IEEE-754 bit pattern, so two
    floats decompose identically exactly when their bits are identical.
    This keeps ``NaN`` equal to itself and ``-0.0`` distinct from ``0.0``
    when literals are used as dictionary keys.
    """
    bits = struct.unpack('<Q', struct.pack('<d', value))[0]
    sign = bits >> 63
    exponent = (bits >> 52) & 0x7FF
    mantissa = bits & ((1 << 52) - 1)
    return mantissa, exponent, sign


def format_number(value: float) -> str:
    # Whole numbers print without the trailing '.0'.
    if value != value:
        return 'nan'
    if value in (float('inf'), float('-inf')):
        return 'inf' if value > 0 else '-inf'
    text = repr(value)
    if text.endswith('.0'):
        text = text[:-2]
    return text


class Literal:
    """A tagged literal value: identifier text, string, number, bool or nil."""

    __slots__ = ('kind', 'value')

    NIL: 'Literal'

    def __init__(self, kind: LiteralKind, value: Any = None):
        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, 'value', value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError('Literal is immutable')

    @staticmethod
    def identifier(text: str) -> 'Literal':
        return Literal(LiteralKind.IDENTIFIER, text)

    @staticmethod
    def string(text: str) -> 'Literal':
        return Literal(LiteralKind.STRING, text)

    @staticmethod
    def number(value: float) -> 'Literal':
        return Literal(LiteralKind.NUMBER, float(value))

    @staticmethod
    def boolean(value: bool) -> 'Literal':
        return Literal(LiteralKind.BOOL, bool(value))

    def _key(self) -> Tuple[Any, ...]:
        if self.kind is LiteralKind.NUMBER:
            return (self.kind, float_bits(self.value))
        return (self.kind, self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if self.kind is LiteralKind.NIL:
            return 'Literal.NIL'
        return f"Literal({self.kind.name}, {self.value!r})"

    def __str__(self) -> str:
        if self.kind is LiteralKind.NIL:
            return 'nil'
        if self.kind is LiteralKind.BOOL:
            return 'true' if self.value else 'false'
        if self.kind is LiteralKind.NUMBER:
            return format_number(self.value)
        return self.value


Literal.NIL = Literal(LiteralKind.NIL)


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Literal
    line: int

    def __str__(self) -> str:
        return f"{self.type.name} {self.lexeme} {self.literal}"
