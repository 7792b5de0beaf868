import dataclasses

import pytest

from lox.types import Literal, LiteralKind, Token, TokenType, float_bits, format_number


def test_literal_equality_is_structural():
    assert Literal.string('a') == Literal.string('a')
    assert Literal.string('1') != Literal.number(1)
    assert Literal.identifier('x') != Literal.string('x')
    assert Literal.boolean(True) == Literal.boolean(True)
    assert Literal(LiteralKind.NIL) == Literal.NIL


def test_nan_literal_is_a_stable_dict_key():
    nan = float('nan')
    table = {Literal.number(nan): 'nan'}
    assert table[Literal.number(nan)] == 'nan'


def test_signed_zero_literals_differ():
    assert Literal.number(0.0) != Literal.number(-0.0)
    assert len({Literal.number(0.0), Literal.number(-0.0)}) == 2


def test_float_bits_decomposition():
    assert float_bits(1.0) == (0, 1023, 0)
    assert float_bits(-2.0) == (0, 1024, 1)
    mantissa, exponent, sign = float_bits(1.5)
    assert (mantissa, exponent, sign) == (1 << 51, 1023, 0)


def test_literal_is_immutable():
    lit = Literal.number(3)
    with pytest.raises(AttributeError):
        lit.value = 4.0


def test_literal_str():
    assert str(Literal.number(3)) == '3'
    assert str(Literal.number(2.5)) == '2.5'
    assert str(Literal.NIL) == 'nil'
    assert str(Literal.boolean(False)) == 'false'
    assert str(Literal.string('hi')) == 'hi'


def test_format_number():
    assert format_number(-0.0) == '-0'
    assert format_number(float('inf')) == 'inf'
    assert format_number(float('-inf')) == '-inf'
    assert format_number(float('nan')) == 'nan'
    assert format_number(0.1) == '0.1'


def test_token_is_frozen():
    token = Token(TokenType.IDENTIFIER, 'a', Literal.identifier('a'), 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        token.line = 2
