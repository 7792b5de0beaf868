import io
import math

import pytest

from lox.errors import LoxRuntimeError, ParseError, ResolveError, ScanError
from lox.interpreter import Interpreter, is_truthy, run_program, stringify, values_equal
from lox.parser import parse
from lox.resolver import Resolver
from lox.scanner import scan


def run(source):
    out = io.StringIO()
    run_program(source, output=out)
    return out.getvalue().splitlines()


def run_error(source):
    out = io.StringIO()
    with pytest.raises(LoxRuntimeError) as exc:
        run_program(source, output=out)
    return exc.value, out.getvalue().splitlines()


def test_print_arithmetic():
    assert run('print 1 + 2;') == ['3']
    assert run('print 7 / 2;') == ['3.5']
    assert run('print -(2 * 3) + 10;') == ['4']


def test_string_concatenation():
    assert run('print "a" + "b";') == ['ab']


def test_shadowing_in_block():
    assert run('var a = 1; { var a = a + 1; print a; } print a;') == ['2', '1']


def test_counter_closures_are_independent():
    source = '''
    fun makeCounter() { var i = 0; fun c() { i = i + 1; return i; } return c; }
    var c = makeCounter();
    print c();
    print c();
    '''
    assert run(source) == ['1', '2']


def test_closure_binds_at_declaration():
    source = '''
    var a = "global";
    { fun show() { print a; } show(); var a = "block"; show(); }
    '''
    assert run(source) == ['global', 'global']


def test_for_loop():
    assert run('for (var i = 0; i < 3; i = i + 1) print i;') == ['0', '1', '2']


def test_while_loop():
    assert run('var n = 3; while (n > 0) { print n; n = n - 1; }') == ['3', '2', '1']


def test_if_else():
    assert run('if (1 > 2) print "a"; else print "b";') == ['b']
    assert run('if (nil) print "a";') == []


def test_truthiness():
    assert run('if (0) print "zero"; if ("") print "empty"; if (nil) print "nil"; if (false) print "false";') == [
        'zero', 'empty',
    ]


def test_logical_operators_return_operands():
    assert run('print nil or "x"; print "y" and 3; print false and boom;') == ['x', '3', 'false']


def test_logical_short_circuit_skips_side_effects():
    assert run('var a = 1; true or (a = 2); false and (a = 3); print a;') == ['1']


def test_equality():
    assert run('print 1 == 1; print "a" == "a"; print nil == nil; print nil == false; print 1 == "1";') == [
        'true', 'true', 'true', 'false', 'false',
    ]


def test_function_identity_equality():
    assert run('fun f() {} var g = f; print f == g; fun h() {} print f == h;') == ['true', 'false']


def test_nan_is_not_equal_to_itself():
    assert run('var n = 0 / 0; print n == n; print n;') == ['false', 'nan']


def test_division_by_zero_follows_ieee():
    assert run('print 1 / 0; print -1 / 0;') == ['inf', '-inf']


def test_number_formatting():
    assert run('print 3.0; print 0.5; print -0;') == ['3', '0.5', '-0']


def test_print_function_values():
    assert run('fun f() {} print f; print clock;') == ['<fn f>', '<native fn>']


def test_function_without_return_gives_nil():
    assert run('fun f() {} print f();') == ['nil']


def test_return_unwinds_loops():
    source = 'fun first() { for (var i = 0; i < 10; i = i + 1) { if (i == 2) return i; } } print first();'
    assert run(source) == ['2']


def test_recursion():
    source = 'fun fact(n) { if (n <= 1) return 1; return n * fact(n - 1); } print fact(10);'
    assert run(source) == ['3628800']


def test_assignment_is_an_expression():
    assert run('var a; var b; a = b = 4; print a; print b;') == ['4', '4']


def test_native_clock_returns_number():
    assert run('print clock() > 0;') == ['true']


def test_empty_program():
    assert run('') == []


def test_mixed_plus_operands():
    err, _ = run_error('print "a" + 1;')
    assert err.message == 'Operands must be two numbers or two strings.'
    assert err.token.lexeme == '+'


def test_unary_minus_needs_number():
    err, _ = run_error('print -"a";')
    assert err.message == 'Operand must be a number.'


def test_comparison_needs_numbers():
    err, _ = run_error('print "a" < "b";')
    assert err.message == 'Operands must be numbers.'


def test_arity_mismatch():
    err, _ = run_error('fun f(a) {} f(1, 2);')
    assert err.message == 'Expected 1 arguments but got 2.'
    assert err.token.lexeme == ')'


def test_calling_a_non_callable():
    err, _ = run_error('"not a function"();')
    assert err.message == 'Can only call functions and classes.'


def test_undefined_variable():
    err, _ = run_error('print missing;')
    assert err.message == "Undefined variable 'missing'."
    assert err.token.line == 1


def test_assign_to_undefined_variable():
    err, _ = run_error('\n\nmissing = 1;')
    assert err.message == "Undefined variable 'missing'."
    assert err.token.line == 3


def test_runtime_error_keeps_earlier_output():
    err, lines = run_error('print "before"; print "a" + 1; print "after";')
    assert lines == ['before']
    assert err.token.line == 1


def test_environment_restored_after_runtime_error():
    interpreter = Interpreter(output=io.StringIO())
    statements, _ = parse(scan('fun f() { var x = 1; { return x + "s"; } } f();')[0])
    with pytest.raises(LoxRuntimeError):
        interpreter.run(statements, Resolver().resolve(statements))
    assert interpreter.environment is interpreter.globals


def test_globals_are_inspectable():
    interpreter = run_program('var answer = 6 * 7;', output=io.StringIO())
    assert interpreter.globals.values['answer'] == 42.0


def test_each_phase_raises_its_error():
    with pytest.raises(ScanError):
        run_program('print @;')
    with pytest.raises(ParseError):
        run_program('print ;')
    with pytest.raises(ResolveError):
        run_program('return 1;')


def test_stringify():
    assert stringify(None) == 'nil'
    assert stringify(True) == 'true'
    assert stringify(12.0) == '12'
    assert stringify(math.inf) == 'inf'
    assert stringify('text') == 'text'


def test_is_truthy():
    assert not is_truthy(None)
    assert not is_truthy(False)
    assert is_truthy(0.0)
    assert is_truthy('')


def test_values_equal_is_type_aware():
    assert not values_equal(True, 1.0)
    assert not values_equal(None, False)
    assert values_equal('a', 'a')
    assert values_equal(0.0, -0.0)


def test_moderately_deep_recursion():
    source = 'fun f(n) { if (n > 0) return f(n - 1); return "done"; } print f(300);'
    assert run(source) == ['done']
