from lox.ast import (
    Assign, Binary, Block, Call, Expression, Function, Grouping, If, Literal,
    Logical, Print, Return, Unary, Var, Variable, While,
)
from lox.ast_json import ast_to_string
from lox.parser import parse
from lox.scanner import scan


def parse_source(source):
    tokens, error = scan(source)
    assert error is None
    return parse(tokens)


def parse_ok(source):
    statements, errors = parse_source(source)
    assert errors == []
    return statements


def parse_expr(source):
    (stmt,) = parse_ok(source + ';')
    assert isinstance(stmt, Expression)
    return stmt.expression


def test_precedence():
    expr = parse_expr('1 + 2 * 3 - 4')
    assert ast_to_string(expr) == '(- (+ 1 (* 2 3)) 4)'


def test_comparison_and_equality():
    assert ast_to_string(parse_expr('1 < 2 == 3 >= 4')) == '(== (< 1 2) (>= 3 4))'


def test_unary_and_grouping():
    expr = parse_expr('-123 * (45.67)')
    assert isinstance(expr, Binary)
    assert isinstance(expr.left, Unary)
    assert isinstance(expr.right, Grouping)
    assert ast_to_string(expr) == '(* (- 123) (group 45.67))'


def test_logical_operators_bind_looser_than_equality():
    expr = parse_expr('a or b and c == d')
    assert isinstance(expr, Logical)
    assert expr.operator.lexeme == 'or'
    assert ast_to_string(expr) == '(or a (and b (== c d)))'


def test_assignment_is_right_associative():
    expr = parse_expr('a = b = 3')
    assert isinstance(expr, Assign)
    assert expr.name.lexeme == 'a'
    assert isinstance(expr.value, Assign)
    assert expr.value.name.lexeme == 'b'


def test_chained_calls():
    expr = parse_expr('f(1)(2, 3)()')
    assert isinstance(expr, Call)
    assert expr.arguments == ()
    assert len(expr.callee.arguments) == 2
    assert isinstance(expr.callee.callee.callee, Variable)
    assert expr.paren.lexeme == ')'


def test_literals():
    values = [parse_expr(src).value for src in ('true', 'false', 'nil', '"s"', '4')]
    assert values == [True, False, None, 's', 4.0]


def test_statements():
    statements = parse_ok('var a; var b = 1; print b; { a = 2; } if (a) print 1; else print 2; while (false) a;')
    kinds = [type(s) for s in statements]
    assert kinds == [Var, Var, Print, Block, If, While]
    assert statements[0].initializer is None
    assert statements[4].else_branch is not None


def test_function_declaration():
    (fn,) = parse_ok('fun add(a, b) { return a + b; }')
    assert isinstance(fn, Function)
    assert fn.name.lexeme == 'add'
    assert [p.lexeme for p in fn.params] == ['a', 'b']
    assert isinstance(fn.body[0], Return)


def test_bare_return_has_no_value():
    (fn,) = parse_ok('fun f() { return; }')
    assert fn.body[0].value is None


def test_for_desugars_to_while_in_block():
    (stmt,) = parse_ok('for (var i = 0; i < 3; i = i + 1) print i;')
    assert isinstance(stmt, Block)
    init, loop = stmt.statements
    assert isinstance(init, Var)
    assert isinstance(loop, While)
    body, increment = loop.body.statements
    assert isinstance(body, Print)
    assert isinstance(increment, Expression)
    assert isinstance(increment.expression, Assign)


def test_for_without_clauses_loops_on_true():
    (stmt,) = parse_ok('for (;;) print 1;')
    assert isinstance(stmt, While)
    assert isinstance(stmt.condition, Literal)
    assert stmt.condition.value is True
    assert isinstance(stmt.body, Print)


def test_tokens_are_shared_not_copied():
    tokens, _ = scan('a = a;')
    statements, _ = parse(tokens)
    assign = statements[0].expression
    assert assign.name is tokens[0]
    assert assign.value.name is tokens[2]


def test_invalid_assignment_target_is_reported_without_aborting():
    statements, errors = parse_source('1 + 2 = 3; print 4;')
    assert [e.message for e in errors] == ['Invalid assignment target.']
    assert errors[0].token.lexeme == '='
    # both statements still parsed
    assert len(statements) == 2


def test_synchronize_reports_independent_errors():
    statements, errors = parse_source('var = 1;\nprint 2;\nprint (3;\nvar ok = 4;')
    assert [(e.token.line, e.message) for e in errors] == [
        (1, 'Expect variable name.'),
        (3, "Expect ')' after expression."),
    ]
    assert [type(s) for s in statements] == [Print, Var]


def test_missing_semicolon_at_end():
    _, errors = parse_source('print 1')
    assert errors[0].message == "Expect ';' after value."
    assert errors[0].token.lexeme == ''


def test_error_inside_block_recovers():
    statements, errors = parse_source('{ print ; print 1; }')
    assert [e.message for e in errors] == ['Expect expression.']
    assert len(statements) == 1
    assert len(statements[0].statements) == 1


def test_too_many_arguments_keeps_parsing():
    args = ', '.join(str(i) for i in range(256))
    statements, errors = parse_source(f'f({args}); print 1;')
    assert [e.message for e in errors] == ["Can't have more than 255 arguments."]
    assert len(statements) == 2
    assert len(statements[0].expression.arguments) == 256


def test_too_many_parameters_reported():
    params = ', '.join(f'p{i}' for i in range(256))
    _, errors = parse_source(f'fun f({params}) {{}}')
    assert [e.message for e in errors] == ["Can't have more than 255 parameters."]


def test_class_keyword_is_not_an_expression():
    _, errors = parse_source('class;')
    assert errors[0].message == 'Expect expression.'
