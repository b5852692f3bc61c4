'''
End to end calculation tests
'''

import math

from strcalc import (calculate, DivisionByZero, MismatchedParenthesis,
                     UnresolvedIdentifier, MalformedExpression,
                     UnrecognizedCharacter, DomainError)

from pytest import raises, approx, mark


@mark.parametrize('expression, expected', [
    ('2+3*4', 14),
    ('(2+3)*4', 20),
    ('2^3^2', 512),
    ('10/4', 2.5),
    ('8-3-2', 3),
    ('-5+3', -2),
    ('-(2+3)', -5),
    ('-(2+3)*4', -20),
    ('-(1+1)*3', -6),
    ('-(2)^2', -4),
    ('2*-(3)+1', -5),
    ('2^-(1)', 0.5),
    ('2*-3', -6),
    ('2^-1', 0.5),
    # The sign is part of the literal.
    ('-2^2', 4),
    ('1 000 + 1', 1001),
    ('((7))', 7),
])
def test_arithmetic(expression, expected):
    assert calculate(expression) == approx(expected)


@mark.parametrize('expression, expected', [
    ('sqrt(16)', 4),
    ('log2(8)', 3),
    ('log10(1000)', 3),
    ('-sqrt(16)', -4),
    ('sin(0)', 0),
    ('cos(0)', 1),
    ('tan(0)', 0),
    ('atan(1)*4', math.pi),
    ('2*sqrt(16)^2', 32),
    ('sqrt(2+2)*3', 6),
    ('sqrt(sqrt(16))', 2),
])
def test_functions(expression, expected):
    assert calculate(expression, {}) == approx(expected)


def test_variables():
    assert calculate('x+1', {'x': 2.0}) == 3.0
    assert calculate('-x', {'x': 2.0}) == -2.0
    assert calculate('-(x)^2', {'x': 3.0}) == -9.0
    assert calculate('3-x', {'x': 2.0}) == 1.0
    assert calculate('x*y^2', {'x': 2.0, 'y': 3.0}) == 18.0
    assert calculate('sin(-x)', {'x': math.pi / 2}) == approx(-1.0)


def test_euler():
    assert calculate('e', {}) == approx(2.718281828459045)
    assert calculate('-e') == approx(-math.e)
    assert calculate('e', {'e': 2.0}) == 2.0


def test_division_by_zero():
    with raises(DivisionByZero):
        calculate('5/0', {})
    with raises(DivisionByZero):
        calculate('1/(x-1)', {'x': 1.0})


def test_mismatched_parenthesis():
    with raises(MismatchedParenthesis):
        calculate('(1+2', {})
    with raises(MismatchedParenthesis):
        calculate('1+2)', {})


def test_unresolved_identifier():
    with raises(UnresolvedIdentifier):
        calculate('y+1', {'x': 1.0})
    with raises(UnresolvedIdentifier):
        calculate('2x')


def test_malformed():
    with raises(MalformedExpression):
        calculate('')
    with raises(MalformedExpression):
        calculate('1+')
    with raises(MalformedExpression):
        calculate('sqrt')


def test_domain_error():
    with raises(DomainError):
        calculate('sqrt(-1)')
    with raises(DomainError, match='Cannot compute mul'):
        calculate('1e308*10')


def test_unrecognized_character():
    with raises(UnrecognizedCharacter):
        calculate('2#3')
    assert calculate('2#3', lenient=True) == 23.0


def test_debug_trace(caplog):
    caplog.set_level('DEBUG', logger='strcalc')
    calculate('-x+1', {'x': 2.0})
    assert 'Given formula: -x+1' in caplog.text
    assert 'Formula tokens: -x + 1.0' in caplog.text
    assert 'Postfix form: -2.0 1.0 +' in caplog.text
