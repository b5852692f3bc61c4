'''
Shunting-yard conversion tests
'''

from strcalc.util import MismatchedParenthesis
from strcalc.shunting import to_postfix
from strcalc.tokens import detokenize, number, operator

from pytest import raises


def test_precedence(postfix):
    assert detokenize(postfix('2+3*4')) == '2.0 3.0 4.0 * +'
    assert detokenize(postfix('2*3+4')) == '2.0 3.0 * 4.0 +'


def test_parentheses(postfix):
    assert detokenize(postfix('(2+3)*4')) == '2.0 3.0 + 4.0 *'


def test_left_associative(postfix):
    assert detokenize(postfix('8-3-2')) == '8.0 3.0 - 2.0 -'
    assert detokenize(postfix('8/4/2')) == '8.0 4.0 / 2.0 /'


def test_power_is_right_associative(postfix):
    assert detokenize(postfix('2^3^2')) == '2.0 3.0 2.0 ^ ^'


def test_functions(postfix):
    assert detokenize(postfix('sqrt(16)+1')) == '16.0 sqrt 1.0 +'
    assert detokenize(postfix('1+sqrt(16)')) == '1.0 16.0 sqrt +'
    assert detokenize(postfix('2*sqrt(16)^2')) == '2.0 16.0 sqrt 2.0 ^ *'
    assert detokenize(postfix('sin(cos(x))')) == 'x cos sin'


def test_negated_parenthesis(postfix):
    assert detokenize(postfix('-(2+3)*4')) == '2.0 3.0 + 4.0 * -'
    assert detokenize(postfix('2*-(3)+1')) == '2.0 3.0 - * 1.0 +'


def test_negated_parenthesis_below_power(postfix):
    assert detokenize(postfix('-(2)^2')) == '2.0 2.0 ^ -'
    assert detokenize(postfix('2^-(1)')) == '2.0 1.0 - ^'


def test_identifiers_pass_through(postfix):
    assert detokenize(postfix('y*2', {'x': 1.0})) == 'y 2.0 *'


def test_unclosed_parenthesis(postfix):
    with raises(MismatchedParenthesis, match='unclosed'):
        postfix('(1+2')
    with raises(MismatchedParenthesis):
        postfix('((1)')


def test_unopened_parenthesis(postfix):
    with raises(MismatchedParenthesis, match='unexpected'):
        postfix('1+2)')
    with raises(MismatchedParenthesis):
        postfix(')(')


def test_no_state_between_calls():
    tokens = [number(1), operator('+'), number(2)]
    assert to_postfix(tokens) == to_postfix(tokens)
    assert tokens == [number(1), operator('+'), number(2)]
