'''
Infix to postfix (RPN) conversion, by Dijkstra's shunting-yard algorithm.
'''

from .util import MismatchedParenthesis, MalformedExpression
from .tokens import (OPERATORS, UNARY_MINUS, RIGHT, FUNCTION, NEGATE,
                     OPERATOR, LPAREN_KIND, RPAREN_KIND)


def _info(token):
    '''
    Return precedence and associativity of a stacked operator, if any.
    '''
    if token.kind == OPERATOR:
        return OPERATORS[token.value]
    elif token.kind == NEGATE:
        return UNARY_MINUS
    return None


def _yields_to(top, incoming):
    '''
    Return true if the stack top must be output before incoming is pushed.
    '''
    if top.kind == FUNCTION:
        return True
    stacked, arriving = _info(top), OPERATORS[incoming.value]
    if stacked is None:
        return False
    if arriving.assoc == RIGHT:
        return stacked.prec > arriving.prec
    return stacked.prec >= arriving.prec


def to_postfix(tokens):
    '''
    Reorder infix tokens into postfix order.

    Raises MismatchedParenthesis for a ) without a ( and for a ( never closed.
    '''
    output = []
    stack = []
    for token in tokens:
        if token.isoperand():
            output.append(token)
        elif token.kind in (FUNCTION, NEGATE, LPAREN_KIND):
            # Prefix: nothing to its left to bind to.
            stack.append(token)
        elif token.kind == OPERATOR:
            while stack and _yields_to(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)
        elif token.kind == RPAREN_KIND:
            while stack and stack[-1].kind != LPAREN_KIND:
                output.append(stack.pop())
            if not stack:
                raise MismatchedParenthesis('Mismatched parenthesis: '
                                            'unexpected )')
            stack.pop()
            # f(x): the closing parenthesis completes f's argument.
            # -(x) stays, so that -(x)^2 is -(x^2).
            if stack and stack[-1].kind == FUNCTION:
                output.append(stack.pop())
        else:
            raise MalformedExpression('Unexpected {!r}'.format(token))
    while stack:
        token = stack.pop()
        if token.kind == LPAREN_KIND:
            raise MismatchedParenthesis('Mismatched parenthesis: '
                                        'unclosed (')
        output.append(token)
    return output
