from inspect import signature as getsignature, Parameter
from collections import deque

import logging
import operator
import math

from .util import (MalformedExpression, UnresolvedIdentifier, DivisionByZero,
                   wrap_math_errors)
from .tokens import NUMBER, IDENTIFIER, OPERATOR, FUNCTION, NEGATE


logger = logging.getLogger(__name__)


def _unary(f, name=None):
    '''
    Give a 1-arg callable a signature inspect.getsignature understands.

    Builtins like math.sin don't have one.
    '''
    def wrapped(only):
        return f(only)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = name or f.__name__
    return wrapped


def _binary(f, name=None):
    '''
    Give a 2-arg callable a signature inspect.getsignature understands.
    '''
    def wrapped(left, right):
        return f(left, right)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = name or f.__name__
    return wrapped


def divide(left, right):
    '''
    True division, refusing a zero divisor.
    '''
    if right == 0:
        raise DivisionByZero('Division by zero')
    return left / right


def log2(x):
    '''
    Base 2 logarithm, as log(x) / log(2).
    '''
    return math.log(x) / math.log(2)


class _Arguments(list):
    '''
    Argument list, shown the way it would be written in a call: 1.0, 2.0
    '''
    def __str__(self):
        return ', '.join(map(str, self))


def _negated(f):
    '''
    Return f with its result negated; for -sin(x) and friends.
    '''
    return _unary(lambda only: -f(only), name='-' + f.__name__)


class Machine:
    '''
    Arithmetic stack machine.

    Takes postfix tokens and runs them. A fresh machine is needed for each
    expression.
    '''

    # Binary operators, applied to the two topmost items.
    BUILTINS = {
        '+': _binary(operator.__add__),
        '-': _binary(operator.__sub__),
        '*': _binary(operator.__mul__),
        '/': _binary(divide),
        # Never complex, unlike **
        '^': _binary(math.pow),
    }

    # Unary functions, radians for the trigonometric ones.
    MATH = {
        'sin': _unary(math.sin),
        'cos': _unary(math.cos),
        'tan': _unary(math.tan),
        'atan': _unary(math.atan),
        'log10': _unary(math.log10),
        'log2': _unary(log2),
        'sqrt': _unary(math.sqrt),
    }

    NEGATE = _unary(operator.__neg__)

    def __init__(self):
        '''
        Create empty stack machine.
        '''
        self.stack = deque()

    def run(self, tokens):
        '''
        Feed all tokens, then return the single result.
        '''
        for token in tokens:
            self.feed(token)
        return self.result()

    def feed(self, token):
        '''
        Stack or run a token on the machine.
        '''
        parsed = self.parse(token)
        if self.isstackable(token):
            self._pshstack(parsed)
        else:
            self._apply(parsed)
        logger.debug('%s\t%s', token, list(self.stack))

    def parse(self, token):
        '''
        Parse token into objects for machine: numbers or callables.
        '''
        if token.kind == NUMBER:
            return token.value
        elif token.kind == OPERATOR:
            return type(self).BUILTINS[token.value]
        elif token.kind == FUNCTION:
            f = type(self).MATH[token.value]
            return _negated(f) if token.negative else f
        elif token.kind == NEGATE:
            return type(self).NEGATE
        elif token.kind == IDENTIFIER:
            raise UnresolvedIdentifier(
                'Unknown variable {!r}'.format(str(token)))
        raise MalformedExpression('Unexpected {!r} in postfix '
                                  'expression'.format(token.value))

    def isstackable(self, token):
        '''
        Return true if stackable token (i.e., a number), rather than runnable.
        '''
        return token.kind == NUMBER

    def arity(self, token):
        '''
        Return number of stack items running token pops, None if not runnable.
        '''
        if token.kind in (OPERATOR, FUNCTION, NEGATE):
            return self._arity(self.parse(token))
        return None

    def _arity(self, f):
        '''
        Return number of non-default positional arguments, if callable.
        '''
        if not callable(f):
            return None
        signature = getsignature(f)
        parameters = signature.parameters.values()
        positionals = [parameter
                       for parameter
                       in parameters
                       if parameter.kind == Parameter.POSITIONAL_OR_KEYWORD and
                          parameter.default == Parameter.empty]
        return len(positionals)

    def _apply(self, parsed):
        '''
        Apply callable to stack, popping arguments as needed.
        '''
        # If you don't reverse, you'll do 2**9 when you say 9 2 ^ instead of
        # 9**2.
        args = _Arguments(reversed(self._popstack(self._arity(parsed))))
        self._pshstack(self._call(parsed, args))

    @wrap_math_errors('Cannot compute {1.__name__} of {2}')
    def _call(self, f, args):
        result = f(*args)
        # Float arithmetic overflows to inf instead of raising, unlike math.
        if not math.isfinite(result):
            raise OverflowError('result out of range')
        return result

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise MalformedExpression(
                'Less than {} element(s) on stack'.format(n))
        return [self.stack.pop() for _ in range(n)]

    def result(self):
        '''
        Return the final value, which must be alone on the stack.
        '''
        if len(self.stack) != 1:
            raise MalformedExpression(
                'Expected one value on stack, found {}'.format(
                    len(self.stack)))
        return self.stack[-1]


def evaluate(tokens):
    return Machine().run(tokens)
