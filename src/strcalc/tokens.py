'''
Tokens and the fixed tables shared by every stage of the pipeline.
'''

from collections import namedtuple


NUMBER = 'number'
IDENTIFIER = 'identifier'
FUNCTION = 'function'
OPERATOR = 'operator'
# Explicit unary minus, only ever emitted in front of a parenthesis.
NEGATE = 'negate'
LPAREN_KIND = 'lparen'
RPAREN_KIND = 'rparen'

LEFT, RIGHT = 'left', 'right'

Info = namedtuple('Info', 'prec assoc')

OPERATORS = {
    '+': Info(prec=1, assoc=LEFT),
    '-': Info(prec=1, assoc=LEFT),
    '*': Info(prec=2, assoc=LEFT),
    '/': Info(prec=2, assoc=LEFT),
    '^': Info(prec=3, assoc=RIGHT),
}
# Minus in front of a parenthesis; binds like binary minus, so -(2)^2 is -4.
UNARY_MINUS = Info(prec=1, assoc=RIGHT)

FUNCTIONS = frozenset({'sin', 'cos', 'tan', 'atan', 'log10', 'log2', 'sqrt'})


class Token(namedtuple('Token', 'kind value negative')):
    '''
    Immutable lexical unit.

    The kind takes part in comparisons, so an identifier and a function of
    the same name are different tokens.
    '''
    __slots__ = ()

    def __str__(self):
        if self.kind == NUMBER:
            return repr(self.value)
        elif self.kind in (IDENTIFIER, FUNCTION):
            return ('-' if self.negative else '') + self.value
        elif self.kind == NEGATE:
            return '-'
        return self.value

    def isoperand(self):
        return self.kind in (NUMBER, IDENTIFIER)


def number(value):
    return Token(NUMBER, float(value), False)


def identifier(name, negative=False):
    return Token(IDENTIFIER, name, negative)


def function(name, negative=False):
    if name not in FUNCTIONS:
        raise ValueError('Unknown function {!r}'.format(name))
    return Token(FUNCTION, name, negative)


def operator(symbol):
    if symbol not in OPERATORS:
        raise ValueError('Unknown operator {!r}'.format(symbol))
    return Token(OPERATOR, symbol, False)


def negate():
    return Token(NEGATE, '-', True)


LPAREN = Token(LPAREN_KIND, '(', False)
RPAREN = Token(RPAREN_KIND, ')', False)


def detokenize(tokens, sep=' '):
    '''
    Write tokens back out as expression text.

    Tokenizing the result yields the same tokens again.
    '''
    return sep.join(map(str, tokens))
