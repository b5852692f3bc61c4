import logging

import regex

from .util import MalformedExpression, UnrecognizedCharacter
from .tokens import (OPERATORS, FUNCTIONS, OPERATOR, LPAREN_KIND, LPAREN,
                     RPAREN, number, identifier, function, operator, negate)


logger = logging.getLogger(__name__)


class Lexer:
    '''
    Lexer for infix arithmetic expressions.

    Holds no state between calls other than its strictness, so one instance
    may be reused for any number of expressions.
    '''
    # Anything that may appear in a name or number
    WORDCHAR = r'[\p{L}\d_.]'
    # Number, with optional fraction and exponent.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              (?:
                  # 12, 12. (notice trailing dot), 1.5
                  \d+
                  (?:
                      \.
                      \d*
                  )?
                  |
                  # .5
                  \.
                  \d+
              )
              # 1e3, 2.5E-4
              (?:
                  [eE]
                  [+-]?
                  \d+
              )?
              # 2x is one bad name, not a number followed by a name
              (?!
                  {WORDCHAR}
              )
              '''.format(WORDCHAR=WORDCHAR)
    # Variable or function name. Whatever isn't a valid number also ends up
    # here, e.g. 1.2.3, and fails later as an unknown name.
    WORD = WORDCHAR + r'+'

    assert not [operator
                for operator
                in OPERATORS
                if len(operator) != 1]
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, OPERATORS)) + r')'
    # Anything that can't start a lexeme
    UNKNOWN = r'[^\p{L}\d_.()' + r''.join(map(regex.escape, OPERATORS)) + r']'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<word>' + WORD + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))'
    # Default regex flags for matching lexemes
    FLAGS = regex.VERSION1 | regex.VERBOSE

    def __init__(self, lenient=False):
        '''
        :param lenient: Silently drop characters that can't be lexed, instead
                        of raising UnrecognizedCharacter. Like whitespace,
                        they don't separate lexemes: 2#3 is 23.
        '''
        self.lenient = lenient

    def lex(self, line):
        '''
        Take a line and return all lexemes.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                raise UnrecognizedCharacter(
                    "Couldn't lex {!r}".format(line[0]))
            yield match
            line = line[len(match.group(0)):]

    def normalize(self, expression):
        '''
        Strip whitespace, and unknown characters if lenient.
        '''
        expression = regex.sub(r'\s+', '', expression)
        if self.lenient:
            for char in regex.findall(type(self).UNKNOWN, expression,
                                      flags=type(self).FLAGS):
                logger.debug('Dropping unrecognized character %r', char)
            expression = regex.sub(type(self).UNKNOWN, '', expression,
                                   flags=type(self).FLAGS)
        return expression

    def tokenize(self, expression):
        '''
        Split expression into tokens, resolving unary minus on the way.

        Whitespace is insignificant everywhere, even between digits.
        '''
        expression = self.normalize(expression)
        tokens = []
        negative = False
        # A unary minus was seen and still awaits its operand.
        pending = False
        for match in self.lex(expression):
            kind, text = match.lastgroup, match.group(0)
            if kind == OPERATOR and text == '-' and \
               (pending or self._isunary(tokens)):
                negative = not negative
                pending = True
                continue
            if pending and kind not in ('number', 'word', LPAREN_KIND):
                raise MalformedExpression(
                    'Unary minus before {!r}'.format(text))
            tokens.extend(self._parse(kind, text, negative))
            negative = pending = False
        if pending:
            raise MalformedExpression('Unary minus at end of expression')
        return tokens

    def _isunary(self, tokens):
        '''
        Return true if a minus here can't be a binary operator.
        '''
        return not tokens or tokens[-1].kind in (OPERATOR, LPAREN_KIND)

    def _parse(self, kind, text, negative):
        '''
        Yield the token(s) for one lexeme, carrying any pending sign.
        '''
        if kind == 'number':
            value = float(text)
            yield number(-value if negative else value)
        elif kind == 'word':
            if text in FUNCTIONS:
                yield function(text, negative)
            else:
                yield identifier(text, negative)
        elif kind == OPERATOR:
            yield operator(text)
        elif kind == LPAREN_KIND:
            if negative:
                yield negate()
            yield LPAREN
        else:
            yield RPAREN


def tokenize(expression, lenient=False):
    return Lexer(lenient=lenient).tokenize(expression)
