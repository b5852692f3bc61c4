'''
Infix calculator.

Evaluates arithmetic expressions with variables, e.g. ``2*sin(x)^2 + e``:
+ - * / and ^ (right associative), parentheses, unary minus, Euler's number,
and the functions sin, cos, tan, atan, log10, log2 and sqrt.

Expressions go through four stages, each taking all of the previous one's
output: lexing, variable substitution, conversion to postfix by the
shunting-yard algorithm, and evaluation on a stack machine.
'''

from .util import (CalcError, InvalidVariableFormat, MismatchedParenthesis,
                   DivisionByZero, UnresolvedIdentifier, MalformedExpression,
                   UnrecognizedCharacter, DomainError)
from .tokens import Token, detokenize
from .lexer import Lexer, tokenize
from .substitution import substitute
from .shunting import to_postfix
from .machine import Machine, evaluate
from .calculator import calculate
from .cli import CLI


__all__ = ('calculate', 'tokenize', 'substitute', 'to_postfix', 'evaluate',
           'detokenize', 'Token', 'Lexer', 'Machine', 'CLI',
           'CalcError', 'InvalidVariableFormat', 'MismatchedParenthesis',
           'DivisionByZero', 'UnresolvedIdentifier', 'MalformedExpression',
           'UnrecognizedCharacter', 'DomainError')
