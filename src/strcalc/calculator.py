import logging

from .lexer import tokenize
from .substitution import substitute
from .shunting import to_postfix
from .machine import evaluate
from .tokens import detokenize


logger = logging.getLogger(__name__)


def calculate(expression, variables=None, lenient=False):
    '''
    Evaluate an infix expression.

    :param expression: Infix expression, e.g. ``2*sin(x) + e``.
    :param variables: Mapping of variable name to value.
    :param lenient: Drop characters the lexer doesn't know, instead of
                    raising UnrecognizedCharacter.
    :return: The value, as a float.
    '''
    logger.debug('Given formula: %s', expression)
    tokens = tokenize(expression, lenient=lenient)
    logger.debug('Formula tokens: %s', detokenize(tokens))
    postfix = to_postfix(substitute(tokens, variables))
    logger.debug('Postfix form: %s', detokenize(postfix))
    return evaluate(postfix)
