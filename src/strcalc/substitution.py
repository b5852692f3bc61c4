import math
import logging

from .tokens import IDENTIFIER, number


logger = logging.getLogger(__name__)

# Euler's number, unless a variable of the same name is given.
CONSTANTS = {
    'e': math.e,
}


def substitute(tokens, variables=None):
    '''
    Replace names with their numeric values.

    Variables win over constants. Names that are neither are left in place,
    for the machine to reject.

    :param tokens: Tokens, as produced by the lexer.
    :param variables: Mapping of variable name to value.
    '''
    variables = variables or {}
    substituted = []
    for token in tokens:
        if token.kind == IDENTIFIER:
            if token.value in variables:
                value = variables[token.value]
            elif token.value in CONSTANTS:
                value = CONSTANTS[token.value]
            else:
                logger.debug('No value for %r', token.value)
                substituted.append(token)
                continue
            token = number(-value if token.negative else value)
        substituted.append(token)
    return substituted
