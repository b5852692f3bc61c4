from pytest import Item, fixture

from strcalc.lexer import tokenize
from strcalc.substitution import substitute
from strcalc.shunting import to_postfix


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP, and enable_assertion_pass_hook in the ini.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def postfix():
    '''
    Lex, substitute and convert, without evaluating.
    '''
    def convert(expression, variables=None):
        return to_postfix(substitute(tokenize(expression), variables))
    return convert
