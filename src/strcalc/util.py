from functools import wraps


class CalcError(Exception):
    pass


class InvalidVariableFormat(CalcError):
    pass


class MismatchedParenthesis(CalcError):
    pass


class DivisionByZero(CalcError):
    pass


class UnresolvedIdentifier(CalcError):
    pass


class MalformedExpression(CalcError):
    pass


class UnrecognizedCharacter(CalcError):
    pass


class DomainError(CalcError):
    pass


def wrap_math_errors(fmt):
    '''
    Decorator that converts math library failures to DomainErrors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except (ValueError, OverflowError) as e:
                raise DomainError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator
