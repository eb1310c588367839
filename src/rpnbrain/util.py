from functools import wraps


class RPNError(Exception):
    '''
    Bad user input: unlexable text, unknown commands, nothing to store.

    The first argument is the message shown to the user; any further ones
    are what caused it.
    '''

    @property
    def message(self):
        return self.args[0] if self.args else ''


def wrap_user_errors(fmt):
    '''
    Report conversion failures on user input as RPNErrors.

    fmt is formatted with the wrapped function's arguments to make the
    message, e.g. 'Cannot convert {0}'. RPNErrors go through untouched.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except (ArithmeticError, LookupError, TypeError, ValueError) as e:
                raise RPNError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
