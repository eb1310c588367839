'''
Operations that live on the machine's stack.

One class per kind of entry. The set is closed: the machine and the
describer dispatch on exactly these five classes.
'''

from collections import namedtuple
from functools import wraps
import math


# Parenthesization classes. Everything but a binary operation is atomic.
MAX_PRECEDENCE = math.inf
MIN_PRECEDENCE = -math.inf


def format_number(value):
    '''
    Render a float as a locale-independent token that float() reads back.

    Integral values print without the trailing .0, so 3.0 is '3'.
    '''
    value = float(value)
    if value == 0 and math.copysign(1.0, value) < 0:
        return '-0'
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def ieee(f):
    '''
    Make a math function return NaN instead of raising on domain errors.
    '''
    @wraps(f)
    def wrapper(*args):
        try:
            return f(*args)
        except ValueError:
            return math.nan
    return wrapper


def divide(divisor, dividend):
    '''
    dividend / divisor, giving ±inf or NaN on a zero divisor.
    '''
    try:
        return dividend / divisor
    except ZeroDivisionError:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)


def subtract(subtrahend, minuend):
    return minuend - subtrahend


class Operand(namedtuple('Operand', 'value')):
    __slots__ = ()

    precedence = MAX_PRECEDENCE
    arity = 0

    @property
    def symbol(self):
        return format_number(self.value)

    def __str__(self):
        return self.symbol


class Constant(namedtuple('Constant', 'symbol value')):
    __slots__ = ()

    precedence = MAX_PRECEDENCE
    arity = 0

    def __str__(self):
        return self.symbol


class Variable(namedtuple('Variable', 'symbol')):
    __slots__ = ()

    precedence = MAX_PRECEDENCE
    arity = 0

    def __str__(self):
        return self.symbol


class UnaryOperation(namedtuple('UnaryOperation', 'symbol function')):
    __slots__ = ()

    precedence = MAX_PRECEDENCE
    arity = 1

    def __str__(self):
        return self.symbol


class BinaryOperation(namedtuple('BinaryOperation', 'symbol function')):
    '''
    function receives the first-popped operand first, i.e. the right hand
    side of the infix reading.
    '''
    __slots__ = ()

    precedence = MIN_PRECEDENCE
    arity = 2

    def __str__(self):
        return self.symbol


OPERATIONS = UnaryOperation, BinaryOperation
