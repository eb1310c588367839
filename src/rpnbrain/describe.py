'''
Infix descriptions of RPN stacks.

Reads the stack bottom first, the opposite direction from evaluation, so
that complete expressions come out in the order they were entered.
'''

from .ops import (Operand, Constant, Variable, UnaryOperation,
                  BinaryOperation, OPERATIONS)


MISSING = '?'


def _upcoming_operations(ops):
    '''
    For each entry of ops, the first operation (unary or binary) after it.

    Operands, constants and variables are skipped: in 1 2 + 3 × the entry
    after + is 3, yet + still has to see × to come out as (1+2)×3.
    '''
    upcoming = []
    following = None
    for op in reversed(ops):
        upcoming.append(following)
        if isinstance(op, OPERATIONS):
            following = op
    upcoming.reverse()
    return upcoming


def _parenthesize(op, upcoming):
    '''
    Return true if op's expression needs brackets, judging by upcoming only.

    Only one operator of lookahead, so this isn't correct precedence
    handling: 1 2 + 3 √ × comes out as 1+2×√(3), and 1 2 × 3 + as (1×2)+3.
    '''
    if upcoming is None:
        return False
    return (upcoming.symbol == op.symbol or
            upcoming.precedence == op.precedence)


def describe(ops):
    '''
    Describe ops as a comma separated list of infix expressions.
    '''
    ops = list(ops)
    upcoming = _upcoming_operations(ops)
    expressions = []
    for index, op in enumerate(ops):
        if isinstance(op, (Operand, Constant, Variable)):
            expressions.append(op.symbol)
        elif isinstance(op, UnaryOperation):
            # Nothing to apply it to. Dropped.
            if expressions:
                expressions.append('{}({})'.format(op.symbol,
                                                   expressions.pop()))
        elif isinstance(op, BinaryOperation):
            right = expressions.pop() if expressions else MISSING
            left = expressions.pop() if expressions else MISSING
            expression = left + op.symbol + right
            if _parenthesize(op, upcoming[index]):
                expression = '(' + expression + ')'
            expressions.append(expression)
        else:
            raise TypeError('Not an operation: {!r}'.format(op))
    return ', '.join(expressions)
