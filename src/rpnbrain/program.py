'''
Programs: stacks saved as flat lists of symbol tokens.
'''

import logging

from .ops import Operand, Variable


logger = logging.getLogger(__name__)


def export_program(ops):
    '''
    Return the symbols of ops, bottom of the stack first.
    '''
    return [op.symbol for op in ops]


def _parse_token(token, known_ops):
    '''
    Return the operation token names, or None if it names nothing.

    Known symbols win over numbers, and numbers over variable names.
    '''
    op = known_ops.get(token)
    if op is not None:
        return op
    try:
        return Operand(float(token))
    except ValueError:
        pass
    if token.isidentifier():
        return Variable(token)
    return None


def import_program(tokens, known_ops):
    '''
    Parse tokens into a list of operations, skipping anything unrecognised.
    '''
    ops = []
    for token in tokens:
        op = _parse_token(str(token), known_ops)
        if op is None:
            logger.debug('Skipping unknown token %r', token)
            continue
        ops.append(op)
    return ops
