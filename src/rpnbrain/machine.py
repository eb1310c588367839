from collections import namedtuple
from types import MappingProxyType
import logging
import math
import operator

from .ops import (Operand, Constant, Variable, UnaryOperation,
                  BinaryOperation, OPERATIONS, ieee, divide, subtract)
from .describe import describe
from .program import export_program, import_program


logger = logging.getLogger(__name__)


Evaluation = namedtuple('Evaluation', 'result trace')


def _trace(ops):
    return '[' + ', '.join(map(str, ops)) + ']'


class Machine:
    '''
    RPN stack machine.

    Holds the operations pushed so far and evaluates them from the top of the
    stack down. Nothing raises: a stack that doesn't evaluate to a number
    just has no result (None).
    '''

    # Built-in operations, learned by every machine at construction.
    BUILTINS = (
        BinaryOperation('×', operator.__mul__),
        BinaryOperation('÷', divide),
        BinaryOperation('+', operator.__add__),
        BinaryOperation('-', subtract),
        UnaryOperation('√', ieee(math.sqrt)),
        UnaryOperation('sin', ieee(math.sin)),
        UnaryOperation('cos', ieee(math.cos)),
        UnaryOperation('±', operator.__neg__),
        Constant('π', math.pi),
    )

    def __init__(self):
        '''
        Create empty stack machine.
        '''
        known_ops = dict()
        for op in type(self).BUILTINS:
            known_ops[op.symbol] = op
        self.known_ops = MappingProxyType(known_ops)
        self.variables = dict()
        self._stack = []

    @property
    def stack(self):
        '''
        Snapshot of the stack, bottom first.
        '''
        return tuple(self._stack)

    def _evaluate(self, ops):
        '''
        Evaluate ops from the top, returning (result, remaining ops).

        Walks down the stack keeping operations that still wait on operands
        in pending, instead of recursing, so deep programs don't run out of
        Python stack. An operation's first operand is the one nearer the
        top.
        '''
        ops = list(ops)
        index = len(ops)
        # [operation, operands collected so far], innermost last
        pending = []
        while True:
            if index == 0:
                value = None
            else:
                index -= 1
                op = ops[index]
                if isinstance(op, (Operand, Constant)):
                    value = op.value
                elif isinstance(op, Variable):
                    value = self.variables.get(op.symbol)
                elif isinstance(op, (UnaryOperation, BinaryOperation)):
                    pending.append((op, []))
                    continue
                else:
                    raise TypeError('Not an operation: {!r}'.format(op))
            # Hand value to the innermost waiting operation, applying every
            # operation that it completes.
            while pending:
                op, operands = pending[-1]
                if value is None:
                    # Missing operand fails every enclosing operation too.
                    pending.pop()
                    continue
                operands.append(value)
                if len(operands) < op.arity:
                    break
                pending.pop()
                value = op.function(*operands)
            else:
                return value, ops[:index]

    def evaluate(self):
        '''
        Return the value of the whole stack, or None.
        '''
        return self._evaluate(self._stack)[0]

    def _reevaluate(self):
        result, remaining = self._evaluate(self._stack)
        trace = '{} = {} with {} left over'.format(_trace(self._stack),
                                                   result,
                                                   _trace(remaining))
        logger.debug(trace)
        return Evaluation(result, trace)

    def push_operand(self, operand):
        '''
        Push a number, or a variable reference if given a name.
        '''
        if isinstance(operand, str):
            self._stack.append(Variable(operand))
        else:
            self._stack.append(Operand(float(operand)))
        return self._reevaluate()

    def push_constant(self, symbol):
        '''
        Push a known constant. Unknown symbols are ignored.
        '''
        op = self.known_ops.get(symbol)
        if isinstance(op, Constant):
            self._stack.append(op)
        return self._reevaluate()

    def perform_operation(self, symbol):
        '''
        Push a known unary or binary operation.

        Unknown symbols are ignored, and so is any operation on an empty
        stack, since it has nothing to operate on.
        '''
        op = self.known_ops.get(symbol)
        if isinstance(op, OPERATIONS) and self._stack:
            self._stack.append(op)
        return self._reevaluate()

    def reset(self):
        '''
        Clear the stack and forget all variables.
        '''
        self._stack.clear()
        self.variables.clear()

    def render(self):
        '''
        Describe the stack in infix notation.
        '''
        return describe(self._stack)

    def export_program(self):
        return export_program(self._stack)

    def import_program(self, tokens):
        '''
        Replace the stack with the operations named by tokens.

        Variables are left alone.
        '''
        self._stack = import_program(tokens, self.known_ops)
        logger.debug('Imported program %s', _trace(self._stack))

    program = property(export_program, import_program,
                       doc='The stack as a list of symbol tokens.')
