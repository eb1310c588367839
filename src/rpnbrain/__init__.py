'''
RPN calculator engine.

Keeps a stack of operands, constants, variables and operations, evaluates it
from the top down, and describes it in infix notation: 1 2 + 3 × is
(1+2)×3 = 9.

The stack can be saved and restored as a list of symbol tokens, which is
also what the command line reads.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine, Evaluation
from .util import RPNError


__all__ = 'Machine', 'Evaluation', 'Lexer', 'CLI', 'RPNError'
