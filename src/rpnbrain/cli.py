from os import isatty, path
from sys import stdin, stdout, exit
import sys
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import RPNError, wrap_user_errors
from .ops import format_number
from .machine import Machine
from .lexer import Lexer


logger = logging.getLogger(__name__)


@wrap_user_errors('Cannot convert {0}')
def _number(text):
    '''
    Convert number lexeme to float.
    '''
    return float(text)


def _assignment(text):
    '''
    Split a --set argument into name and value.
    '''
    name, _, value = text.partition('=')
    if not name.isidentifier():
        raise ArgumentTypeError('Bad variable name {}'.format(repr(name)))
    try:
        return name, float(value)
    except ValueError:
        raise ArgumentTypeError('Bad value {}'.format(repr(value)))


class InteractiveInput:
    '''
    Lines typed at a prompt, until end of file (^D).

    Lines are remembered across sessions in history_file, if given.
    '''

    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def session(self):
        history = None
        if self.history_file:
            history = FileHistory(path.expanduser(self.history_file))
        return PromptSession(message=self.prompt,
                             history=history,
                             vi_mode=True,
                             enable_suspend=True,
                             # Programs get long; v edits in $EDITOR.
                             enable_open_in_editor=True,
                             erase_when_done=False)

    def __iter__(self):
        session = self.session()
        while True:
            try:
                yield session.prompt()
            except EOFError:
                return


class CLI:
    '''
    Command line interface to the RPN machine.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.rpnbrain_history'

    def dumper(self):
        '''
        Dump all lexemes matches, and arity.
        '''
        machine = Machine()
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<arity>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                matched = match.group(0)  # the lexeme text itself
                groups = lexer.matchedgroups(match)
                arity = None
                if 'operator' in groups:
                    op = machine.known_ops[lexer.symbol(groups['operator'])]
                    arity = op.arity
                print(*groups.keys(),
                      repr(matched),
                      arity,
                      sep='\t')

    def command(self, machine, name):
        '''
        Run a :command.
        '''
        if name == 'clear':
            machine.reset()
        elif name == 'program':
            print(*machine.export_program())
        elif name == 'vars':
            for variable, value in sorted(machine.variables.items()):
                print(variable, '=', format_number(value))
        elif name == 'help':
            print('operators:', *machine.known_ops, file=sys.stderr)
            print('aliases:', *('{}={}'.format(alias, symbol)
                                for alias, symbol
                                in Lexer.ALIASES.items()),
                  file=sys.stderr)
            print('commands: :clear :program :vars :help', file=sys.stderr)
        else:
            raise RPNError('No such command :{}'.format(name))

    def feed(self, machine, lexer, groups):
        '''
        Push a lexeme onto the machine.
        '''
        if 'number' in groups:
            machine.push_operand(_number(groups['number']))
        elif 'operator' in groups:
            symbol = lexer.symbol(groups['operator'])
            if symbol in machine.known_ops and \
               machine.known_ops[symbol].arity == 0:
                machine.push_constant(symbol)
            else:
                machine.perform_operation(symbol)
        elif 'variable' in groups:
            machine.push_operand(groups['variable'])
        elif 'store' in groups:
            result = machine.evaluate()
            if result is None:
                raise RPNError('Nothing to store in {}'.format(
                    groups['__name__']))
            machine.variables[groups['__name__']] = result
        elif 'command' in groups:
            self.command(machine, groups['__command__'])

    def show(self, machine):
        '''
        Print the stack's description and its value.
        '''
        result = machine.evaluate()
        print(machine.render(), '=',
              '' if result is None else format_number(result))

    def executor(self):
        '''
        Run machine (RPN calculator).
        '''
        machine = Machine()
        lexer = Lexer()
        for name, value in self.args.variables:
            machine.variables[name] = value
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        self.feed(machine, lexer, lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except RPNError as e:
                logger.debug('Bad input %r', line, exc_info=True)
                print(e.message, file=sys.stderr)
            self.show(machine)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _input_lines(self):
        '''
        Return where lines come from when none were given with -e.

        Prompt when asked to with -p, or when talking to a terminal;
        otherwise read stdin as is, e.g. a piped program.
        '''
        interactive = isatty(stdin.fileno()) and isatty(stdout.fileno())
        if not (self.args.prompt or interactive):
            return stdin
        return InteractiveInput(self.args.prompt or self.DEFAULT_PROMPT,
                                history_file=self.HISTORY_FILE)

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        parser = ArgumentParser(description='RPN calculator that shows its '
                                            'work in infix notation')
        parser.add_argument('-v', '--verbose',
                            action='store_true',
                            help='log every evaluation of the stack')
        parser.add_argument('-s', '--set',
                            action='append',
                            type=_assignment,
                            metavar='NAME=VALUE',
                            dest='variables',
                            help='give a variable a value before starting')
        sources = parser.add_mutually_exclusive_group()
        sources.add_argument('-e', '--expression',
                             nargs=REMAINDER,
                             dest='expressions',
                             help='evaluate these lines instead of stdin')
        sources.add_argument('-p', '--prompt',
                             nargs=OPTIONAL,
                             const=self.DEFAULT_PROMPT,
                             help='prompt for lines even if not on a tty')
        actions = parser.add_mutually_exclusive_group()
        actions.add_argument('-G', '--raw-grammar',
                             action='store_const',
                             const=self.raw_grammar,
                             dest='action',
                             help='print the lexer grammar')
        actions.add_argument('-D', '--dump',
                             action='store_const',
                             const=self.dumper,
                             dest='action',
                             help='print lexemes instead of evaluating')
        parser.set_defaults(action=self.executor,
                            expressions=stdin,
                            variables=[])
        self.argument_parser = parser

    def run(self, *, args=None):
        '''
        Parse args (sys.argv by default) and run the chosen action.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(stream=sys.stderr,
                            level=logging.DEBUG if self.args.verbose
                            else logging.WARNING)
        if self.args.expressions is stdin:
            self.args.expressions = self._input_lines()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
