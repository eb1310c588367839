from functools import reduce
import operator

import regex

from .util import RPNError
from .machine import Machine


def _alternatives(words):
    '''
    Regex alternation of words, longest first.
    '''
    return r'(?:' + r'|'.join(map(regex.escape,
                                  sorted(words, key=len, reverse=True))) + r')'


class Lexer:
    '''
    Lexer for RPN program text.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Keyboard friendly spellings of the machine's symbols.
    ALIASES = {
        '*': '×',
        '/': '÷',
        'sqrt': '√',
        '_': '±',
        'pi': 'π',
    }

    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Support not just digits, but thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      (?:
                          _\d{3}
                      )*
                  )
                  '''
    EXPONENT = r'''
                (?:
                    [eE][+-]?\d+
                )
                '''
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              (?:
                  (?:
                      # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                  )|(?:
                      # .2, 0.2, 0.200_200
                      {INTEGRAL}?
                      \.
                      {FRACTIONAL}
                  )
              )
              {EXPONENT}?
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)

    SYMBOLS = [op.symbol for op in Machine.BUILTINS] + list(ALIASES)
    # Symbols that could be mistaken for the start of a name, e.g. sin in
    # sinh.
    WORDS = [symbol for symbol in SYMBOLS if regex.fullmatch(r'\w+', symbol)]
    OPERATOR = r'(?:' + _alternatives(WORDS) + r'(?!\w))|' + \
               _alternatives(set(SYMBOLS) - set(WORDS))
    NAME = r'(?!' + _alternatives(WORDS) + r'(?!\w))[^\W\d]\w*'
    # →x or >x, store the current result in x
    STORE = r'[→>](?<__name__>' + NAME + r')'
    COMMAND = r':(?<__command__>\w+)'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<store>' + STORE + r')|' \
             r'(?<command>' + COMMAND + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<variable>' + NAME + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Doesn't yield incomplete or incorrect lexemes, stopping on first bad.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise RPNError("Couldn\'t lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the groups the lexeme matched, by name.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def symbol(self, text):
        '''
        Return the machine symbol for operator text, resolving aliases.
        '''
        return type(self).ALIASES.get(text, text)
