from os import path
from argparse import ArgumentParser, OPTIONAL

import logging
import math
import sys

import regex
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import CalcError, InvalidVariableFormat
from .lexer import Lexer
from .substitution import substitute
from .shunting import to_postfix
from .calculator import calculate
from .machine import Machine
from .tokens import FUNCTIONS, detokenize


# Same letters as the lexer accepts in names, but no leading digit or dot.
NAME = regex.compile(r'[\p{L}_][\p{L}\d_]*', regex.VERSION1)

FORMAT_HINT = 'Variables should be written as name=value, e.g. x=2.5'


def parse_assignment(text):
    '''
    Parse one name=value variable assignment.

    Whitespace anywhere is ignored.

    :return: (name, value) pair.
    '''
    normalized = regex.sub(r'\s+', '', text)
    name, sep, value = normalized.partition('=')
    if not sep or not NAME.fullmatch(name):
        raise InvalidVariableFormat(
            'Invalid variable {!r}. {}'.format(text, FORMAT_HINT))
    if name in FUNCTIONS:
        raise InvalidVariableFormat(
            'Invalid variable {!r}. {!r} is a function'.format(text, name))
    try:
        number = float(value)
    except ValueError:
        raise InvalidVariableFormat(
            'Invalid variable {!r}. {}'.format(text, FORMAT_HINT)) from None
    if not math.isfinite(number):
        raise InvalidVariableFormat(
            'Invalid variable {!r}. Value must be finite'.format(text))
    return name, number


def parse_variables(assignments):
    '''
    Parse name=value assignments into a mapping. Last one wins.
    '''
    return dict(map(parse_assignment, assignments))


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Persistent
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.strcalc_history'

    def dumper(self):
        '''
        Dump all tokens with their arity, then the postfix form.
        '''
        machine = Machine()
        lexer = Lexer(lenient=self.args.lenient)
        print('<kind>\t<repr(text)>\t<arity>')

        def dump(line):
            tokens = lexer.tokenize(line)
            for token in tokens:
                print(token.kind,
                      repr(str(token)),
                      machine.arity(token),
                      sep='\t')
            print('postfix:',
                  detokenize(to_postfix(substitute(tokens, self.variables))))
        return self._each(dump)

    def executor(self):
        '''
        Evaluate each expression, printing results.
        '''
        def execute(line):
            result = calculate(line, self.variables, lenient=self.args.lenient)
            print(self._round(result))
        return self._each(execute)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)
        return 0

    def _each(self, handle):
        '''
        Run handle on each non-blank input line, or store it if assignment.

        Errors abort only the line they occur on.

        :return: exit status.
        '''
        status = 0
        for line in self.args.expressions:
            line = line.strip()
            if not line:
                continue
            try:
                if '=' in line:
                    name, value = parse_assignment(line)
                    self.variables[name] = value
                else:
                    handle(line)
            except CalcError as e:
                print('Error:', e.args[0], file=sys.stderr)
                status = 1
        return status

    def _round(self, n):
        '''
        Round number to precision (on output) if set to round.
        '''
        if self.args.precision is None:
            return n
        else:
            return round(n, self.args.precision)

    def _prompting_input(self):
        '''
        Return prompting input, or plain stdin.

        Prompts if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Infix calculator',
            epilog='Without an expression, reads one per line from stdin. '
                   'Lines of the form name=value set variables. '
                   'Put -- before an expression starting with a minus.')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log tokens, postfix form '
                                               'and stack')
        self.argument_parser.add_argument('expression', nargs=OPTIONAL)
        self.argument_parser.add_argument('assignments', nargs='*',
                                          metavar='NAME=VALUE')
        self.argument_parser.add_argument('-s', '--set',
                                          action='append',
                                          default=[],
                                          dest='settings',
                                          metavar='NAME=VALUE')
        self.argument_parser.add_argument('-p', '--prompt',
                                          nargs=OPTIONAL,
                                          const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('-k', '--precision', type=int,
                                          help='round results to this many '
                                               'decimal places')
        self.argument_parser.add_argument('--lenient', action='store_true',
                                          help='drop unrecognized characters')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or the process' args.

        :return: exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(name)s: %(message)s')
        try:
            self.variables = parse_variables(self.args.settings +
                                             self.args.assignments)
        except InvalidVariableFormat as e:
            print('Error:', e.args[0], file=sys.stderr)
            return 2
        if self.args.expression is not None:
            self.args.expressions = [self.args.expression]
        else:
            self.args.expressions = self._prompting_input()
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1
