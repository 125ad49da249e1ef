"""Handles interactive/command-line mode for the NoCap interpreter. Uses cmd as backend."""

import cmd

from nocap.lang.session import report
from nocap.pure.lexical import Lexer
from nocap.pure.token import TokenType

OPENERS = (TokenType.LPAREN, TokenType.LBRACE, TokenType.LBRACKET)
CLOSERS = (TokenType.RPAREN, TokenType.RBRACE, TokenType.RBRACKET)


def is_unfinished(source):
    """Whether source has more (, { or [ than closers, i.e. the user is still typing a block."""
    balance = 0
    for token in Lexer(source):
        if token.type in OPENERS:
            balance += 1
        elif token.type in CLOSERS:
            balance -= 1
    return balance > 0


class Shell(cmd.Cmd):
    """NoCap interpreter shell. Every line runs in the same Session, so bindings persist between lines."""
    intro = "NoCap interpreter :: Python backend\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, error_handler, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.error_handler = error_handler
        self.error_handler.fatal = False

        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary NoCap source."""
        with self.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            source = self._tmp_line + line + "\n"

            if is_unfinished(source):
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            report(self.sess.run(source), self.error_handler)

    def do_help(self, arg):
        """Doesn't return docs, but rather a short intro."""
        self.error_handler.print(
            "Welcome to the NoCap interpreter!\n\n"
            "Try binding a name with 'fr x = 5;', then type 'x + 1;'. Functions are cooked with\n"
            "'cook add(a, b) { yeet a + b; }', and caughtIn4K(...) logs anything you pass it.\n"
            "Blocks can span several lines: the shell waits until every bracket is closed.\n"
            "Type 'exit' or press Ctrl-D to leave."
        )

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.error_handler.print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
