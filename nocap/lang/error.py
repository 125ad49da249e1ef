"""Host-level error handling for the NoCap runner and shell.

Script problems never raise: parse diagnostics are strings on the Parser and runtime problems are Error objects.
GenericException is what the host raises on purpose (unreadable file, program that doesn't parse). If any other
exception makes it all the way to ErrorHandler, it is treated as an internal fault and reported with the generic
apology rather than a traceback.
"""

import sys

from termcolor import colored

APOLOGY = "this is awkward... something went very wrong and it's not your fault"


class GenericException(Exception):
    """Templates an error/warning message for the host. exprs, if any, are substituted into msg's {} fields and
    bolded; without exprs msg is used verbatim, so it may safely contain script text.
    """

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        if exprs:
            super().__init__(msg.format(*exprs))
            msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # bold expr snippets
        else:
            super().__init__(msg)
        self.msg = msg
        self.internal = internal


class ErrorHandler:
    """Context manager that reports NoCap host errors/warnings in color and keeps Python tracebacks away from the
    user. With fatal=True (the file runner) a reported error exits with status 1; the shell uses fatal=False and keeps
    going.
    """
    ERROR = "red"
    WARNING = "magenta"
    LOG = "blue"
    RESULT = "green"

    def __init__(self, fatal=True, file=None):
        self.fatal = fatal
        self.file = file if file is not None else sys.stdout

    def print(self, text=""):
        print(text, file=self.file)

    def warn(self, msg, *exprs):
        """Prints a warning built like GenericException(msg, exprs)."""
        warning = GenericException(msg, list(exprs))
        self.print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.msg)

    def log(self, text):
        """Prints one entry of a script's log."""
        self.print(colored(text, ErrorHandler.LOG))

    def result(self, text):
        """Prints the display form of a script's result."""
        self.print(colored(text, ErrorHandler.RESULT))

    def throw(self, error):
        """Prints error, a GenericException, and exits if fatal."""
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg

        self.print(error_msg)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException(APOLOGY + " (maximum recursion depth exceeded)"))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(APOLOGY, internal=True))

        return not do_exit
