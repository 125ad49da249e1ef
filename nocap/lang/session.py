"""Session control for the NoCap language: one root Environment, and the lex -> parse -> evaluate pipeline run
against it. The file runner uses one Session per file, the shell keeps one Session for its whole lifetime, and the
embedding interface builds a fresh Session per call.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from nocap.lang.error import GenericException
from nocap.lang.evaluator import evaluate
from nocap.lang.objects import NULL, Environment, Object, is_error
from nocap.pure.lexical import Lexer
from nocap.pure.parser import Parser


@dataclass
class Result:
    """Outcome of one Session.run. value is None when the source didn't parse."""
    value: Optional[Object] = None
    errors: List[str] = field(default_factory=list)  # all parse diagnostics, or the single runtime error
    logs: List[str] = field(default_factory=list)

    @property
    def output(self):
        """Display form of value, or None when there's nothing to show (ghosted, an error, or no value at all)."""
        if self.value is None or self.value is NULL or is_error(self.value):
            return None
        return self.value.inspect()

    def to_dict(self):
        return {"result": self.output, "errors": list(self.errors), "logs": list(self.logs)}


class Session:
    """Governs a NoCap session, with control over the scope shared by successive runs."""

    def __init__(self):
        self.env = Environment()

    @staticmethod
    def parse(source):
        """Returns (program, errors) for source. A non-empty errors list means program is partial."""
        parser = Parser(Lexer(source))
        program = parser.parse_program()
        return program, parser.errors

    def run(self, source):
        """Parses and evaluates source in this session's environment. A program with parse errors is not
        evaluated. Host faults such as RecursionError are left to the caller.
        """
        program, errors = self.parse(source)
        if errors:
            return Result(errors=errors)

        self.env.drain_logs()  # drop anything left behind by an aborted run
        value = evaluate(program, self.env)
        logs = self.env.drain_logs()

        if is_error(value):
            return Result(value, [value.message], logs)
        return Result(value, [], logs)


def report(result, error_handler):
    """Prints result the way the runner and the shell do: logs first, then the first error or the value."""
    for log in result.logs:
        error_handler.log(log)

    if result.errors:
        if len(result.errors) > 1:
            error_handler.warn("{} more parse errors not shown", str(len(result.errors) - 1))
        error_handler.throw(GenericException(result.errors[0]))
    elif result.output is not None:
        error_handler.result(result.output)
