"""NoCap interpreter: embedding interface.

For reference, basic program flow:
    1. Lexer (nocap/pure/lexical.py): source text to Tokens, one at a time
    2. Parser (nocap/pure/parser.py): Pratt parser from Tokens to a syntax.Program, collecting diagnostics
    3. Evaluator (nocap/lang/evaluator.py): walks the Program against an Environment and produces an Object

execute() is the single-call surface for hosts embedding the language: source text in, one JSON-shaped mapping
out. It never raises.
"""

import json

from nocap.lang.error import APOLOGY
from nocap.lang.session import Result, Session

INVALID_ARGUMENTS = "Invalid number of arguments. Expected 1 argument."


def execute(*args):
    """Runs one program and returns {"result": str or None, "errors": [str], "logs": [str]}.

    - result is the display form of the program's value, None for ghosted, no value, or failure
    - errors holds every parse error, or the one runtime error
    - logs holds what the script sent to caughtIn4K
    """
    if len(args) != 1:
        return Result(errors=[INVALID_ARGUMENTS]).to_dict()

    source, = args
    try:
        return Session().run(str(source)).to_dict()
    except Exception:  # host fault (e.g. RecursionError): never let it reach the embedder
        return Result(errors=[APOLOGY]).to_dict()


def to_json(result):
    """Serialises an execute() result."""
    return json.dumps(result, ensure_ascii=False)
