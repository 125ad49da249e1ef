"""Runs the NoCap interpreter on a .nocap file, or in command-line mode when no file is given. Uses the error
handling context manager so that no Python traceback ever reaches the user. Installed as the `nocap` executable.
"""

import argparse
import os
import sys

from nocap.interpreter import execute, to_json
from nocap.lang.error import ErrorHandler, GenericException
from nocap.lang.session import Session, report
from nocap.lang.shell import Shell

DEFAULT_RECURSION_LIMIT = 5000


def read_source(path):
    """Returns the contents of path, which must be an existing, non-empty file."""
    if not os.path.isfile(path):
        raise GenericException("'{}' does not exist", path)

    try:
        with open(path, "r", encoding="utf-8") as file:
            source = file.read()
    except OSError:
        raise GenericException("'{}' could not be opened", path)

    if not source:
        raise GenericException("'{}' is empty", path)
    return source


def build_parser():
    parser = argparse.ArgumentParser(prog="nocap", description="A programming language for GenZ.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--json", action="store_true",
                        help="print the result, errors and logs of the run as one JSON object")
    parser.add_argument("--recursion-limit", type=int, default=DEFAULT_RECURSION_LIMIT,
                        help="host recursion limit, bounds how deeply scripts may recurse (default: %(default)s)")
    return parser


def main(argv=None):
    """Runs nocap interpreter. Called from nocap executable script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        sys.setrecursionlimit(args.recursion_limit)

        if args.file is None:
            Shell(Session(), error_handler).cmdloop()

        elif args.json:
            error_handler.print(to_json(execute(read_source(args.file))))

        else:
            report(Session().run(read_source(args.file)), error_handler)


if __name__ == "__main__":
    main()
