"""Command-line front end: `python -m schemer [FILE [ARGS...]]`.

With a FILE, binds `args` to the remaining command-line strings, loads FILE and
prints the final value (or the error) to stderr. Without one, runs a REPL.
"""

from __future__ import annotations

import argparse
import logging
import sys

from schemer.config import get_recursion_limit, setup_logging
from schemer.errors import SchemerError
from schemer.interpreter import Interpreter
from schemer.types.values import show_value

logger = logging.getLogger(__name__)

PROMPT = "Lisp>>> "


def run_one(interp: Interpreter, filename: str, args: list[str]) -> int:
    interp.define("args", list(args))
    try:
        result = interp.load_file(filename)
    except SchemerError as e:
        print(e, file=sys.stderr)
        return 1
    print(show_value(result), file=sys.stderr)
    return 0


def run_repl(interp: Interpreter) -> int:
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            break
        if line.strip() == "quit":
            break
        result = interp.evaluate_safely(line)
        if isinstance(result, SchemerError):
            print(result)
        elif result is not None:
            print(show_value(result))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="schemer", description="Scheme interpreter")
    parser.add_argument("file", nargs="?", help="source file to load; omit for a REPL")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="bound to `args` in the program")
    parser.add_argument("--no-prelude", action="store_true", help="do not load the standard prelude")
    parser.add_argument("--log-level", default=None, help="logging level (default: SCHEMER_LOG_LEVEL or WARNING)")
    ns = parser.parse_args(argv)

    setup_logging(ns.log_level)
    sys.setrecursionlimit(get_recursion_limit())

    interp = Interpreter(prelude=None if ns.no_prelude else 'auto')
    if ns.file is None:
        return run_repl(interp)
    logger.info("Running %s", ns.file)
    return run_one(interp, ns.file, ns.args)


if __name__ == "__main__":
    sys.exit(main())
