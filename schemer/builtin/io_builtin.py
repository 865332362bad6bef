"""I/O built-in procedures for the Schemer runtime environment.

Ports, reading and writing values, whole-file reads, and `apply`, which
re-enters the application engine. Host I/O failures are reported as
SchemerDefaultError; nothing here closes a port implicitly.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable, IO

from schemer import LispValue
from schemer.config import resolve_file
from schemer.errors import (
    SchemerArityError,
    SchemerDefaultError,
    SchemerSyntaxError,
    SchemerTypeError,
)
from schemer.evaluation.apply import apply as apply_engine
from schemer.evaluation.evaluator import evaluate
from schemer.reader.loader import read_forms, read_source
from schemer.reader.parser import parse
from schemer.types.environment import Environment
from schemer.types.port import Port
from schemer.types.procedure import IOPrimitive
from schemer.types.symbol import Symbol
from schemer.types.values import show_value

logger = logging.getLogger(__name__)


def _filename_arg(args: list[LispValue]) -> str:
    if len(args) != 1:
        raise SchemerArityError(1, args)
    if not isinstance(args[0], str):
        raise SchemerTypeError("string", args[0])
    return args[0]


def _open_handle(port: Port) -> IO[str]:
    if port.closed:
        raise SchemerDefaultError(f"Port {port.name or '<anonymous>'} is closed")
    return port.handle


def apply(args: list[LispValue]) -> LispValue:
    """(apply f '(a b)) or (apply f a b): call f with an explicit argument list.

    A single trailing list is used as the argument list; otherwise every
    argument after the procedure is passed as-is.
    """
    if not args:
        raise SchemerArityError(1, args)
    func, rest = args[0], args[1:]
    if len(rest) == 1 and isinstance(rest[0], list):
        return apply_engine(func, list(rest[0]), evaluate)
    return apply_engine(func, rest, evaluate)


def make_port(mode: str) -> Callable[[list[LispValue]], Port]:
    def fn(args: list[LispValue]) -> Port:
        filename = _filename_arg(args)
        path = resolve_file(filename) if mode == "r" else filename
        try:
            handle = open(path, mode, encoding="utf-8")
        except OSError as e:
            raise SchemerDefaultError(f"Cannot open {filename}: {e.strerror or e}") from e
        logger.debug("Opened %s port on %s", "input" if mode == "r" else "output", filename)
        return Port(handle, mode, filename)
    return fn


def close_port(args: list[LispValue]) -> bool:
    """Close a port and return #t; any other argument list returns #f."""
    if len(args) == 1 and isinstance(args[0], Port):
        args[0].close()
        logger.debug("Closed port on %s", args[0].name)
        return True
    return False


def read(args: list[LispValue]) -> LispValue:
    """Read one line from the port (standard input by default) and parse it as a single form."""
    if not args:
        handle = sys.stdin
    elif len(args) == 1 and isinstance(args[0], Port):
        handle = _open_handle(args[0])
    elif len(args) == 1:
        raise SchemerTypeError("port", args[0])
    else:
        raise SchemerArityError(1, args)
    try:
        line = handle.readline()
    except OSError as e:
        raise SchemerDefaultError(f"Cannot read from port: {e}") from e
    if not line:
        raise SchemerSyntaxError("unexpected end of input")
    return parse(line)


def write(args: list[LispValue]) -> bool:
    """Write a value's surface syntax and a newline to the port (standard output by default)."""
    if len(args) == 1:
        handle = sys.stdout
    elif len(args) == 2 and isinstance(args[1], Port):
        handle = _open_handle(args[1])
    elif len(args) == 2:
        raise SchemerTypeError("port", args[1])
    else:
        raise SchemerArityError(1, args)
    try:
        handle.write(show_value(args[0]) + "\n")
    except OSError as e:
        raise SchemerDefaultError(f"Cannot write to port: {e}") from e
    return True


def read_contents(args: list[LispValue]) -> str:
    return read_source(_filename_arg(args))


def read_all(args: list[LispValue]) -> list[LispValue]:
    """Parse every form in the named file into a list, without evaluating anything."""
    return read_forms(_filename_arg(args))


IO_PRIMITIVES: dict[str, Callable[[list[LispValue]], LispValue]] = {
    "apply": apply,
    "open-input-file": make_port("r"),
    "open-output-file": make_port("w"),
    "close-input-port": close_port,
    "close-output-port": close_port,
    "read": read,
    "write": write,
    "read-contents": read_contents,
    "read-all": read_all,
    "load": read_all,
}


def register(env: Environment) -> None:
    """Register all I/O builtin procedures into the given environment."""
    env.update({Symbol(name): IOPrimitive(name, fn) for name, fn in IO_PRIMITIVES.items()})
