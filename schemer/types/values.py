"""Helpers over the value model: dotted-list construction, equality and rendering.

Representation summary:

    Atom        -> Symbol
    Number      -> int (never bool)
    Bool        -> bool
    String      -> str
    Pair        -> list
    DottedPair  -> (list_part, tail) tuple, tail never list-shaped
    procedures  -> Primitive / IOPrimitive / Closure
    Port        -> Port
"""

from __future__ import annotations

from io import StringIO

from schemer import LispValue
from schemer.types.closure import Closure
from schemer.types.port import Port
from schemer.types.procedure import Primitive, IOPrimitive
from schemer.types.symbol import Symbol

# Inverse of the reader's string escapes, so a written string reads back unchanged
_STRING_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"})


def is_number(x: LispValue) -> bool:
    # bool is a subclass of int; Lisp booleans are not numbers
    return isinstance(x, int) and not isinstance(x, bool)


def is_dotted(x: LispValue) -> bool:
    return isinstance(x, tuple) and len(x) == 2 and isinstance(x[0], list)


def is_list_shaped(x: LispValue) -> bool:
    return isinstance(x, list) or is_dotted(x)


def is_procedure(x: LispValue) -> bool:
    return isinstance(x, (Primitive, Closure))


def make_dotted(items: list[LispValue], tail: LispValue) -> LispValue:
    """Build an improper list, degenerating to a proper list when `tail` is list-shaped."""
    if isinstance(tail, list):
        return list(items) + tail
    if is_dotted(tail):
        inner, last = tail
        return list(items) + inner, last
    return list(items), tail


def values_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality for data, identity for procedures and ports."""
    if a is b:
        return True
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))
    if is_dotted(a) and is_dotted(b):
        return values_equal(a[0], b[0]) and values_equal(a[1], b[1])
    if isinstance(a, (Primitive, Closure, Port)) or isinstance(b, (Primitive, Closure, Port)):
        return False
    if type(a) != type(b):
        return False
    return a == b


def show_value(x: LispValue) -> str:
    """Render a value back to surface syntax."""
    if isinstance(x, bool):
        return "#t" if x else "#f"
    if isinstance(x, str):
        return f'"{x.translate(_STRING_ESCAPES)}"'
    if isinstance(x, (Symbol, int)):
        return str(x)
    if isinstance(x, list):
        return "(" + " ".join(show_value(v) for v in x) + ")"
    if is_dotted(x):
        items, tail = x
        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(" ".join(show_value(v) for v in items))
            buffer.write(" . ")
            buffer.write(show_value(tail))
            buffer.write(")")
            return buffer.getvalue()
    if isinstance(x, (Primitive, IOPrimitive, Closure, Port)):
        return repr(x)
    return str(x)
