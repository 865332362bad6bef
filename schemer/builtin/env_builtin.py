"""Pure built-in procedures for the Schemer runtime environment.

Arithmetic, comparison, list processing, equality and type predicates. Every
function takes the evaluated argument list and either returns a value or
raises a SchemerError; none of them touch the evaluator or the outside world.
"""
from __future__ import annotations

import operator
import re
from functools import reduce
from typing import Callable

from schemer import LispValue
from schemer.errors import SchemerArityError, SchemerDefaultError, SchemerTypeError
from schemer.types.environment import Environment
from schemer.types.port import Port
from schemer.types.procedure import Primitive
from schemer.types.symbol import Symbol
from schemer.types.values import is_dotted, is_number, is_procedure, values_equal

_LEADING_INT_RE = re.compile(r"\s*(-?\d+)")


# -------------------------------
# Coercions
# -------------------------------
def unpack_num(x: LispValue) -> int:
    """Coerce to an integer: numbers as-is, strings by reading a leading integer."""
    if is_number(x):
        return x
    if isinstance(x, str):
        m = _LEADING_INT_RE.match(x)
        if m is None:
            raise SchemerTypeError("number", x)
        return int(m.group(1))
    if isinstance(x, list) and len(x) == 1:
        return unpack_num(x[0])
    raise SchemerTypeError("number", x)


def unpack_str(x: LispValue) -> str:
    if isinstance(x, str):
        return x
    raise SchemerTypeError("string", x)


def unpack_bool(x: LispValue) -> bool:
    if isinstance(x, bool):
        return x
    raise SchemerTypeError("boolean", x)


# Tried in order by equal?; the first coercion that succeeds on both sides and matches wins.
COERCIONS: tuple[Callable[[LispValue], LispValue], ...] = (unpack_num, unpack_str, unpack_bool)


# -------------------------------
# Arithmetic
# -------------------------------
def _quot(n: int, d: int) -> int:
    """Integer division truncated toward zero."""
    q = abs(n) // abs(d)
    return q if (n >= 0) == (d >= 0) else -q


def _rem(n: int, d: int) -> int:
    """Remainder with the sign of the dividend."""
    return n - d * _quot(n, d)


def numeric_binop(op: Callable[[int, int], int]) -> Callable[[list[LispValue]], int]:
    """Left fold of `op` over two or more numeric arguments."""
    def fn(args: list[LispValue]) -> int:
        if len(args) < 2:
            raise SchemerArityError(2, args)
        nums = [unpack_num(a) for a in args]
        try:
            return reduce(op, nums)
        except ZeroDivisionError:
            raise SchemerDefaultError("Division by zero")
    return fn


# -------------------------------
# Comparison
# -------------------------------
def bool_binop(
    unpacker: Callable[[LispValue], LispValue], op: Callable[[LispValue, LispValue], bool]
) -> Callable[[list[LispValue]], bool]:
    """Binary comparison after coercing both operands with `unpacker`."""
    def fn(args: list[LispValue]) -> bool:
        if len(args) != 2:
            raise SchemerArityError(2, args)
        left = unpacker(args[0])
        right = unpacker(args[1])
        return bool(op(left, right))
    return fn


# -------------------------------
# Lists
# -------------------------------
def car(args: list[LispValue]) -> LispValue:
    """Return the first element of a non-empty list or dotted pair."""
    if len(args) != 1:
        raise SchemerArityError(1, args)
    xs = args[0]
    if isinstance(xs, list) and xs:
        return xs[0]
    if is_dotted(xs) and xs[0]:
        return xs[0][0]
    raise SchemerTypeError("pair", xs)


def cdr(args: list[LispValue]) -> LispValue:
    """Return everything after the first element.

    - For lists: the remaining elements as a list (possibly empty).
    - For dotted pairs: the remaining dotted pair, or the tail itself once only
      one element is left.
    """
    if len(args) != 1:
        raise SchemerArityError(1, args)
    xs = args[0]
    if isinstance(xs, list) and xs:
        return xs[1:]
    if is_dotted(xs) and xs[0]:
        items, tail = xs
        if len(items) == 1:
            return tail
        return items[1:], tail
    raise SchemerTypeError("pair", xs)


def cons(args: list[LispValue]) -> LispValue:
    """Prepend a head; the result is a proper list only if the tail is one."""
    if len(args) != 2:
        raise SchemerArityError(2, args)
    head, tail = args
    if isinstance(tail, list):
        return [head] + tail
    if is_dotted(tail):
        items, last = tail
        return [head] + items, last
    return [head], tail


# -------------------------------
# Equality
# -------------------------------
def eqv(args: list[LispValue]) -> bool:
    """Structural equality on data, identity on procedures and ports."""
    if len(args) != 2:
        raise SchemerArityError(2, args)
    return values_equal(args[0], args[1])


def _coerced_equal(a: LispValue, b: LispValue, unpacker: Callable[[LispValue], LispValue]) -> bool:
    try:
        return unpacker(a) == unpacker(b)
    except SchemerTypeError:
        # This coercion does not apply to one of the operands
        return False


def equal(args: list[LispValue]) -> bool:
    """eqv?, or equal once both operands go through the same coercion: (equal? 5 "5") => #t"""
    if len(args) != 2:
        raise SchemerArityError(2, args)
    a, b = args
    if values_equal(a, b):
        return True
    return any(_coerced_equal(a, b, unpacker) for unpacker in COERCIONS)


# -------------------------------
# Type predicates
# -------------------------------
def is_pair(x: LispValue) -> bool:
    # A pair needs at least two elements; (), (1) are not pairs
    return (isinstance(x, list) and len(x) >= 2) or is_dotted(x)


def predicate(test: Callable[[LispValue], bool]) -> Callable[[list[LispValue]], bool]:
    def fn(args: list[LispValue]) -> bool:
        if len(args) != 1:
            raise SchemerArityError(1, args)
        return bool(test(args[0]))
    return fn


PRIMITIVES: dict[str, Callable[[list[LispValue]], LispValue]] = {
    "+": numeric_binop(operator.add),
    "-": numeric_binop(operator.sub),
    "*": numeric_binop(operator.mul),
    "/": numeric_binop(operator.floordiv),
    "mod": numeric_binop(operator.mod),
    "quotient": numeric_binop(_quot),
    "remainder": numeric_binop(_rem),
    "=": bool_binop(unpack_num, operator.eq),
    "<": bool_binop(unpack_num, operator.lt),
    ">": bool_binop(unpack_num, operator.gt),
    "/=": bool_binop(unpack_num, operator.ne),
    ">=": bool_binop(unpack_num, operator.ge),
    "<=": bool_binop(unpack_num, operator.le),
    "&&": bool_binop(unpack_bool, lambda a, b: a and b),
    "||": bool_binop(unpack_bool, lambda a, b: a or b),
    "string=?": bool_binop(unpack_str, operator.eq),
    "string<?": bool_binop(unpack_str, operator.lt),
    "string>?": bool_binop(unpack_str, operator.gt),
    "string<=?": bool_binop(unpack_str, operator.le),
    "string>=?": bool_binop(unpack_str, operator.ge),
    "car": car,
    "cdr": cdr,
    "cons": cons,
    "eq?": eqv,
    "eqv?": eqv,
    "equal?": equal,
    "boolean?": predicate(lambda x: isinstance(x, bool)),
    "pair?": predicate(is_pair),
    "symbol?": predicate(lambda x: isinstance(x, Symbol)),
    "number?": predicate(is_number),
    "string?": predicate(lambda x: isinstance(x, str)),
    "port?": predicate(lambda x: isinstance(x, Port)),
    "procedure?": predicate(is_procedure),
}


def register(env: Environment) -> None:
    """Register all pure builtin procedures into the given environment."""
    env.update({Symbol(name): Primitive(name, fn) for name, fn in PRIMITIVES.items()})
