"""Native procedure wrappers.

Both kinds wrap a Python callable taking the already-evaluated argument list.
Primitive functions are pure; IOPrimitive functions may touch files, ports and
the standard streams, and may re-enter the applier (`apply`).
Equality between procedures is identity.
"""

from __future__ import annotations

from typing import Callable

from schemer import LispValue

PrimitiveFn = Callable[[list[LispValue]], LispValue]


class Primitive:
    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: PrimitiveFn):
        self.name = name
        self.fn = fn

    def __call__(self, args: list[LispValue]) -> LispValue:
        return self.fn(args)

    def __repr__(self) -> str:
        return f"<primitive:{self.name}>"


class IOPrimitive(Primitive):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"<IO primitive:{self.name}>"
