"""Closure representation for Schemer."""

from __future__ import annotations

from io import StringIO

from schemer import SExpression, LispValue
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol


class Closure:
    """A first-class procedure: parameters, optional rest parameter, body and captured env.

    Closures compare by identity; no two distinct closures are ever equal.
    """

    __slots__ = ("params", "rest", "body", "env")

    def __init__(
        self,
        params: list[Symbol],
        rest: Symbol | None,
        body: list[SExpression],
        env: Environment,
    ):
        self.params: list[Symbol] = params
        self.rest: Symbol | None = rest
        self.body: list[SExpression] = body
        self.env: Environment = env

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(lambda (")
            buffer.write(" ".join(str(p) for p in self.params))
            if self.rest is not None:
                if self.params:
                    buffer.write(" ")
                buffer.write(f". {self.rest}")
            buffer.write(") ...)")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the closure."""
        return str(self)

    def bind_arguments(self, args: list[LispValue]) -> list[tuple[Symbol, LispValue]]:
        """Pair each parameter with its argument; the rest parameter takes the remainder as a list.

        Arity is checked by the caller.
        """
        bindings = list(zip(self.params, args))
        if self.rest is not None:
            bindings.append((self.rest, list(args[len(self.params):])))
        return bindings
