from __future__ import annotations

from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.errors import SchemerBadSpecialForm
from schemer.types.closure import Closure
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol
from schemer.types.values import is_dotted


def make_closure(
    params: list[SExpression],
    rest: SExpression | None,
    body: list[SExpression],
    env: Environment,
) -> Closure:
    """Build a Closure over `env`, checking that every parameter name is a symbol."""
    for p in params:
        if not isinstance(p, Symbol):
            raise SchemerBadSpecialForm("Parameter is not a symbol", p)
    if rest is not None and not isinstance(rest, Symbol):
        raise SchemerBadSpecialForm("Rest parameter is not a symbol", rest)
    return Closure(list(params), rest, list(body), env)


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (lambda (params...) body...)
    (lambda (params... . rest) body...)
    (lambda rest body...)
    An empty body is accepted here and reported when the closure is called.
    """
    if not tail:
        raise SchemerBadSpecialForm("lambda requires a parameter list", [Symbol("lambda")])

    formals, body = tail[0], tail[1:]
    if isinstance(formals, list):
        return make_closure(formals, None, body, env)
    if is_dotted(formals):
        params, rest = formals
        return make_closure(params, rest, body, env)
    if isinstance(formals, Symbol):
        return make_closure([], formals, body, env)
    raise SchemerBadSpecialForm("Malformed lambda parameter list", [Symbol("lambda"), *tail])
