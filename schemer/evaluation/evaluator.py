"""Core evaluator for the Schemer interpreter.

A direct recursive tree walker: every nested evaluation and every closure call
uses a host stack frame, so there is no tail-call elimination. Dispatch order:

1. strings, numbers and booleans evaluate to themselves;
2. symbols are looked up in the environment;
3. lists headed by a special-form keyword go to their handler;
4. any other non-empty proper list is a procedure application;
5. everything else (the empty list, dotted lists, procedures, ports) is a
   bad special form.
"""

from __future__ import annotations

from schemer import SExpression, LispValue
from schemer.errors import SchemerBadSpecialForm
from schemer.evaluation.apply import apply
from schemer.evaluation.special_forms import SPECIAL_FORMS
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate `expr` in `env`, raising a SchemerError subclass on failure."""
    match expr:
        case bool() | int() | str():
            return expr
        case Symbol():
            return env.get(expr)
        case [Symbol() as head, *tail] if isinstance(expr, list) and head in SPECIAL_FORMS:
            return SPECIAL_FORMS[head](tail, env, evaluate)
        case [head, *tail] if isinstance(expr, list):
            # Operator first, then operands left to right
            fn = evaluate(head, env)
            args = [evaluate(arg, env) for arg in tail]
            return apply(fn, args, evaluate)

    raise SchemerBadSpecialForm("Unrecognized special form", expr)
