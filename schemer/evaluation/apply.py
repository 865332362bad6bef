"""Application engine for Schemer.

Centralizes procedure invocation for the evaluator and the `apply` primitive:
- native procedures (pure and I/O) are called straight through with the
  argument list;
- closures get their arity checked, their arguments bound in a fresh extension
  of the captured environment, and their body evaluated as a sequence there.
"""

from __future__ import annotations

from schemer import EvaluatorFn, LispValue, SExpression
from schemer.errors import SchemerArityError, SchemerDefaultError, SchemerNotFunction
from schemer.types.closure import Closure
from schemer.types.environment import Environment
from schemer.types.procedure import Primitive


def evaluate_sequence(
    forms: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    """Evaluate `forms` in order; all but the last only for effect. `forms` must be non-empty."""
    for e in forms[:-1]:
        evaluate_fn(e, env)
    return evaluate_fn(forms[-1], env)


def apply_closure(
    fn: Closure, args: list[LispValue], evaluate_fn: EvaluatorFn
) -> LispValue:
    """Apply a Closure to already-evaluated arguments.

    Without a rest parameter the argument count must equal the parameter count;
    with one it must be at least the parameter count. Extra arguments are
    collected into a list bound to the rest parameter.
    """
    arity = len(fn.params)
    if (fn.rest is None and len(args) != arity) or len(args) < arity:
        raise SchemerArityError(arity, args)
    if not fn.body:
        raise SchemerDefaultError(f"Cannot call {fn}: empty procedure body")
    call_env = fn.env.extend(fn.bind_arguments(args))
    return evaluate_sequence(fn.body, call_env, evaluate_fn)


def apply(
    head: LispValue, args: list[LispValue], evaluate_fn: EvaluatorFn
) -> LispValue:
    """Apply either a Closure or a native procedure; anything else is not a function."""
    if isinstance(head, Closure):
        return apply_closure(head, args, evaluate_fn)
    elif isinstance(head, Primitive):
        return head(args)
    else:
        raise SchemerNotFunction("Not a function", head)
