from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.errors import SchemerBadSpecialForm
from schemer.types.symbol import Symbol
from schemer.types.environment import Environment


def set_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(set! var form) => the assigned value"""
    if len(tail) != 2 or not isinstance(tail[0], Symbol):
        raise SchemerBadSpecialForm("set! expects a variable and a value", [Symbol("set!"), *tail])
    var_sym, val_expr = tail
    value = evaluate_fn(val_expr, env)
    return env.set(var_sym, value)
