from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.errors import SchemerBadSpecialForm
from schemer.evaluation.special_forms.lambda_form import make_closure
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol
from schemer.types.values import is_dotted


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (define var form)
    (define (var params...) body...)
    (define (var params... . rest) body...)
    Returns the bound value. Redefining a visible name overwrites its cell.
    """
    if not tail:
        raise SchemerBadSpecialForm("define requires a target", [Symbol("define")])

    target = tail[0]
    if isinstance(target, Symbol):
        if len(tail) != 2:
            raise SchemerBadSpecialForm(
                "define expects a variable and a value", [Symbol("define"), *tail]
            )
        value = evaluate_fn(tail[1], env)
        return env.define(target, value)

    if isinstance(target, list) and target and isinstance(target[0], Symbol):
        closure = make_closure(target[1:], None, tail[1:], env)
        return env.define(target[0], closure)

    if is_dotted(target) and target[0] and isinstance(target[0][0], Symbol):
        (name, *params), rest = target
        closure = make_closure(params, rest, tail[1:], env)
        return env.define(name, closure)

    raise SchemerBadSpecialForm("Malformed define", [Symbol("define"), *tail])
