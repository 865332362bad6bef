from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.errors import SchemerBadSpecialForm
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) != 3:
        raise SchemerBadSpecialForm(
            "if requires a predicate, a consequent and an alternative", [Symbol("if"), *tail]
        )
    pred, conseq, alt = tail
    result = evaluate_fn(pred, env)
    # Only #f is false; every other value, including 0 and (), selects the consequent
    if result is False:
        return evaluate_fn(alt, env)
    return evaluate_fn(conseq, env)
