from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.errors import SchemerBadSpecialForm
from schemer.evaluation.apply import evaluate_sequence
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol


def begin_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(begin e1 e2 ... en) => value of en"""
    if not tail:
        raise SchemerBadSpecialForm("begin requires at least one form", [Symbol("begin")])
    return evaluate_sequence(tail, env, evaluate_fn)
