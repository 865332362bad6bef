from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.errors import SchemerBadSpecialForm
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol


def quote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise SchemerBadSpecialForm("quote expects exactly 1 operand", [Symbol("quote"), *tail])
    return tail[0]
