import logging

from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.desugar import desugar
from schemer.errors import SchemerDefaultError
from schemer.evaluation.apply import apply
from schemer.reader.loader import read_forms
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol

logger = logging.getLogger(__name__)


def load_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (load "filename")
    Reads every top-level form of the file, desugars and evaluates each in `env`
    in order, and returns the value of the last one.

    Any other shape, e.g. (load name), is an ordinary call to the `load`
    primitive, which returns the parsed forms without evaluating them.
    """
    if len(tail) != 1 or not isinstance(tail[0], str):
        proc = evaluate_fn(Symbol("load"), env)
        args = [evaluate_fn(arg, env) for arg in tail]
        return apply(proc, args, evaluate_fn)

    filename = tail[0]
    forms = read_forms(filename)
    if not forms:
        raise SchemerDefaultError(f"Nothing to evaluate in {filename}")
    logger.debug("Loading %d form(s) from %s", len(forms), filename)
    result: LispValue = None
    for form in forms:
        result = evaluate_fn(desugar(form), env)
    return result
