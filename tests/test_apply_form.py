import pytest

from schemer.errors import SchemerArityError, SchemerNotFunction
from schemer.evaluation.evaluator import evaluate
from schemer.reader.parser import parse_all


def run(env, source):
    """Parse and evaluate all forms in source, returning the last result."""
    result = None
    for form in parse_all(source):
        result = evaluate(form, env)
    return result


def test_apply_builtin_plus_with_list(env):
    # (apply + '(1 2 3)) => 6
    assert run(env, "(apply + '(1 2 3))") == 6


def test_apply_with_spread_arguments(env):
    assert run(env, "(apply + 1 2 3)") == 6


def test_apply_lambda_defined_via_define(env):
    src = """
    (define add2 (lambda (a b) (+ a b)))
    (apply add2 (cons 10 (cons 20 '())))
    """
    assert run(env, src) == 30


def test_apply_with_empty_argument_list(env):
    src = """
    (define (const) 'k)
    (apply const '())
    """
    assert str(run(env, src)) == "k"


def test_apply_trailing_list_is_the_argument_list(env):
    # A single trailing list is unpacked, it is not passed as one argument
    src = """
    (define (first-arg . xs) (car xs))
    (apply first-arg '(1 2))
    """
    assert run(env, src) == 1


def test_apply_arity_error_from_lambda(env):
    src = """
    (define id (lambda (x) x))
    (apply id '())
    """
    with pytest.raises(SchemerArityError):
        run(env, src)


def test_apply_requires_a_procedure(env):
    with pytest.raises(SchemerArityError):
        run(env, "(apply)")
    with pytest.raises(SchemerNotFunction):
        run(env, "(apply 5 '(1))")


def test_apply_can_apply_itself(env):
    assert run(env, "(apply apply (cons + (cons '(1 2) '())))") == 3
