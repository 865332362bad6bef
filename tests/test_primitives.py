import pytest

from schemer.builtin.env_builtin import equal, eqv, unpack_num
from schemer.errors import SchemerArityError, SchemerTypeError
from schemer.evaluation.evaluator import evaluate
from schemer.reader.parser import parse_all
from schemer.types.symbol import Symbol


def run(env, source):
    result = None
    for form in parse_all(source):
        result = evaluate(form, env)
    return result


# -------------------------------
# Comparison
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(= 1 1)", True),
        ("(< 1 2)", True),
        ("(> 1 2)", False),
        ("(/= 1 2)", True),
        ("(>= 2 2)", True),
        ("(<= 3 2)", False),
        ('(= "5" 5)', True),
        ('(string=? "a" "a")', True),
        ('(string<? "abc" "abd")', True),
        ('(string>? "a" "b")', False),
        ('(string<=? "a" "a")', True),
        ('(string>=? "b" "a")', True),
        ("(&& #t #f)", False),
        ("(|| #t #f)", True),
        ("(|| #f #f)", False),
    ]
)
def test_comparisons(env, source, expected):
    assert run(env, source) is expected


@pytest.mark.parametrize(
    "source,kind",
    [
        ("(string=? 5 \"5\")", "string"),
        ("(&& 1 #t)", "boolean"),
        ("(< 'a 1)", "number"),
    ]
)
def test_comparison_type_mismatch(env, source, kind):
    with pytest.raises(SchemerTypeError) as exc:
        run(env, source)
    assert exc.value.expected == kind


@pytest.mark.parametrize("source", ["(< 1)", "(< 1 2 3)", '(string=? "a")', "(&&)"])
def test_comparison_arity(env, source):
    with pytest.raises(SchemerArityError) as exc:
        run(env, source)
    assert exc.value.expected == 2


# -------------------------------
# Lists
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(car '(1 2))", 1),
        ("(cdr '(1 2))", [2]),
        ("(cdr '(1))", []),
        ("(car '(a . b))", Symbol("a")),
        ("(cdr '(a . b))", Symbol("b")),
        ("(cdr '(a b . c))", ([Symbol("b")], Symbol("c"))),
        ("(cons 1 '())", [1]),
        ("(cons 1 (cons 2 '()))", [1, 2]),
        ("(cons 1 2)", ([1], 2)),
        ("(cons 1 '(2 . 3))", ([1, 2], 3)),
        ("(cons '(1) '(2))", [[1], 2]),
        ("(car (cdr (cons 1 (cons 2 '()))))", 2),
    ]
)
def test_list_operations(env, source, expected):
    assert run(env, source) == expected


@pytest.mark.parametrize("source", ["(car '())", "(cdr '())", "(car 1)", '(cdr "ab")'])
def test_car_cdr_need_a_pair(env, source):
    with pytest.raises(SchemerTypeError) as exc:
        run(env, source)
    assert exc.value.expected == "pair"


@pytest.mark.parametrize(
    "source,expected_count",
    [("(car)", 1), ("(car '(1) '(2))", 1), ("(cdr)", 1), ("(cons 1)", 2), ("(cons 1 2 3)", 2)],
)
def test_list_operation_arity(env, source, expected_count):
    with pytest.raises(SchemerArityError) as exc:
        run(env, source)
    assert exc.value.expected == expected_count


# -------------------------------
# Equality
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ('(eqv? 5 "5")', False),
        ('(equal? 5 "5")', True),
        ("(eqv? '(1 2) '(1 2))", True),
        ("(eq? 'a 'a)", True),
        ("(eqv? 1 #t)", False),
        ("(eqv? '() '())", True),
        ("(eqv? '(1 . 2) '(1 . 2))", True),
        ("(eqv? '(1 . 2) '(1 2))", False),
        ('(eqv? "a" "a")', True),
        ("(equal? '(1 \"2\") '(1 2))", False),
        ('(equal? "10" " 10")', True),
        ('(equal? "abc" "abd")', False),
        ("(equal? #t #t)", True),
        ("(equal? #t 1)", False),
        ("(equal? 'a \"a\")", False),
        ("(eqv? car car)", True),
    ]
)
def test_equality(env, source, expected):
    assert run(env, source) is expected


def test_closures_equal_only_to_themselves(env):
    run(env, "(define f (lambda (x) x))")
    run(env, "(define g (lambda (x) x))")
    assert run(env, "(eqv? f f)") is True
    assert run(env, "(eqv? f g)") is False
    assert run(env, "(equal? f g)") is False


@pytest.mark.parametrize("fn", [eqv, equal])
def test_equality_arity(fn):
    with pytest.raises(SchemerArityError):
        fn([1])


def test_equal_swallows_coercion_failures():
    # Neither value is numeric; the numeric coercion must not raise
    assert equal([Symbol("a"), Symbol("a")]) is True
    assert equal([Symbol("a"), "b"]) is False


def test_unpack_num():
    assert unpack_num(3) == 3
    assert unpack_num("42") == 42
    assert unpack_num([7]) == 7
    with pytest.raises(SchemerTypeError):
        unpack_num(True)


# -------------------------------
# Type predicates
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(boolean? #f)", True),
        ("(boolean? 0)", False),
        ("(pair? '(1 2))", True),
        ("(pair? '(1))", False),
        ("(pair? '())", False),
        ("(pair? '(1 . 2))", True),
        ("(symbol? 'a)", True),
        ('(symbol? "a")', False),
        ("(number? 1)", True),
        ("(number? #t)", False),
        ('(number? "1")', False),
        ('(string? "s")', True),
        ("(string? 's)", False),
        ("(port? 1)", False),
        ("(procedure? car)", True),
        ("(procedure? apply)", True),
        ("(procedure? (lambda (x) x))", True),
        ("(procedure? 'car)", False),
    ]
)
def test_type_predicates(env, source, expected):
    assert run(env, source) is expected


@pytest.mark.parametrize("source", ["(boolean?)", "(pair? 1 2)", "(procedure?)"])
def test_type_predicate_arity(env, source):
    with pytest.raises(SchemerArityError) as exc:
        run(env, source)
    assert exc.value.expected == 1
