"""Surface-form rewriting applied once to each top-level form before evaluation.

The evaluator only understands the core forms (begin, quote, if, set!, define,
lambda, load and application). Derived forms are rewritten here:

    (let ((v e) ...) body...)      -> ((lambda (v ...) body...) e ...)
    (let* ((v e) more...) body...) -> (let ((v e)) (let* (more...) body...))
    (cond (t body...) ... (else b...)) -> (if t (begin body...) (cond ...))
    (when t body...)               -> (if t (begin body...) #f)
    (unless t body...)             -> (if t #f (begin body...))
    (and a b ...)                  -> (if a (and b ...) #f)
    (or a b ...)                   -> (if (define %or a) %or (or b ...))

Rewriting is recursive over the whole form, so nested derived forms are
handled by the single top-level pass. Quoted data is left untouched.

`or` keeps each operand's value in `%or`, defined in the environment the
form runs in, so a `define` among later operands binds there too. The binding
is read back immediately after it is made, which keeps nested `or`s correct.
"""

from __future__ import annotations

from typing import Callable

from schemer import SExpression
from schemer.errors import SchemerBadSpecialForm
from schemer.types.symbol import Symbol
from schemer.types.values import is_dotted

QUOTE = Symbol("quote")
BEGIN = Symbol("begin")
IF = Symbol("if")
LAMBDA = Symbol("lambda")
DEFINE = Symbol("define")
ELSE = Symbol("else")
OR_TEMP = Symbol("%or")


def _sequence(body: list[SExpression]) -> SExpression:
    return body[0] if len(body) == 1 else [BEGIN, *body]


def _or_step(test: SExpression, otherwise: SExpression) -> SExpression:
    # define returns the value it binds
    return [IF, [DEFINE, OR_TEMP, test], OR_TEMP, otherwise]


def _let_bindings(form: SExpression) -> tuple[list[Symbol], list[SExpression]]:
    bindings = form[1] if len(form) > 1 else None
    if not isinstance(bindings, list):
        raise SchemerBadSpecialForm("Malformed let bindings", form)
    names, inits = [], []
    for binding in bindings:
        if not (isinstance(binding, list) and len(binding) == 2 and isinstance(binding[0], Symbol)):
            raise SchemerBadSpecialForm("Malformed let binding", binding)
        names.append(binding[0])
        inits.append(binding[1])
    return names, inits


def _let(form: list) -> SExpression:
    names, inits = _let_bindings(form)
    if len(form) < 3:
        raise SchemerBadSpecialForm("let requires a body", form)
    return [[LAMBDA, names, *form[2:]], *inits]


def _let_star(form: list) -> SExpression:
    names, inits = _let_bindings(form)
    if len(form) < 3:
        raise SchemerBadSpecialForm("let* requires a body", form)
    body = form[2:]
    if not names:
        return [[LAMBDA, [], *body]]
    inner: SExpression = [LAMBDA, [names[-1]], *body]
    result: SExpression = [inner, inits[-1]]
    for name, init in zip(reversed(names[:-1]), reversed(inits[:-1])):
        result = [[LAMBDA, [name], result], init]
    return result


def _cond(form: list) -> SExpression:
    clauses = form[1:]
    result: SExpression = False
    for clause in reversed(clauses):
        if not (isinstance(clause, list) and clause):
            raise SchemerBadSpecialForm("Malformed cond clause", clause)
        test, body = clause[0], clause[1:]
        if test == ELSE:
            if clause is not clauses[-1]:
                raise SchemerBadSpecialForm("else must be the last cond clause", form)
            result = _sequence(body) if body else False
            continue
        if body:
            result = [IF, test, _sequence(body), result]
        else:
            result = _or_step(test, result)
    return result


def _when(form: list) -> SExpression:
    if len(form) < 3:
        raise SchemerBadSpecialForm("when requires a test and a body", form)
    return [IF, form[1], _sequence(form[2:]), False]


def _unless(form: list) -> SExpression:
    if len(form) < 3:
        raise SchemerBadSpecialForm("unless requires a test and a body", form)
    return [IF, form[1], False, _sequence(form[2:])]


def _and(form: list) -> SExpression:
    operands = form[1:]
    if not operands:
        return True
    result = operands[-1]
    for operand in reversed(operands[:-1]):
        result = [IF, operand, result, False]
    return result


def _or(form: list) -> SExpression:
    operands = form[1:]
    if not operands:
        return False
    result = operands[-1]
    for operand in reversed(operands[:-1]):
        result = _or_step(operand, result)
    return result


DERIVED_FORMS: dict[Symbol, Callable[[list], SExpression]] = {
    Symbol("let"): _let,
    Symbol("let*"): _let_star,
    Symbol("cond"): _cond,
    Symbol("when"): _when,
    Symbol("unless"): _unless,
    Symbol("and"): _and,
    Symbol("or"): _or,
}


def desugar(form: SExpression) -> SExpression:
    """Rewrite derived forms in `form` into core forms. Pure; returns a new form."""
    if is_dotted(form):
        items, tail = form
        return [desugar(x) for x in items], desugar(tail)
    if not isinstance(form, list) or not form:
        return form
    head = form[0]
    if head == QUOTE:
        return form
    if head in (LAMBDA, DEFINE) and len(form) > 2:
        # Parameter lists and define signatures are binding positions, not forms.
        return [head, form[1], *[desugar(x) for x in form[2:]]]
    if isinstance(head, Symbol) and head in DERIVED_FORMS:
        # Rewrite first, then desugar the result: derived forms may expand into derived forms.
        return desugar(DERIVED_FORMS[head](form))
    return [desugar(x) for x in form]
