import io

import pytest

from schemer.errors import (
    SchemerArityError,
    SchemerDefaultError,
    SchemerSyntaxError,
    SchemerTypeError,
    SchemerUnboundSymbol,
)
from schemer.evaluation.evaluator import evaluate
from schemer.reader.parser import parse_all
from schemer.types.port import Port
from schemer.types.symbol import Symbol


def run(env, source):
    result = None
    for form in parse_all(source):
        result = evaluate(form, env)
    return result


def scm(path) -> str:
    """Render a path as a Scheme string literal."""
    return '"' + str(path).replace("\\", "\\\\") + '"'


# -------------------------------
# Ports
# -------------------------------
def test_write_and_read_through_ports(env, tmp_path):
    target = tmp_path / "out.scm"
    run(env, f"(define out (open-output-file {scm(target)}))")
    assert run(env, "(port? out)") is True
    assert run(env, "(write '(1 \"two\" #t) out)") is True
    assert run(env, "(write 'sym out)") is True
    assert run(env, "(close-output-port out)") is True
    assert target.read_text() == '(1 "two" #t)\nsym\n'

    run(env, f"(define in (open-input-file {scm(target)}))")
    assert run(env, "(read in)") == [1, "two", True]
    assert run(env, "(read in)") == Symbol("sym")
    with pytest.raises(SchemerSyntaxError):
        run(env, "(read in)")
    assert run(env, "(close-input-port in)") is True


@pytest.mark.parametrize("text", ['say "hi"', "a\\b", "two\nlines", "tab\there", ""])
def test_strings_survive_write_then_read(env, tmp_path, text):
    target = tmp_path / "strings.scm"
    env.define(Symbol("text"), text)
    run(env, f"(define out (open-output-file {scm(target)}))")
    run(env, "(write (cons text '()) out)")
    run(env, "(close-output-port out)")
    assert target.read_text().count("\n") == 1

    run(env, f"(define in (open-input-file {scm(target)}))")
    assert run(env, "(read in)") == [text]
    run(env, "(close-input-port in)")


def test_close_port_on_non_port_returns_false(env):
    assert run(env, "(close-input-port 5)") is False
    assert run(env, "(close-output-port)") is False


def test_using_a_closed_port_is_an_error(env, tmp_path):
    target = tmp_path / "closed.txt"
    run(env, f"(define out (open-output-file {scm(target)}))")
    run(env, "(close-output-port out)")
    with pytest.raises(SchemerDefaultError):
        run(env, "(write 1 out)")


def test_open_missing_file(env, tmp_path):
    with pytest.raises(SchemerDefaultError):
        run(env, f"(open-input-file {scm(tmp_path / 'missing.scm')})")


@pytest.mark.parametrize("source", ["(open-input-file 5)", "(read-contents 'x)", "(read-all 1)"])
def test_file_primitives_need_a_string(env, source):
    with pytest.raises(SchemerTypeError) as exc:
        run(env, source)
    assert exc.value.expected == "string"


def test_file_primitive_arity(env):
    with pytest.raises(SchemerArityError):
        run(env, "(open-output-file)")


def test_open_input_file_returns_port(env, tmp_path):
    target = tmp_path / "in.txt"
    target.write_text("42\n")
    port = run(env, f"(open-input-file {scm(target)})")
    try:
        assert isinstance(port, Port)
        assert port.mode == "r"
    finally:
        port.close()


# -------------------------------
# Standard streams
# -------------------------------
def test_write_defaults_to_stdout(env, capsys):
    assert run(env, '(write "hi")') is True
    assert run(env, "(write '(a . b))") is True
    assert capsys.readouterr().out == '"hi"\n(a . b)\n'


def test_read_defaults_to_stdin(env, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("(+ 1 2)\n"))
    assert run(env, "(read)") == [Symbol("+"), 1, 2]


def test_read_rejects_non_port(env):
    with pytest.raises(SchemerTypeError):
        run(env, "(read 5)")


# -------------------------------
# Whole files
# -------------------------------
def test_read_contents(env, tmp_path):
    target = tmp_path / "text.txt"
    target.write_text("line one\nline two\n")
    assert run(env, f"(read-contents {scm(target)})") == "line one\nline two\n"


def test_read_all_parses_without_evaluating(env, tmp_path):
    target = tmp_path / "forms.scm"
    target.write_text("(define x 1)\n(undefined-fn x)\n")
    forms = run(env, f"(read-all {scm(target)})")
    assert forms == [[Symbol("define"), Symbol("x"), 1], [Symbol("undefined-fn"), Symbol("x")]]
    assert Symbol("x") not in env


def test_load_evaluates_forms_in_order(env, tmp_path):
    target = tmp_path / "prog.scm"
    target.write_text("(define a 2)\n(define (double n) (* n a))\n(double 21)\n")
    assert run(env, f"(load {scm(target)})") == 42
    assert run(env, "(double 5)") == 10


def test_load_desugars_each_form(env, tmp_path):
    target = tmp_path / "let.scm"
    target.write_text("(let ((x 2) (y 3)) (* x y))\n")
    assert run(env, f"(load {scm(target)})") == 6


def test_load_of_empty_file(env, tmp_path):
    target = tmp_path / "empty.scm"
    target.write_text("; nothing here\n")
    with pytest.raises(SchemerDefaultError):
        run(env, f"(load {scm(target)})")


def test_load_missing_file(env, tmp_path):
    with pytest.raises(SchemerDefaultError):
        run(env, f"(load {scm(tmp_path / 'nope.scm')})")


def test_load_with_non_literal_argument_calls_primitive(env, tmp_path):
    target = tmp_path / "data.scm"
    target.write_text("(define never 1) 7")
    run(env, f"(define name {scm(target)})")
    assert run(env, "(load name)") == [[Symbol("define"), Symbol("never"), 1], 7]
    assert Symbol("never") not in env


def test_load_error_stops_at_failing_form(env, tmp_path):
    target = tmp_path / "broken.scm"
    target.write_text("(define before 1)\n(car '())\n(define after 2)\n")
    with pytest.raises(SchemerTypeError):
        run(env, f"(load {scm(target)})")
    assert env.get(Symbol("before")) == 1
    with pytest.raises(SchemerUnboundSymbol):
        env.get(Symbol("after"))


def test_load_path_is_searched(env, tmp_path, monkeypatch):
    (tmp_path / "lib.scm").write_text("(define from-lib 'yes)\n")
    monkeypatch.setenv("SCHEMER_LOAD_PATH", str(tmp_path))
    monkeypatch.chdir(tmp_path.parent)
    assert run(env, '(load "lib.scm")') == Symbol("yes")
