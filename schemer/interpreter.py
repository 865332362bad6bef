from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from schemer import LispValue
from schemer.builtin import env_builtin, io_builtin
from schemer.config import get_prelude_file
from schemer.desugar import desugar
from schemer.errors import SchemerDefaultError, SchemerError
from schemer.evaluation.evaluator import evaluate as eval_expr
from schemer.reader.parser import parse, parse_all
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol

logger = logging.getLogger(__name__)


def new_root_environment() -> Environment:
    """Create a root environment holding every native procedure (pure and I/O)."""
    env = Environment()
    env_builtin.register(env)
    io_builtin.register(env)
    logger.debug("Root environment created with %d primitives", len(env))
    return env


def evaluate(env: Environment, source: str) -> LispValue:
    """Parse exactly one form from `source`, desugar it and evaluate it in `env`."""
    return eval_expr(desugar(parse(source)), env)


class Interpreter:
    """
    Orchestrates reading and evaluating Scheme code.
    Maintains one root Environment across calls, so definitions persist.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = new_root_environment()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            path = get_prelude_file()
            if path.is_file():
                self.eval(path.read_text(encoding='utf-8'))
                logger.debug("Prelude loaded from %s", path)
            else:
                # Be permissive: no prelude found -> proceed
                logger.warning("Prelude %s not found; starting without it", path)
        elif prelude:
            self.eval(prelude)

    def define(self, name: str, value: LispValue) -> LispValue:
        return self.env.define(Symbol(name), value)

    def eval(self, code: str) -> LispValue:
        """Evaluate every top-level form in `code`; return the last value (None if there are none)."""
        result: LispValue = None
        try:
            for expr in parse_all(code):
                result = eval_expr(desugar(expr), self.env)
        except RecursionError as e:
            raise SchemerDefaultError("Maximum recursion depth exceeded") from e
        return result

    def evaluate_safely(self, code: str) -> LispValue | SchemerError:
        """Like eval, but return the error instead of raising it."""
        try:
            return self.eval(code)
        except SchemerError as e:
            logger.debug("Evaluation failed: %s", e)
            return e

    def load_file(self, path: str | Path) -> LispValue:
        """Evaluate the file as (load "path") in the root environment."""
        try:
            return eval_expr([Symbol("load"), str(path)], self.env)
        except RecursionError as e:
            raise SchemerDefaultError("Maximum recursion depth exceeded") from e
