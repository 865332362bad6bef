# Core type aliases for Schemer's data model.
# Values are plain Python objects wherever possible:
#   symbols -> Symbol, numbers -> int, booleans -> bool, strings -> str,
#   proper lists -> list, dotted lists -> (list_part, tail) tuples.
# Procedures, closures and ports get their own small classes under schemer.types.
#
# Naming guidance:
# - SExpression: syntactic forms handed to the evaluator (code-as-data).
# - LispValue:  evaluated runtime values.
# Both resolve to `Any` and are interchangeable.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias
SExpression = LispValue

# Evaluator function type handed to special forms
EvaluatorFn = Callable[..., LispValue]


# Public front-end API (imported last: the modules below depend on the aliases above)
from schemer.interpreter import Interpreter, evaluate, new_root_environment  # noqa: E402

__all__ = [
    "LispValue",
    "SExpression",
    "EvaluatorFn",
    "Interpreter",
    "evaluate",
    "new_root_environment",
]
