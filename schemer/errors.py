"""Error taxonomy shared by the reader, evaluator and primitive library.

Every failure surfaces as a subclass of SchemerError and propagates by normal
exception unwinding: the first error raised in a sub-evaluation aborts the
whole enclosing expression. There is no in-language way to catch one.
"""

from __future__ import annotations

from typing import Any


def _show(value: Any) -> str:
    # Imported lazily: schemer.types.values imports the procedure/closure types
    from schemer.types.values import show_value
    return show_value(value)


class SchemerError(Exception):
    """ Base class for all Schemer errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SchemerArityError(SchemerError):
    """ Raised when a procedure receives the wrong number of arguments (NumArgs)"""

    def __init__(self, expected: int, found: list):
        self.expected = expected
        self.found = list(found)
        shown = " ".join(_show(v) for v in self.found)
        super().__init__(f"Expected {expected} args; found values {shown}".rstrip())


class SchemerTypeError(SchemerError):
    """ Raised when a value has the wrong type for an operation (TypeMismatch)"""

    def __init__(self, expected: str, found: Any):
        self.expected = expected
        self.found = found
        super().__init__(f"Invalid type: expected {expected}, found {_show(found)}")


class SchemerSyntaxError(SchemerError):
    """ Raised by the reader on malformed source text (ParseError)"""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Parse error: {detail}")


class SchemerBadSpecialForm(SchemerError):
    """ Raised when a form matches no evaluation rule (BadSpecialForm)"""

    def __init__(self, message: str, form: Any):
        self.form = form
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message}: {_show(self.form)}"


class SchemerNotFunction(SchemerError):
    """ Raised when a non-procedure value is applied (NotFunction)"""

    def __init__(self, message: str, value: Any):
        self.value = value
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message}: {_show(self.value)}"


class SchemerUnboundSymbol(SchemerError):
    """ Raised when a variable is read or assigned before it is bound (UnboundVariable)"""

    def __init__(self, message: str, name: str):
        self.name = name
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message}: {self.name}"


class SchemerDefaultError(SchemerError):
    """ Raised for any other failure: I/O errors, division by zero, empty bodies (Default)"""
