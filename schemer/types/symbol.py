from __future__ import annotations
import sys


class Symbol:
    """An atom: a bare identifier in source, a variable name when evaluated.

    Names are case-sensitive and compared by text. Special-form keywords are
    ordinary symbols; only their position at the head of a list makes them
    special.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        if not name:
            raise ValueError("symbol name must be non-empty")
        # Interned: environment lookups hash and compare these constantly
        self.name = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name is other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name
