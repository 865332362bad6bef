"""Runtime environment for Schemer.

An Environment is an ordered sequence of (Symbol, Cell) bindings. Cells are the
unit of sharing: extending an environment copies the *references* to every
inherited cell and allocates fresh cells only for the new names, so a set! on
an inherited variable is visible through every environment holding that cell.

Lookup scans newest-first; the first binding for a name wins (shadowing).
Bindings are never removed. `define` grows the environment in place; `extend`
returns a new Environment and leaves its base untouched.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator

from schemer import LispValue
from schemer.errors import SchemerUnboundSymbol
from schemer.types.symbol import Symbol


class Cell:
    """A single mutable storage location, possibly shared by several environments."""

    __slots__ = ("value",)

    def __init__(self, value: LispValue):
        self.value = value

    def __repr__(self) -> str:
        return f"Cell({self.value!r})"


class Environment:
    """Ordered mapping from Symbols to shared mutable Cells."""

    __slots__ = ("_bindings", "_index")

    def __init__(self, bindings: Iterable[tuple[Symbol, Cell]] = ()):
        # Stored oldest-first; the logical front of the sequence is the end of the list.
        self._bindings: list[tuple[Symbol, Cell]] = []
        # Newest binding per name, so lookup need not scan.
        self._index: dict[Symbol, Cell] = {}
        for name, cell in bindings:
            self._bindings.append((name, cell))
            self._index[name] = cell

    def lookup(self, name: Symbol) -> Cell:
        """Return the cell bound to `name`.

        Raises SchemerUnboundSymbol if the symbol is not found.
        """
        cell = self._index.get(name)
        if cell is None:
            raise SchemerUnboundSymbol("Getting an unbound variable", str(name))
        return cell

    def get(self, name: Symbol) -> LispValue:
        return self.lookup(name).value

    def set(self, name: Symbol, value: LispValue) -> LispValue:
        """Overwrite the existing cell for `name`; assignment never creates a binding."""
        cell = self._index.get(name)
        if cell is None:
            raise SchemerUnboundSymbol("Setting an unbound variable", str(name))
        cell.value = value
        return value

    def define(self, name: Symbol, value: LispValue) -> LispValue:
        """Bind `name` in place.

        If any binding for `name` is visible from this environment (inherited ones
        included) its cell is overwritten; otherwise a new cell is added to the front.
        """
        cell = self._index.get(name)
        if cell is not None:
            cell.value = value
            return value
        cell = Cell(value)
        self._bindings.append((name, cell))
        self._index[name] = cell
        return value

    def extend(self, bindings: Iterable[tuple[Symbol, LispValue]]) -> Environment:
        """Return a new Environment: fresh cells for `bindings` in front of every inherited cell.

        Within `bindings` the first occurrence of a name shadows later ones.
        """
        fresh = [(name, Cell(value)) for name, value in bindings]
        return Environment(self._bindings + fresh[::-1])

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in this environment."""
        for k, v in mapping.items():
            self.define(k, v)

    def names(self) -> list[Symbol]:
        """Bound names, front (newest) first, duplicates included."""
        return [name for name, _ in reversed(self._bindings)]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[tuple[Symbol, Cell]]:
        return reversed(self._bindings)

    def __str__(self) -> str:
        """Compact view of the visible bindings, newest first."""
        with StringIO() as buffer:
            buffer.write("{")
            first = True
            for k, cell in self:
                if not first:
                    buffer.write(", ")
                buffer.write(f"{k}: {cell.value!r}")
                first = False
            buffer.write("}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment of {len(self)} bindings>"
