"""
Symbol table: the mutable name-to-value environment used during evaluation.

A table holds user variables and a separate set of read-only constants.
It has no internal locking; a table shared between several expressions
must be synchronized by its users.
"""

from typing import Dict, Iterator, Mapping, MutableMapping, Optional

from .errors import ConstantAssignmentError


class SymbolTable(MutableMapping[str, float]):
    """Mapping of symbol names to numeric values, with read-only constants."""

    def __init__(
        self,
        symbols: Optional[Mapping[str, float]] = None,
        constants: Optional[Mapping[str, float]] = None,
    ):
        self._symbols: Dict[str, float] = dict(symbols or {})
        self._constants: Dict[str, float] = dict(constants or {})

    # Mapping protocol: variables first, then constants

    def __getitem__(self, name: str) -> float:
        if name in self._symbols:
            return self._symbols[name]
        return self._constants[name]

    def __setitem__(self, name: str, value: float) -> None:
        if name in self._constants:
            raise ConstantAssignmentError(name)
        self._symbols[name] = value

    def __delitem__(self, name: str) -> None:
        del self._symbols[name]

    def __contains__(self, name: object) -> bool:
        return name in self._symbols or name in self._constants

    def __iter__(self) -> Iterator[str]:
        yield from self._symbols
        for name in self._constants:
            if name not in self._symbols:
                yield name

    def __len__(self) -> int:
        return len(self._symbols) + sum(
            1 for name in self._constants if name not in self._symbols
        )

    def __repr__(self) -> str:
        return f"SymbolTable(symbols={self._symbols!r}, constants={self._constants!r})"

    # Variables

    def set(self, name: str, value: float) -> "SymbolTable":
        """Binds a variable, returning the table for chaining."""
        self[name] = value
        return self

    def has(self, name: str) -> bool:
        """Is ``name`` bound as a variable?"""
        return name in self._symbols

    def delete(self, name: str) -> "SymbolTable":
        """Removes a variable if present."""
        self._symbols.pop(name, None)
        return self

    def clear(self) -> None:
        """Removes all variables; constants are kept."""
        self._symbols.clear()

    @property
    def variables(self) -> Mapping[str, float]:
        return dict(self._symbols)

    # Constants

    def define_constant(self, name: str, value: float) -> "SymbolTable":
        """Adds a read-only symbol. A variable of the same name is dropped."""
        self._symbols.pop(name, None)
        self._constants[name] = value
        return self

    def is_constant(self, name: str) -> bool:
        return name in self._constants

    @property
    def constants(self) -> Mapping[str, float]:
        return dict(self._constants)

    def copy(self) -> "SymbolTable":
        """Returns an independent table with the same variables and constants."""
        return SymbolTable(self._symbols, self._constants)
