"""
Name <-> index symbol table for constraints (rows) and variables (columns).

Indices are 1-based and assigned in declaration order. Constraints are
always declared before variables, and both before dependent constraints,
so a name is only ever resolved after its section is fully declared.
"""

from typing import Dict, List, Optional

from ..errors import SchemaError


class SymbolTable:
    """
    Bidirectional mapping between names and matrix indices.

    Examples
    --------
    >>> symbols = SymbolTable()
    >>> symbols.declare_constraint("c1")
    1
    >>> symbols.declare_variable("x")
    1
    >>> symbols.resolve_constraint("c1")
    1
    >>> symbols.resolve_constraint("missing") is None
    True
    """

    def __init__(self):
        self._rows: Dict[str, int] = {}
        self._row_names: List[str] = []
        self._cols: Dict[str, int] = {}
        self._col_names: List[str] = []

    @classmethod
    def from_problem(cls, problem) -> "SymbolTable":
        """
        Rebuild the table from the row and column names of a populated handle.

        Rows or columns without a name occupy their index but cannot be
        resolved by name.
        """
        symbols = cls()
        for i in range(1, problem.n_rows + 1):
            symbols._declare(symbols._rows, symbols._row_names,
                             problem.get_row_name(i), "constraint")
        for j in range(1, problem.n_cols + 1):
            symbols._declare(symbols._cols, symbols._col_names,
                             problem.get_col_name(j), "variable")
        return symbols

    # -- declaration -------------------------------------------------------

    def declare_constraint(self, name: str) -> int:
        """Assign the next row index to `name`."""
        return self._declare(self._rows, self._row_names, name, "constraint")

    def declare_variable(self, name: str) -> int:
        """Assign the next column index to `name`."""
        return self._declare(self._cols, self._col_names, name, "variable")

    @staticmethod
    def _declare(table: Dict[str, int], names: List[str],
                 name: Optional[str], kind: str) -> int:
        if name is not None and name in table:
            raise SchemaError(f"Duplicate {kind} name '{name}'", name)
        names.append(name)
        index = len(names)
        if name is not None:
            table[name] = index
        return index

    # -- resolution --------------------------------------------------------

    def resolve_constraint(self, name: str) -> Optional[int]:
        """Row index of `name`, or None if no such constraint is declared."""
        return self._rows.get(name)

    def resolve_variable(self, name: str) -> Optional[int]:
        """Column index of `name`, or None if no such variable is declared."""
        return self._cols.get(name)

    def constraint_name(self, index: int) -> Optional[str]:
        return self._row_names[index - 1]

    def variable_name(self, index: int) -> Optional[str]:
        return self._col_names[index - 1]

    def constraint_names(self) -> List[Optional[str]]:
        return list(self._row_names)

    def variable_names(self) -> List[Optional[str]]:
        return list(self._col_names)

    @property
    def n_constraints(self) -> int:
        return len(self._row_names)

    @property
    def n_variables(self) -> int:
        return len(self._col_names)

    def __repr__(self) -> str:
        return (f"SymbolTable(n_constraints={self.n_constraints}, "
                f"n_variables={self.n_variables})")
