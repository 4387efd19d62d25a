"""
Sparse coordinate-list assembly of the constraint matrix.

Entries are accumulated in three parallel lists (row, column, value) whose
slot 0 is an unused sentinel, matching the 1-based arrays a GLPK-style
`load_matrix` expects. Exact zeros are never stored.

`load()` always transmits the complete current list, so calling it again
after more rows were derived replaces the matrix held by the problem
rather than appending to it.
"""

from typing import Dict, Iterator, List, Tuple

import numpy as np
from scipy import sparse


class MatrixBuilder:
    """
    Append-only (row, column, value) accumulator.

    Examples
    --------
    >>> builder = MatrixBuilder()
    >>> builder.add(1, 1, 2.0)
    True
    >>> builder.add(1, 2, 0.0)
    False
    >>> builder.n_entries
    1
    """

    def __init__(self):
        self.ia: List[int] = [0]
        self.ja: List[int] = [0]
        self.ar: List[float] = [0.0]
        self._by_row: Dict[int, Dict[int, float]] = {}

    @classmethod
    def from_problem(cls, problem) -> "MatrixBuilder":
        """Seed a builder with the matrix currently loaded in `problem`."""
        builder = cls()
        for i, j, value in problem.matrix_entries():
            builder.add(i, j, value)
        return builder

    def add(self, row: int, col: int, value: float) -> bool:
        """
        Record a matrix element.

        Returns
        -------
        bool
            False if the value was exactly zero and therefore dropped.

        Raises
        ------
        ValueError
            If (row, col) was already recorded.
        """
        if value == 0.0:
            return False
        row_entries = self._by_row.setdefault(row, {})
        if col in row_entries:
            raise ValueError(f"Matrix element ({row}, {col}) recorded twice")
        row_entries[col] = float(value)
        self.ia.append(row)
        self.ja.append(col)
        self.ar.append(float(value))
        return True

    @property
    def n_entries(self) -> int:
        return len(self.ar) - 1

    def entries(self) -> Iterator[Tuple[int, int, float]]:
        """Iterate over recorded (row, column, value) in insertion order."""
        for k in range(1, len(self.ar)):
            yield self.ia[k], self.ja[k], self.ar[k]

    def row_entries(self, row: int) -> Dict[int, float]:
        """Recorded elements of `row` as {column: value}, ascending columns."""
        return dict(sorted(self._by_row.get(row, {}).items()))

    def load(self, problem) -> None:
        """Replace the problem's constraint matrix with every recorded entry."""
        problem.load_matrix(self.n_entries, self.ia, self.ja, self.ar)

    def to_csr(self, n_rows: int, n_cols: int) -> sparse.csr_matrix:
        """
        Row-major view of the recorded entries.

        Parameters
        ----------
        n_rows, n_cols : int
            Matrix shape; indices are converted from 1-based to 0-based.
        """
        rows = np.asarray(self.ia[1:], dtype=np.int64) - 1
        cols = np.asarray(self.ja[1:], dtype=np.int64) - 1
        data = np.asarray(self.ar[1:], dtype=np.float64)
        return sparse.coo_matrix((data, (rows, cols)), shape=(n_rows, n_cols)).tocsr()

    def __len__(self) -> int:
        return self.n_entries
