"""
In-memory LP/MIP problem handle.

Mirrors the structure of a GLPK problem object: 1-based rows and columns
with names and bounds, column kinds and objective coefficients, an
objective direction, and a sparse constraint matrix replaced as a whole by
`load_matrix`. The handle only stores structure; it never solves.

`to_arrays()` exports the problem in the layout expected by
scipy.optimize.milp / linprog:

    minimize (or maximize)  c^T x
    subject to              row_lower <= A x <= row_upper
                            col_lower <=   x <= col_upper
                            x_j integer where integrality[j] == 1
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from scipy import sparse

from ..config import (
    FREE, LOWER, UPPER, DOUBLE, FIXED,
    MINIMIZE, MAXIMIZE,
    CONTINUOUS, INTEGER, BINARY,
    DEFAULT_COLUMN_BOUND, BINARY_COLUMN_BOUND,
)


@dataclass(frozen=True)
class Bound:
    """
    Canonical bound triple of a row or column.

    Attributes
    ----------
    type : int
        One of FREE, LOWER, UPPER, DOUBLE, FIXED.
    lower : float
        Lower bound (ignored for FREE and UPPER).
    upper : float
        Upper bound (ignored for FREE and LOWER).
    """
    type: int
    lower: float = 0.0
    upper: float = 0.0

    def interval(self) -> Tuple[float, float]:
        """Return the bound as a (lo, hi) pair using +-inf for open ends."""
        if self.type == FREE:
            return -np.inf, np.inf
        if self.type == LOWER:
            return self.lower, np.inf
        if self.type == UPPER:
            return -np.inf, self.upper
        if self.type == DOUBLE:
            return self.lower, self.upper
        if self.type == FIXED:
            return self.lower, self.lower
        raise ValueError(f"Unknown bound type code {self.type}")


@dataclass
class RowInfo:
    """A constraint row of the problem."""
    name: Optional[str] = None
    bound: Bound = field(default_factory=lambda: Bound(FREE))


@dataclass
class ColumnInfo:
    """A structural column (variable) of the problem."""
    name: Optional[str] = None
    kind: int = CONTINUOUS
    bound: Bound = field(default_factory=lambda: Bound(*DEFAULT_COLUMN_BOUND))
    obj_coef: float = 0.0


@dataclass
class LinearProgramArrays:
    """
    Dense/sparse arrays describing a compiled problem.

    Attributes
    ----------
    c : np.ndarray
        Objective coefficients, shape (n_cols,).
    A : scipy.sparse.csr_matrix
        Constraint matrix, shape (n_rows, n_cols).
    row_lower, row_upper : np.ndarray
        Row activity bounds, shape (n_rows,), +-inf for open ends.
    col_lower, col_upper : np.ndarray
        Column bounds, shape (n_cols,).
    integrality : np.ndarray of int
        1 for integer/binary columns, 0 for continuous.
    direction : int
        MINIMIZE or MAXIMIZE.
    """
    c: np.ndarray
    A: sparse.csr_matrix
    row_lower: np.ndarray
    row_upper: np.ndarray
    col_lower: np.ndarray
    col_upper: np.ndarray
    integrality: np.ndarray
    direction: int = MINIMIZE

    def minimization_objective(self) -> np.ndarray:
        """Objective vector for solvers that only minimize."""
        return -self.c if self.direction == MAXIMIZE else self.c.copy()


class Problem:
    """
    Solver-side problem handle.

    Not safe for concurrent mutation; compile into one handle at a time.

    Examples
    --------
    >>> p = Problem()
    >>> p.add_rows(2)
    1
    >>> p.add_cols(1)
    1
    >>> p.load_matrix(1, [0, 2], [0, 1], [0.0, 3.5])
    >>> p.get_mat_row(2)
    {1: 3.5}
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self.direction = MINIMIZE
        self._rows: List[RowInfo] = []
        self._cols: List[ColumnInfo] = []
        self._matrix: Dict[Tuple[int, int], float] = {}
        self.n_matrix_loads = 0

    # -- problem-level -----------------------------------------------------

    def set_prob_name(self, name: Optional[str]) -> None:
        self.name = name

    def set_obj_dir(self, direction: int) -> None:
        if direction not in (MINIMIZE, MAXIMIZE):
            raise ValueError(f"Invalid objective direction code {direction}")
        self.direction = direction

    @property
    def n_rows(self) -> int:
        return len(self._rows)

    @property
    def n_cols(self) -> int:
        return len(self._cols)

    @property
    def n_nonzeros(self) -> int:
        return len(self._matrix)

    @property
    def n_integer(self) -> int:
        """Number of integer and binary columns."""
        return sum(1 for col in self._cols if col.kind in (INTEGER, BINARY))

    # -- rows --------------------------------------------------------------

    def add_rows(self, count: int) -> int:
        """
        Append `count` free, unnamed rows.

        Returns
        -------
        int
            Index of the first new row (1-based).
        """
        if count < 1:
            raise ValueError(f"Number of rows to add must be positive, got {count}")
        first = self.n_rows + 1
        self._rows.extend(RowInfo() for _ in range(count))
        return first

    def set_row_name(self, i: int, name: Optional[str]) -> None:
        self._row(i).name = name

    def get_row_name(self, i: int) -> Optional[str]:
        return self._row(i).name

    def set_row_bnds(self, i: int, bound_type: int, lower: float, upper: float) -> None:
        self._row(i).bound = _make_bound(bound_type, lower, upper)

    def get_row_bound(self, i: int) -> Bound:
        return self._row(i).bound

    def find_row(self, name: str) -> Optional[int]:
        """Index of the row called `name`, or None."""
        for i, row in enumerate(self._rows, start=1):
            if row.name == name:
                return i
        return None

    # -- columns -----------------------------------------------------------

    def add_cols(self, count: int) -> int:
        """Append `count` continuous, unnamed columns with x >= 0."""
        if count < 1:
            raise ValueError(f"Number of columns to add must be positive, got {count}")
        first = self.n_cols + 1
        self._cols.extend(ColumnInfo() for _ in range(count))
        return first

    def set_col_name(self, j: int, name: Optional[str]) -> None:
        self._col(j).name = name

    def get_col_name(self, j: int) -> Optional[str]:
        return self._col(j).name

    def set_col_kind(self, j: int, kind: int) -> None:
        """Set the column kind; BINARY also sets the bounds to [0, 1]."""
        if kind not in (CONTINUOUS, INTEGER, BINARY):
            raise ValueError(f"Invalid column kind code {kind}")
        col = self._col(j)
        if kind == BINARY:
            col.kind = INTEGER
            col.bound = Bound(*BINARY_COLUMN_BOUND)
        else:
            col.kind = kind

    def get_col_kind(self, j: int) -> int:
        """
        Column kind, reporting BINARY for integer columns bounded to [0, 1].
        """
        col = self._col(j)
        if col.kind == INTEGER and col.bound == Bound(*BINARY_COLUMN_BOUND):
            return BINARY
        return col.kind

    def set_col_bnds(self, j: int, bound_type: int, lower: float, upper: float) -> None:
        self._col(j).bound = _make_bound(bound_type, lower, upper)

    def get_col_bound(self, j: int) -> Bound:
        return self._col(j).bound

    def set_obj_coef(self, j: int, coef: float) -> None:
        self._col(j).obj_coef = float(coef)

    def get_obj_coef(self, j: int) -> float:
        return self._col(j).obj_coef

    def find_col(self, name: str) -> Optional[int]:
        """Index of the column called `name`, or None."""
        for j, col in enumerate(self._cols, start=1):
            if col.name == name:
                return j
        return None

    # -- matrix ------------------------------------------------------------

    def load_matrix(self, ne: int, ia: Sequence[int], ja: Sequence[int],
                    ar: Sequence[float]) -> None:
        """
        Replace the whole constraint matrix.

        Elements are read from positions 1..ne of the three arrays; position
        0 is unused. Zero values are accepted but not stored.

        Raises
        ------
        IndexError
            If a row or column index is out of range.
        ValueError
            If the same (row, column) pair appears twice.
        """
        capacity = min(len(ia), len(ja), len(ar)) - 1
        if not 0 <= ne <= capacity:
            raise ValueError(
                f"Entry count {ne} does not fit arrays holding {capacity} entries"
            )
        matrix: Dict[Tuple[int, int], float] = {}
        seen = set()
        for k in range(1, ne + 1):
            i, j, value = int(ia[k]), int(ja[k]), float(ar[k])
            if not 1 <= i <= self.n_rows:
                raise IndexError(f"Row index {i} out of range [1, {self.n_rows}] at position {k}")
            if not 1 <= j <= self.n_cols:
                raise IndexError(f"Column index {j} out of range [1, {self.n_cols}] at position {k}")
            if (i, j) in seen:
                raise ValueError(f"Duplicate matrix element ({i}, {j}) at position {k}")
            seen.add((i, j))
            if value != 0.0:
                matrix[(i, j)] = value
        self._matrix = matrix
        self.n_matrix_loads += 1

    def get_mat_row(self, i: int) -> Dict[int, float]:
        """Nonzero elements of row `i` as {column: value}, ascending columns."""
        self._row(i)
        return {j: v for (r, j), v in sorted(self._matrix.items()) if r == i}

    def get_mat_col(self, j: int) -> Dict[int, float]:
        """Nonzero elements of column `j` as {row: value}, ascending rows."""
        self._col(j)
        return {i: v for (i, c), v in sorted(self._matrix.items()) if c == j}

    def matrix_entries(self) -> Iterator[Tuple[int, int, float]]:
        """Iterate over (row, column, value) in row-major order."""
        for (i, j), v in sorted(self._matrix.items()):
            yield i, j, v

    # -- export ------------------------------------------------------------

    def to_csr(self) -> sparse.csr_matrix:
        """Constraint matrix as a 0-based scipy CSR matrix."""
        entries = list(self.matrix_entries())
        if not entries:
            return sparse.csr_matrix((self.n_rows, self.n_cols), dtype=np.float64)
        rows = np.array([i - 1 for i, _, _ in entries], dtype=np.int64)
        cols = np.array([j - 1 for _, j, _ in entries], dtype=np.int64)
        data = np.array([v for _, _, v in entries], dtype=np.float64)
        return sparse.coo_matrix(
            (data, (rows, cols)), shape=(self.n_rows, self.n_cols)
        ).tocsr()

    def to_arrays(self) -> LinearProgramArrays:
        """Export the problem for array-based solvers."""
        row_bounds = np.array([row.bound.interval() for row in self._rows],
                              dtype=np.float64).reshape(-1, 2)
        col_bounds = np.array([col.bound.interval() for col in self._cols],
                              dtype=np.float64).reshape(-1, 2)
        return LinearProgramArrays(
            c=np.array([col.obj_coef for col in self._cols], dtype=np.float64),
            A=self.to_csr(),
            row_lower=row_bounds[:, 0],
            row_upper=row_bounds[:, 1],
            col_lower=col_bounds[:, 0],
            col_upper=col_bounds[:, 1],
            integrality=np.array(
                [0 if col.kind == CONTINUOUS else 1 for col in self._cols],
                dtype=np.int32,
            ),
            direction=self.direction,
        )

    # -- internals ---------------------------------------------------------

    def _row(self, i: int) -> RowInfo:
        if not 1 <= i <= self.n_rows:
            raise IndexError(f"Row index {i} out of range [1, {self.n_rows}]")
        return self._rows[i - 1]

    def _col(self, j: int) -> ColumnInfo:
        if not 1 <= j <= self.n_cols:
            raise IndexError(f"Column index {j} out of range [1, {self.n_cols}]")
        return self._cols[j - 1]

    def __repr__(self) -> str:
        return (f"Problem(name={self.name!r}, rows={self.n_rows}, "
                f"cols={self.n_cols}, nonzeros={self.n_nonzeros})")


def _make_bound(bound_type: int, lower: float, upper: float) -> Bound:
    if bound_type not in (FREE, LOWER, UPPER, DOUBLE, FIXED):
        raise ValueError(f"Invalid bound type code {bound_type}")
    if bound_type == FIXED:
        upper = lower
    return Bound(bound_type, float(lower), float(upper))
