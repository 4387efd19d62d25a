"""
Dependent constraints: rows derived from previously compiled rows.

A dependent constraint lists `terms`, each naming an existing constraint
with a coefficient and a constant, plus one bound operation. Its row is

    acc[j] = Σ_terms  Σ_{j : a[ref, j] != 0}  (coefficient * a[ref, j] + constant)

i.e. the constant is added once per nonzero column of the referenced row,
so a referenced row with k nonzeros contributes k * constant in total.

Derived rows are appended after all base rows, in document order. A later
dependent constraint may refer to an earlier one.
"""

import warnings
from collections.abc import Mapping
from typing import List, Sequence, Tuple

import numpy as np

from ..config import TERMS_KEY, COEFFICIENT_KEY, CONSTANT_KEY
from ..errors import SchemaError, UnknownReference
from ..model.document import expect_object, expect_number, get_field
from ..model.symbols import SymbolTable
from .constraints import parse_bound_operation, constraint_bound
from .matrix_builder import MatrixBuilder
from .problem import Problem


Term = Tuple[int, float, float]
"""(referenced row, coefficient, constant)."""


def derive_row(builder: MatrixBuilder, terms: Sequence[Term],
               n_cols: int) -> List[Tuple[int, float]]:
    """
    Fold the terms of a dependent constraint into one row.

    Parameters
    ----------
    builder : MatrixBuilder
        Holds the already compiled rows.
    terms : sequence of (row, coefficient, constant)
        Resolved terms.
    n_cols : int
        Number of columns of the problem.

    Returns
    -------
    list of (int, float)
        Nonzero (column, value) pairs in ascending column order.

    Examples
    --------
    >>> b = MatrixBuilder()
    >>> _ = b.add(1, 1, 2.0); _ = b.add(1, 3, 4.0)
    >>> derive_row(b, [(1, 0.5, 1.0)], n_cols=3)
    [(1, 2.0), (3, 3.0)]
    """
    acc = np.zeros(n_cols + 1, dtype=np.float64)
    for row, coefficient, constant in terms:
        for col, value in builder.row_entries(row).items():
            if value != 0.0:
                acc[col] += coefficient * value + constant

    # slot 0 mirrors the unused sentinel of the builder
    return [(int(col), float(acc[col])) for col in np.flatnonzero(acc) if col > 0]


def _resolve_terms(terms: Mapping, name: str, row: int,
                   symbols: SymbolTable) -> List[Term]:
    resolved = []
    for referenced, term in terms.items():
        ref_row = symbols.resolve_constraint(referenced)
        if ref_row is None:
            raise UnknownReference(
                f"Dependent constraint '{name}' references unknown constraint "
                f"'{referenced}'",
                name,
            )
        if ref_row == row:
            raise UnknownReference(
                f"Dependent constraint '{name}' cannot reference itself", name
            )

        term = expect_object(term, f"Term '{referenced}' of '{name}'", name)
        if COEFFICIENT_KEY not in term or CONSTANT_KEY not in term:
            raise SchemaError(
                f"Term '{referenced}' of '{name}' needs both "
                f"'{COEFFICIENT_KEY}' and '{CONSTANT_KEY}'",
                name,
            )
        coefficient = expect_number(
            term[COEFFICIENT_KEY], f"'{COEFFICIENT_KEY}' of term '{referenced}' in '{name}'", name
        )
        constant = expect_number(
            term[CONSTANT_KEY], f"'{CONSTANT_KEY}' of term '{referenced}' in '{name}'", name
        )
        resolved.append((ref_row, coefficient, constant))
    return resolved


def compile_dependent_constraints(problem: Problem, dependent_constraints: Mapping,
                                  symbols: SymbolTable, builder: MatrixBuilder,
                                  verbose: bool = False) -> int:
    """
    Append one derived row per dependent constraint.

    The caller is responsible for reloading the matrix afterwards.

    Parameters
    ----------
    problem : Problem
        Handle receiving the rows.
    dependent_constraints : Mapping
        Name -> {"terms": {...}, <operation>: <operand>}.
    symbols : SymbolTable
        Resolves referenced constraint names; receives the new rows.
    builder : MatrixBuilder
        Source of referenced rows and sink of derived elements.
    verbose : bool
        If True, print each derived row.

    Returns
    -------
    int
        Number of rows added.

    Raises
    ------
    SchemaError
        Malformed dependent constraint or term.
    UnknownReference
        A term names a constraint that is not declared.
    """
    dependent_constraints = expect_object(dependent_constraints, "'dependentConstraints'")

    n_empty = 0
    for name, spec in dependent_constraints.items():
        row = problem.add_rows(1)
        index = symbols.declare_constraint(name)
        if index != row:
            raise RuntimeError(
                f"Row index mismatch for '{name}': symbol {index}, problem {row}"
            )
        problem.set_row_name(row, name)

        spec = expect_object(spec, f"Dependent constraint '{name}'", name)
        operation, operand = parse_bound_operation(spec, name, ignore=(TERMS_KEY,))
        bound = constraint_bound(operation, operand, name)
        problem.set_row_bnds(row, bound.type, bound.lower, bound.upper)

        terms = get_field(spec, TERMS_KEY)
        if terms is None:
            raise SchemaError(f"Dependent constraint '{name}' is missing '{TERMS_KEY}'", name)
        terms = expect_object(terms, f"'{TERMS_KEY}' of '{name}'", name)

        derived = derive_row(builder, _resolve_terms(terms, name, row, symbols),
                             problem.n_cols)
        overflowed = [col for col, value in derived if not np.isfinite(value)]
        if overflowed:
            raise SchemaError(
                f"Dependent constraint '{name}' derives non-finite coefficients "
                f"in column(s) {overflowed}",
                name,
            )
        for col, value in derived:
            builder.add(row, col, value)

        if not derived:
            n_empty += 1
        if verbose:
            print(f"  row {row}: {name} derived from {len(terms)} term(s), "
                  f"{len(derived)} nonzeros")

    if n_empty > 0:
        warnings.warn(
            f"{n_empty}/{len(dependent_constraints)} dependent constraint(s) "
            f"derived an empty row."
        )

    return len(dependent_constraints)
