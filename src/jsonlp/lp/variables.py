"""
Variable compilation: columns, kinds, objective and matrix coefficients.

For each variable, `values[objective]` is its objective coefficient and
every other key naming a declared constraint contributes the matrix
element (constraint row, variable column). Keys naming no constraint are
ignored, so `values` may carry unrelated bookkeeping fields.
"""

from collections.abc import Mapping

from ..config import VARIABLE_KINDS
from ..errors import SchemaError
from ..model.document import expect_object, expect_number, expect_string, get_field
from ..model.symbols import SymbolTable
from .matrix_builder import MatrixBuilder
from .problem import Problem


def variable_kind(variable: Mapping, name: str) -> int:
    """
    Column kind code of a variable.

    Raises
    ------
    SchemaError
        If `kind` is missing, not a string, or not continuous/integer/binary.
    """
    kind = get_field(variable, "kind")
    if kind is None:
        raise SchemaError(f"Variable '{name}' is missing 'kind'", name)
    kind = expect_string(kind, f"'kind' of variable '{name}'", name)
    if kind not in VARIABLE_KINDS:
        raise SchemaError(
            f"Unknown kind '{kind}' for variable '{name}'; expected one of "
            f"{', '.join(VARIABLE_KINDS)}",
            name,
        )
    return VARIABLE_KINDS[kind]


def compile_variables(problem: Problem, variables: Mapping, objective: str,
                      symbols: SymbolTable, builder: MatrixBuilder,
                      verbose: bool = False) -> int:
    """
    Add one column per declared variable and record its coefficients.

    Must run after `compile_constraints`, so every constraint name a
    variable refers to is already declared.

    Parameters
    ----------
    problem : Problem
        Handle receiving the columns.
    variables : Mapping
        Variable name -> {"kind": ..., "values": {...}}.
    objective : str
        Key of `values` holding the objective coefficient.
    symbols : SymbolTable
        Resolves constraint names; receives the column indices.
    builder : MatrixBuilder
        Receives (row, column, value) elements.
    verbose : bool
        If True, print each compiled column.

    Returns
    -------
    int
        Number of columns added.
    """
    variables = expect_object(variables, "'variables'")
    if len(variables) == 0:
        return 0

    first = problem.add_cols(len(variables))
    for offset, (name, variable) in enumerate(variables.items()):
        index = symbols.declare_variable(name)
        if index != first + offset:
            raise RuntimeError(
                f"Column index mismatch for '{name}': symbol {index}, problem {first + offset}"
            )
        problem.set_col_name(index, name)

        variable = expect_object(variable, f"Variable '{name}'", name)
        problem.set_col_kind(index, variable_kind(variable, name))

        values = get_field(variable, "values")
        if values is None:
            raise SchemaError(f"Variable '{name}' is missing 'values'", name)
        values = expect_object(values, f"'values' of variable '{name}'", name)

        if objective not in values:
            raise SchemaError(
                f"Variable '{name}' has no objective coefficient '{objective}'", name
            )
        problem.set_obj_coef(index, expect_number(
            values[objective], f"Objective coefficient of variable '{name}'", name
        ))

        n_stored = 0
        for key, value in values.items():
            if key == objective:
                continue
            row = symbols.resolve_constraint(key)
            if row is None:
                continue
            coef = expect_number(
                value, f"Coefficient of '{key}' in variable '{name}'", name
            )
            if builder.add(row, index, coef):
                n_stored += 1

        if verbose:
            print(f"  col {index}: {name} obj={problem.get_obj_coef(index)} "
                  f"nonzeros={n_stored}")

    return len(variables)
