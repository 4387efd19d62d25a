"""
LP compilation module.

Implements:
- In-memory problem handle with scipy/numpy export
- Constraint compiler (bound operations -> row bounds)
- Variable compiler (kinds, objective, matrix coefficients)
- Sparse matrix builder with bulk load
- Dependent constraint derivation
- Model loader orchestrating the pass
- NPZ archives of compiled problems

Main entry points:
- `compile_model(problem, model)`: compile a model document
- `add_dependent_constraints(problem, dependent)`: extend a compiled problem
"""

from .problem import (
    Bound,
    RowInfo,
    ColumnInfo,
    LinearProgramArrays,
    Problem,
)

from .matrix_builder import MatrixBuilder

from .constraints import (
    parse_bound_operation,
    constraint_bound,
    compile_constraints,
)

from .variables import (
    variable_kind,
    compile_variables,
)

from .dependent import (
    derive_row,
    compile_dependent_constraints,
)

from .loader import (
    CompileResult,
    objective_direction,
    compile_model,
    add_dependent_constraints,
)

from .archive import (
    save_problem,
    load_problem,
)

__all__ = [
    # Problem handle
    "Bound",
    "RowInfo",
    "ColumnInfo",
    "LinearProgramArrays",
    "Problem",
    # Matrix
    "MatrixBuilder",
    # Constraints
    "parse_bound_operation",
    "constraint_bound",
    "compile_constraints",
    # Variables
    "variable_kind",
    "compile_variables",
    # Dependent constraints
    "derive_row",
    "compile_dependent_constraints",
    # Loader
    "CompileResult",
    "objective_direction",
    "compile_model",
    "add_dependent_constraints",
    # Archives
    "save_problem",
    "load_problem",
]
