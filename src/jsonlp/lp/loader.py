"""
Model loader: compile a JSON model document into a problem handle.

Compilation is a single ordered pass:

    name -> direction -> constraints -> variables -> load base matrix
         -> dependent constraints -> load full matrix (only if any)

The first violation aborts the pass. Entry points return a CompileResult
instead of raising; a handle left behind by a failed compilation is
partially populated and must be discarded.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from ..config import DIRECTIONS
from ..errors import CompileError, SchemaError
from ..model.document import expect_object, expect_string, get_field
from ..model.symbols import SymbolTable
from .constraints import compile_constraints
from .dependent import compile_dependent_constraints
from .matrix_builder import MatrixBuilder
from .problem import Problem
from .variables import compile_variables


@dataclass
class CompileResult:
    """
    Outcome of a compilation pass.

    Attributes
    ----------
    success : bool
        True if the handle is fully populated.
    status : str
        Human-readable status message.
    error : CompileError, optional
        The violation that aborted compilation.
    n_rows, n_cols, n_entries : int
        Size of the problem after the pass (partial on failure).
    """
    success: bool
    status: str
    error: Optional[CompileError] = None
    n_rows: int = 0
    n_cols: int = 0
    n_entries: int = 0

    def raise_for_error(self) -> None:
        """Re-raise the compilation error, if any."""
        if self.error is not None:
            raise self.error


def objective_direction(model: Mapping) -> int:
    """
    Direction code of the model.

    Raises
    ------
    SchemaError
        If `direction` is missing or not "minimize"/"maximize".
    """
    direction = get_field(model, "direction")
    if not isinstance(direction, str) or direction not in DIRECTIONS:
        raise SchemaError("'direction' must be either 'minimize' or 'maximize'")
    return DIRECTIONS[direction]


def _compile(problem: Problem, model: Any, verbose: bool) -> MatrixBuilder:
    model = expect_object(model, "Model")

    name = get_field(model, "name")
    if isinstance(name, str):
        problem.set_prob_name(name)

    problem.set_obj_dir(objective_direction(model))

    objective = get_field(model, "objective")
    if objective is None:
        raise SchemaError("Model is missing 'objective'")
    objective = expect_string(objective, "'objective'")

    constraints = get_field(model, "constraints")
    if constraints is None:
        raise SchemaError("Model is missing 'constraints'")
    variables = get_field(model, "variables")
    if variables is None:
        raise SchemaError("Model is missing 'variables'")

    symbols = SymbolTable()
    builder = MatrixBuilder()

    if verbose:
        print(f"Compiling model {problem.name!r}")
    compile_constraints(problem, constraints, symbols, verbose=verbose)
    compile_variables(problem, variables, objective, symbols, builder, verbose=verbose)
    builder.load(problem)

    dependent = get_field(model, "dependentConstraints")
    if dependent is not None:
        n_derived = compile_dependent_constraints(
            problem, dependent, symbols, builder, verbose=verbose
        )
        if n_derived > 0:
            builder.load(problem)

    return builder


def _result(problem: Problem, error: Optional[CompileError] = None) -> CompileResult:
    if error is None:
        status = (f"Compiled {problem.n_rows} rows, {problem.n_cols} columns, "
                  f"{problem.n_nonzeros} nonzeros")
    else:
        status = f"Compilation failed: {error.message}"
    return CompileResult(
        success=error is None,
        status=status,
        error=error,
        n_rows=problem.n_rows,
        n_cols=problem.n_cols,
        n_entries=problem.n_nonzeros,
    )


def compile_model(problem: Problem, model: Any, verbose: bool = False) -> CompileResult:
    """
    Compile a model document into `problem`.

    Parameters
    ----------
    problem : Problem
        Fresh handle; mutated in place.
    model : Mapping
        Parsed model document.
    verbose : bool
        If True, print progress.

    Returns
    -------
    CompileResult

    Raises
    ------
    ValueError
        If `problem` already has rows or columns.

    Examples
    --------
    >>> p = Problem()
    >>> model = {
    ...     "direction": "minimize", "objective": "cost",
    ...     "constraints": {"c1": {"upper": 10}},
    ...     "variables": {"x": {"kind": "continuous", "values": {"cost": 2, "c1": 1}}},
    ... }
    >>> compile_model(p, model).success
    True
    >>> p.get_mat_row(1)
    {1: 1.0}
    """
    if problem.n_rows != 0 or problem.n_cols != 0:
        raise ValueError(
            f"compile_model requires a fresh Problem, got {problem.n_rows} row(s) "
            f"and {problem.n_cols} column(s)"
        )

    try:
        _compile(problem, model, verbose)
    except CompileError as e:
        if verbose:
            print(f"Error: {e.message}")
        return _result(problem, e)

    result = _result(problem)
    if verbose:
        print(result.status)
    return result


def add_dependent_constraints(problem: Problem, dependent_constraints: Any,
                              verbose: bool = False) -> CompileResult:
    """
    Derive extra rows on a problem populated by an earlier `compile_model`.

    Referenced names are resolved against the handle's row names and the
    referenced coefficients are read from its loaded matrix.

    Parameters
    ----------
    problem : Problem
        Previously compiled handle; mutated in place.
    dependent_constraints : Mapping
        Name -> {"terms": {...}, <operation>: <operand>}.
    verbose : bool
        If True, print progress.

    Returns
    -------
    CompileResult
    """
    try:
        symbols = SymbolTable.from_problem(problem)
        builder = MatrixBuilder.from_problem(problem)
        n_derived = compile_dependent_constraints(
            problem, dependent_constraints, symbols, builder, verbose=verbose
        )
        if n_derived > 0:
            builder.load(problem)
    except CompileError as e:
        if verbose:
            print(f"Error: {e.message}")
        return _result(problem, e)

    result = _result(problem)
    if verbose:
        print(result.status)
    return result
