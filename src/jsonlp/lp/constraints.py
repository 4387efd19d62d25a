"""
Constraint compilation: bound operations to (type, lower, upper) rows.

Each constraint carries exactly one bound operation:

    operation         type     lower         upper
    ---------------   ------   -----------   -----------
    max               DOUBLE   0.0           operand
    range             DOUBLE   operand[0]    operand[1]    (operand[0] < operand[1])
    lower             LOWER    operand       0.0
    upper             UPPER    0.0           operand
    equal             FIXED    operand       operand
    unbounded, free   FREE     0.0           0.0

The compiler assigns row indices and bounds only; coefficients are filled
in later by the variable compiler.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Tuple

from ..config import FREE, LOWER, UPPER, DOUBLE, FIXED
from ..errors import SchemaError, InvalidRange, UnrecognizedOperation
from ..model.document import expect_object, expect_number, expect_pair
from ..model.symbols import SymbolTable
from .problem import Bound, Problem


def parse_bound_operation(spec: Mapping, name: str,
                          ignore: Iterable[str] = ()) -> Tuple[str, Any]:
    """
    Extract the single bound operation of a constraint.

    Parameters
    ----------
    spec : Mapping
        The constraint object.
    name : str
        Constraint name, for error messages.
    ignore : iterable of str
        Keys that are not operations (e.g. "terms" on dependent constraints).

    Returns
    -------
    operation : str
    operand : any

    Raises
    ------
    SchemaError
        If zero or several operation keys are present.
    """
    ignored = set(ignore)
    keys = [key for key in spec if key not in ignored]
    if len(keys) != 1:
        raise SchemaError(
            f"Constraints may contain only a single operation: '{name}' has "
            f"{len(keys)} ({', '.join(map(str, keys)) or 'none'})",
            name,
        )
    operation = keys[0]
    return operation, spec[operation]


def constraint_bound(operation: str, operand: Any, name: str) -> Bound:
    """
    Translate a bound operation into its canonical Bound.

    Raises
    ------
    SchemaError
        If the operand has the wrong type.
    InvalidRange
        If a range operand is not strictly increasing.
    UnrecognizedOperation
        If `operation` is not a known keyword.

    Examples
    --------
    >>> constraint_bound("max", 4, "c")
    Bound(type=4, lower=0.0, upper=4.0)
    >>> constraint_bound("equal", 2, "c")
    Bound(type=5, lower=2.0, upper=2.0)
    """
    what = f"Operand of '{operation}' in constraint '{name}'"

    if operation == "max":
        return Bound(DOUBLE, 0.0, expect_number(operand, what, name))

    if operation == "range":
        lower, upper = expect_pair(operand, what, name)
        if not lower < upper:
            raise InvalidRange(
                f"Range of constraint '{name}' must satisfy lower < upper, "
                f"got [{lower}, {upper}]",
                name,
            )
        return Bound(DOUBLE, lower, upper)

    if operation == "lower":
        return Bound(LOWER, expect_number(operand, what, name), 0.0)

    if operation == "upper":
        return Bound(UPPER, 0.0, expect_number(operand, what, name))

    if operation == "equal":
        value = expect_number(operand, what, name)
        return Bound(FIXED, value, value)

    if operation in ("unbounded", "free"):
        return Bound(FREE, 0.0, 0.0)

    raise UnrecognizedOperation(
        f"Unrecognized constraint type '{operation}' in constraint '{name}'",
        name,
    )


def compile_constraints(problem: Problem, constraints: Mapping,
                        symbols: SymbolTable, verbose: bool = False) -> int:
    """
    Add one row per declared constraint, in document order.

    Parameters
    ----------
    problem : Problem
        Handle receiving the rows.
    constraints : Mapping
        Constraint name -> constraint object.
    symbols : SymbolTable
        Receives the row indices.
    verbose : bool
        If True, print each compiled row.

    Returns
    -------
    int
        Number of rows added.
    """
    constraints = expect_object(constraints, "'constraints'")
    if len(constraints) == 0:
        return 0

    first = problem.add_rows(len(constraints))
    for offset, (name, spec) in enumerate(constraints.items()):
        index = symbols.declare_constraint(name)
        if index != first + offset:
            raise RuntimeError(
                f"Row index mismatch for '{name}': symbol {index}, problem {first + offset}"
            )
        problem.set_row_name(index, name)

        spec = expect_object(spec, f"Constraint '{name}'", name)
        operation, operand = parse_bound_operation(spec, name)
        bound = constraint_bound(operation, operand, name)
        problem.set_row_bnds(index, bound.type, bound.lower, bound.upper)

        if verbose:
            print(f"  row {index}: {name} {operation} -> "
                  f"type={bound.type} [{bound.lower}, {bound.upper}]")

    return len(constraints)
