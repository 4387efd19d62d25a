"""
jsonlp: compile JSON descriptions of LP/MIP models into solver structures.

A model document (variables, constraints, objective, and constraints derived
from other constraints) is validated, its names are resolved to 1-based
row/column indices, and the result is loaded into a problem handle as row
bounds, column kinds, objective coefficients and a sparse matrix.
"""

from . import config
from .errors import (
    CompileError,
    SchemaError,
    InvalidRange,
    UnknownReference,
    UnrecognizedOperation,
)
from .lp.problem import Problem
from .lp.loader import CompileResult, compile_model, add_dependent_constraints

__version__ = "0.1.0"
__all__ = [
    "config",
    "CompileError",
    "SchemaError",
    "InvalidRange",
    "UnknownReference",
    "UnrecognizedOperation",
    "Problem",
    "CompileResult",
    "compile_model",
    "add_dependent_constraints",
]
