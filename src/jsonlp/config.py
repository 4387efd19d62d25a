"""
Global configuration and solver constants for the JSON model compiler.

Codes follow the GLPK problem object conventions (rows and columns are
1-based, bound types GLP_FR..GLP_FX, kinds GLP_CV/GLP_IV/GLP_BV).
"""

from typing import Dict, Tuple


# =============================================================================
# Bound Types
# =============================================================================

FREE = 1
"""Free row/column: -inf < x < +inf."""

LOWER = 2
"""Lower-only bound: lb <= x < +inf."""

UPPER = 3
"""Upper-only bound: -inf < x <= ub."""

DOUBLE = 4
"""Double-bounded: lb <= x <= ub."""

FIXED = 5
"""Fixed: x = lb = ub."""

BOUND_TYPE_NAMES: Dict[int, str] = {
    FREE: "free",
    LOWER: "lower",
    UPPER: "upper",
    DOUBLE: "double",
    FIXED: "fixed",
}


# =============================================================================
# Objective Direction
# =============================================================================

MINIMIZE = 1
"""Minimization (GLP_MIN)."""

MAXIMIZE = 2
"""Maximization (GLP_MAX)."""

DIRECTIONS: Dict[str, int] = {
    "minimize": MINIMIZE,
    "maximize": MAXIMIZE,
}


# =============================================================================
# Column Kinds
# =============================================================================

CONTINUOUS = 1
"""Continuous variable (GLP_CV)."""

INTEGER = 2
"""Integer variable (GLP_IV)."""

BINARY = 3
"""Binary variable (GLP_BV)."""

VARIABLE_KINDS: Dict[str, int] = {
    "continuous": CONTINUOUS,
    "integer": INTEGER,
    "binary": BINARY,
}

KIND_NAMES: Dict[int, str] = {code: name for name, code in VARIABLE_KINDS.items()}


# =============================================================================
# Document Vocabulary
# =============================================================================

CONSTRAINT_OPERATIONS: Tuple[str, ...] = (
    "max", "range", "lower", "upper", "equal", "unbounded", "free",
)
"""Bound operation keywords accepted by constraints and dependent constraints."""

TERMS_KEY = "terms"
"""Key holding the referenced rows of a dependent constraint."""

COEFFICIENT_KEY = "coefficient"
CONSTANT_KEY = "constant"


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_COLUMN_BOUND = (LOWER, 0.0, 0.0)
"""Bounds given to a new column: x >= 0."""

BINARY_COLUMN_BOUND = (DOUBLE, 0.0, 1.0)
"""Bounds implied by the binary kind."""

DEFAULT_PLOT_DPI = 150
"""Resolution for sparsity plots written as PNG."""

ARCHIVE_SUFFIX = ".npz"
"""File suffix of compiled problem archives."""


def bound_type_name(bound_type: int) -> str:
    """
    Return the readable name of a bound type code.

    Parameters
    ----------
    bound_type : int
        One of FREE, LOWER, UPPER, DOUBLE, FIXED.

    Returns
    -------
    str
        The name, e.g. "double".
    """
    if bound_type not in BOUND_TYPE_NAMES:
        raise ValueError(f"Unknown bound type code {bound_type}")
    return BOUND_TYPE_NAMES[bound_type]
