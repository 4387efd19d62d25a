"""
Compile a JSON model file and report its matrix structure.

Usage:
    python -m jsonlp.cli model.json \\
        --dependent extra.json --output model.npz --plot model.png --verbose

Exit status is 0 on success and 1 if the model fails to compile.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_PLOT_DPI, KIND_NAMES, bound_type_name
from .errors import CompileError
from .lp.archive import save_problem
from .lp.loader import CompileResult, compile_model, add_dependent_constraints
from .lp.problem import Problem
from .model.document import load_document


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class CompileConfig:
    """Configuration for a command-line compilation run."""
    model: Path
    dependent: Optional[Path] = None
    output: Optional[Path] = None
    plot: Optional[Path] = None
    dpi: int = DEFAULT_PLOT_DPI
    overwrite: bool = False
    verbose: bool = False


# =============================================================================
# Run
# =============================================================================

def print_summary(problem: Problem) -> None:
    """Print rows, columns and nonzeros of a compiled problem."""
    print(f"Problem: {problem.name or '(unnamed)'}")
    print(f"  rows:     {problem.n_rows}")
    print(f"  columns:  {problem.n_cols} ({problem.n_integer} integer)")
    print(f"  nonzeros: {problem.n_nonzeros}")
    for i in range(1, problem.n_rows + 1):
        bound = problem.get_row_bound(i)
        print(f"    row {i:>4} {problem.get_row_name(i)!s:<20} "
              f"{bound_type_name(bound.type):<7} [{bound.lower:g}, {bound.upper:g}]")
    for j in range(1, problem.n_cols + 1):
        print(f"    col {j:>4} {problem.get_col_name(j)!s:<20} "
              f"{KIND_NAMES[problem.get_col_kind(j)]:<11} obj={problem.get_obj_coef(j):g}")


def run_compile(config: CompileConfig) -> CompileResult:
    """
    Compile the model described by `config` and write requested outputs.

    Returns
    -------
    CompileResult
        Result of the last compilation step that ran.
    """
    problem = Problem()
    result = compile_model(problem, load_document(config.model), verbose=config.verbose)

    if result.success and config.dependent is not None:
        result = add_dependent_constraints(
            problem, load_document(config.dependent), verbose=config.verbose
        )

    if not result.success:
        return result

    print_summary(problem)

    if config.output is not None:
        path = save_problem(problem, config.output, overwrite=config.overwrite)
        print(f"Saved archive to {path}")

    if config.plot is not None:
        from .plot.sparsity import plot_sparsity
        plot_sparsity(problem, output=config.plot, dpi=config.dpi)

    return result


# =============================================================================
# CLI
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="Compile a JSON LP/MIP model into its matrix representation"
    )
    parser.add_argument("model", type=str, help="Path to the model JSON file")
    parser.add_argument(
        "--dependent", type=str, default=None,
        help="JSON file of dependent constraints to add after compilation"
    )
    parser.add_argument(
        "--output", type=str, default=None,
        help="Write the compiled problem to this .npz archive"
    )
    parser.add_argument(
        "--plot", type=str, default=None,
        help="Write a sparsity plot to this file (.png or .pdf)"
    )
    parser.add_argument(
        "--dpi", type=int, default=DEFAULT_PLOT_DPI,
        help=f"Resolution for PNG output (default: {DEFAULT_PLOT_DPI})"
    )
    parser.add_argument(
        "--overwrite", action="store_true",
        help="Replace an existing archive"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Print progress"
    )

    args = parser.parse_args(argv)

    config = CompileConfig(
        model=Path(args.model),
        dependent=Path(args.dependent) if args.dependent else None,
        output=Path(args.output) if args.output else None,
        plot=Path(args.plot) if args.plot else None,
        dpi=args.dpi,
        overwrite=args.overwrite,
        verbose=args.verbose,
    )

    try:
        result = run_compile(config)
    except (OSError, CompileError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if not result.success:
        print(f"ERROR: {result.status}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
