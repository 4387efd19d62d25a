"""
Sparsity pattern plot of a compiled constraint matrix.

Rows derived from dependent constraints are usually appended at the
bottom, so the plot makes it easy to see which columns they pick up.

Usage:
    python -m jsonlp.plot.sparsity model.npz --output sparsity.png
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..config import DEFAULT_PLOT_DPI
from ..lp.archive import load_problem
from ..lp.problem import Problem


def plot_sparsity(
    problem: Problem,
    output: Optional[Path] = None,
    dpi: int = DEFAULT_PLOT_DPI,
    label_limit: int = 40,
    show: bool = False,
) -> plt.Figure:
    """
    Draw the nonzero pattern of the constraint matrix.

    Parameters
    ----------
    problem : Problem
        Compiled handle.
    output : Path, optional
        Save figure to this path. Supports .png and .pdf.
    dpi : int
        Resolution for PNG output.
    label_limit : int
        Row/column names are used as tick labels only when the matrix has
        at most this many rows and columns.
    show : bool
        Display plot interactively.

    Returns
    -------
    matplotlib.figure.Figure
    """
    A = problem.to_csr()
    n_rows, n_cols = A.shape

    fig, ax = plt.subplots(figsize=(max(4, min(12, n_cols * 0.4 + 2)),
                                    max(3, min(10, n_rows * 0.4 + 2))))

    if A.nnz > 0:
        markersize = max(2, min(12, 200 // max(n_rows, n_cols)))
        ax.spy(A, markersize=markersize, color="black")
    else:
        ax.set_xlim(-0.5, max(n_cols, 1) - 0.5)
        ax.set_ylim(max(n_rows, 1) - 0.5, -0.5)

    if 0 < n_rows <= label_limit and 0 < n_cols <= label_limit:
        ax.set_yticks(range(n_rows))
        ax.set_yticklabels([problem.get_row_name(i) or str(i) for i in range(1, n_rows + 1)])
        ax.set_xticks(range(n_cols))
        ax.set_xticklabels([problem.get_col_name(j) or str(j) for j in range(1, n_cols + 1)],
                           rotation=90)

    title = problem.name or "constraint matrix"
    ax.set_title(f"{title}: {n_rows}x{n_cols}, {A.nnz} nonzeros", fontsize=11)
    fig.tight_layout()

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=dpi, bbox_inches="tight")
        print(f"Saved figure to {output}")

    if show:
        plt.show()

    return fig


def main():
    """Command-line entry point for sparsity plots of archived problems."""
    parser = argparse.ArgumentParser(
        description="Plot the sparsity pattern of a compiled problem archive"
    )
    parser.add_argument("archive", type=str, help="Path to a .npz problem archive")
    parser.add_argument(
        "--output", type=str, default="sparsity.png",
        help="Output file path (.png or .pdf)",
    )
    parser.add_argument(
        "--dpi", type=int, default=DEFAULT_PLOT_DPI,
        help=f"Resolution for PNG output (default: {DEFAULT_PLOT_DPI})",
    )
    parser.add_argument(
        "--show", action="store_true",
        help="Display plot interactively",
    )

    args = parser.parse_args()

    archive = Path(args.archive)
    if not archive.exists():
        print(f"ERROR: Archive not found: {archive}", file=sys.stderr)
        sys.exit(1)

    plot_sparsity(load_problem(archive), output=Path(args.output),
                  dpi=args.dpi, show=args.show)


if __name__ == "__main__":
    main()
