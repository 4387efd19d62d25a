"""
Plotting module.

Implements:
- Sparsity pattern of a compiled constraint matrix with matplotlib
"""

from .sparsity import plot_sparsity

__all__ = ["plot_sparsity"]
