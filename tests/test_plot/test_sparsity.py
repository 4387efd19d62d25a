"""
Tests for sparsity plots.
"""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from jsonlp.lp.loader import compile_model
from jsonlp.lp.problem import Problem
from jsonlp.plot.sparsity import plot_sparsity


def make_compiled():
    p = Problem()
    compile_model(p, {
        "direction": "minimize",
        "objective": "cost",
        "constraints": {"c1": {"max": 3}, "c2": {"max": 4}},
        "variables": {
            "x": {"kind": "continuous", "values": {"cost": 1, "c1": 1}},
            "y": {"kind": "continuous", "values": {"cost": 1, "c2": 2}},
        },
    }).raise_for_error()
    return p


class TestPlotSparsity:

    def test_returns_figure(self):
        fig = plot_sparsity(make_compiled())
        assert isinstance(fig, plt.Figure)
        assert "2x2, 2 nonzeros" in fig.axes[0].get_title()
        plt.close(fig)

    def test_saves_png(self, tmp_path):
        out = tmp_path / "figs" / "sparsity.png"
        fig = plot_sparsity(make_compiled(), output=out, dpi=50)
        assert out.exists()
        plt.close(fig)

    def test_empty_matrix(self):
        p = Problem()
        p.add_rows(1)
        p.add_cols(1)
        fig = plot_sparsity(p)
        assert "0 nonzeros" in fig.axes[0].get_title()
        plt.close(fig)
