"""
Tests for the in-memory problem handle and its array export.
"""

import numpy as np
import pytest

from jsonlp.config import (
    FREE, LOWER, UPPER, DOUBLE, FIXED,
    MINIMIZE, MAXIMIZE, CONTINUOUS, INTEGER, BINARY,
)
from jsonlp.lp.problem import Bound, Problem


def make_problem():
    """2x3 problem with a few nonzeros."""
    p = Problem("demo")
    p.add_rows(2)
    p.add_cols(3)
    p.load_matrix(3, [0, 1, 1, 2], [0, 1, 3, 2], [0.0, 1.0, -2.0, 4.0])
    return p


class TestStructure:
    """Rows, columns and their attributes."""

    def test_add_returns_first_index(self):
        p = Problem()
        assert p.add_rows(2) == 1
        assert p.add_rows(1) == 3
        assert p.add_cols(4) == 1
        assert (p.n_rows, p.n_cols) == (3, 4)

    def test_add_zero_raises(self):
        with pytest.raises(ValueError):
            Problem().add_rows(0)

    def test_new_rows_are_free(self):
        p = Problem()
        p.add_rows(1)
        assert p.get_row_bound(1) == Bound(FREE, 0.0, 0.0)

    def test_new_columns_nonnegative_continuous(self):
        p = Problem()
        p.add_cols(1)
        assert p.get_col_kind(1) == CONTINUOUS
        assert p.get_col_bound(1) == Bound(LOWER, 0.0, 0.0)

    def test_binary_sets_unit_bounds(self):
        p = Problem()
        p.add_cols(1)
        p.set_col_kind(1, BINARY)
        assert p.get_col_kind(1) == BINARY
        assert p.get_col_bound(1) == Bound(DOUBLE, 0.0, 1.0)
        assert p.n_integer == 1

    def test_fixed_bound_ignores_upper(self):
        p = Problem()
        p.add_rows(1)
        p.set_row_bnds(1, FIXED, 3.0, 99.0)
        assert p.get_row_bound(1) == Bound(FIXED, 3.0, 3.0)

    def test_index_out_of_range(self):
        p = Problem()
        p.add_rows(1)
        with pytest.raises(IndexError):
            p.set_row_name(2, "r")
        with pytest.raises(IndexError):
            p.get_row_name(0)

    def test_find_row(self):
        p = Problem()
        p.add_rows(2)
        p.set_row_name(2, "cap")
        assert p.find_row("cap") == 2
        assert p.find_row("nope") is None

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            Problem().set_obj_dir(7)


class TestLoadMatrix:
    """Bulk matrix loading."""

    def test_rows_and_columns(self):
        p = make_problem()
        assert p.get_mat_row(1) == {1: 1.0, 3: -2.0}
        assert p.get_mat_col(2) == {2: 4.0}
        assert p.n_nonzeros == 3

    def test_reload_replaces(self):
        p = make_problem()
        p.load_matrix(1, [0, 2], [0, 3], [0.0, 5.0])
        assert p.get_mat_row(1) == {}
        assert list(p.matrix_entries()) == [(2, 3, 5.0)]
        assert p.n_matrix_loads == 2

    def test_duplicate_element(self):
        p = Problem()
        p.add_rows(1)
        p.add_cols(1)
        with pytest.raises(ValueError, match="Duplicate"):
            p.load_matrix(2, [0, 1, 1], [0, 1, 1], [0.0, 1.0, 2.0])

    def test_out_of_range_element(self):
        p = Problem()
        p.add_rows(1)
        p.add_cols(1)
        with pytest.raises(IndexError):
            p.load_matrix(1, [0, 2], [0, 1], [0.0, 1.0])

    def test_count_exceeds_arrays(self):
        p = Problem()
        p.add_rows(1)
        p.add_cols(1)
        with pytest.raises(ValueError):
            p.load_matrix(2, [0, 1], [0, 1], [0.0, 1.0])

    def test_zero_not_stored(self):
        p = Problem()
        p.add_rows(1)
        p.add_cols(1)
        p.load_matrix(1, [0, 1], [0, 1], [0.0, 0.0])
        assert p.n_nonzeros == 0


class TestExport:
    """scipy/numpy export."""

    def test_csr(self):
        A = make_problem().to_csr()
        assert A.shape == (2, 3)
        np.testing.assert_array_equal(
            A.toarray(), [[1.0, 0.0, -2.0], [0.0, 4.0, 0.0]]
        )

    def test_empty_csr(self):
        p = Problem()
        p.add_rows(2)
        p.add_cols(2)
        assert p.to_csr().nnz == 0

    def test_arrays(self):
        p = make_problem()
        p.set_obj_dir(MAXIMIZE)
        p.set_row_bnds(1, UPPER, 0.0, 10.0)
        p.set_row_bnds(2, DOUBLE, 1.0, 2.0)
        p.set_col_kind(2, INTEGER)
        p.set_col_kind(3, BINARY)
        for j, coef in enumerate([1.0, 2.0, 3.0], start=1):
            p.set_obj_coef(j, coef)

        arrays = p.to_arrays()
        np.testing.assert_array_equal(arrays.row_lower, [-np.inf, 1.0])
        np.testing.assert_array_equal(arrays.row_upper, [10.0, 2.0])
        np.testing.assert_array_equal(arrays.col_lower, [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(arrays.col_upper, [np.inf, np.inf, 1.0])
        np.testing.assert_array_equal(arrays.integrality, [0, 1, 1])
        np.testing.assert_array_equal(arrays.minimization_objective(), [-1.0, -2.0, -3.0])
        assert arrays.direction == MAXIMIZE

    def test_bound_intervals(self):
        assert Bound(FREE).interval() == (-np.inf, np.inf)
        assert Bound(LOWER, 2.0).interval() == (2.0, np.inf)
        assert Bound(FIXED, 4.0, 4.0).interval() == (4.0, 4.0)

    def test_default_direction(self):
        assert Problem().direction == MINIMIZE
