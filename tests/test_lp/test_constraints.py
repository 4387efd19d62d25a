"""
Tests for the constraint compiler.

Every bound operation must map to the (type, lower, upper) triple

    max      DOUBLE  0        operand
    range    DOUBLE  lo       hi        (lo < hi)
    lower    LOWER   operand  0
    upper    UPPER   0        operand
    equal    FIXED   operand  operand
    free     FREE    0        0
"""

import pytest

from jsonlp.config import FREE, LOWER, UPPER, DOUBLE, FIXED
from jsonlp.errors import InvalidRange, SchemaError, UnrecognizedOperation
from jsonlp.lp.constraints import (
    compile_constraints,
    constraint_bound,
    parse_bound_operation,
)
from jsonlp.lp.problem import Bound, Problem
from jsonlp.model.symbols import SymbolTable


class TestConstraintBound:
    """Operation-to-bound table."""

    @pytest.mark.parametrize("operation, operand, expected", [
        ("max", 4, Bound(DOUBLE, 0.0, 4.0)),
        ("range", [1, 3], Bound(DOUBLE, 1.0, 3.0)),
        ("lower", 2.5, Bound(LOWER, 2.5, 0.0)),
        ("upper", 10, Bound(UPPER, 0.0, 10.0)),
        ("equal", -1, Bound(FIXED, -1.0, -1.0)),
        ("unbounded", True, Bound(FREE, 0.0, 0.0)),
        ("free", True, Bound(FREE, 0.0, 0.0)),
    ])
    def test_table(self, operation, operand, expected):
        assert constraint_bound(operation, operand, "c") == expected

    def test_range_equal_ends_rejected(self):
        with pytest.raises(InvalidRange, match="lower < upper"):
            constraint_bound("range", [2, 2], "c")

    def test_range_reversed_rejected(self):
        with pytest.raises(InvalidRange) as info:
            constraint_bound("range", [5, 1], "cap")
        assert info.value.entity == "cap"

    def test_range_wrong_shape(self):
        with pytest.raises(SchemaError):
            constraint_bound("range", [1, 2, 3], "c")

    def test_non_numeric_operand(self):
        with pytest.raises(SchemaError, match="Operand of 'max' in constraint 'c'"):
            constraint_bound("max", "ten", "c")

    def test_unrecognized(self):
        with pytest.raises(UnrecognizedOperation, match="Unrecognized constraint type 'atmost'"):
            constraint_bound("atmost", 3, "c")

    def test_unrecognized_is_schema_error(self):
        with pytest.raises(SchemaError):
            constraint_bound("between", [1, 2], "c")


class TestParseBoundOperation:
    """Exactly one operation key."""

    def test_single(self):
        assert parse_bound_operation({"upper": 3}, "c") == ("upper", 3)

    def test_none(self):
        with pytest.raises(SchemaError, match="only a single operation"):
            parse_bound_operation({}, "c")

    def test_multiple(self):
        with pytest.raises(SchemaError, match="only a single operation"):
            parse_bound_operation({"lower": 1, "upper": 3}, "c")

    def test_ignored_keys(self):
        spec = {"terms": {}, "equal": 0}
        assert parse_bound_operation(spec, "d", ignore=("terms",)) == ("equal", 0)


class TestCompileConstraints:
    """Rows added to the problem."""

    def test_rows_in_document_order(self):
        p = Problem()
        symbols = SymbolTable()
        n = compile_constraints(p, {
            "b": {"upper": 5},
            "a": {"range": [0, 1]},
            "c": {"free": True},
        }, symbols)
        assert n == 3
        assert [p.get_row_name(i) for i in (1, 2, 3)] == ["b", "a", "c"]
        assert symbols.resolve_constraint("a") == 2
        assert p.get_row_bound(1) == Bound(UPPER, 0.0, 5.0)
        assert p.get_row_bound(2) == Bound(DOUBLE, 0.0, 1.0)
        assert p.get_row_bound(3) == Bound(FREE, 0.0, 0.0)

    def test_no_matrix_touched(self):
        p = Problem()
        compile_constraints(p, {"c": {"max": 1}}, SymbolTable())
        assert p.n_nonzeros == 0
        assert p.n_matrix_loads == 0

    def test_empty(self):
        p = Problem()
        assert compile_constraints(p, {}, SymbolTable()) == 0
        assert p.n_rows == 0

    def test_constraint_not_object(self):
        with pytest.raises(SchemaError, match="Constraint 'c' must be an object"):
            compile_constraints(Problem(), {"c": 5}, SymbolTable())

    def test_constraints_not_object(self):
        with pytest.raises(SchemaError):
            compile_constraints(Problem(), [{"max": 1}], SymbolTable())
