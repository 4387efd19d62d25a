"""
Tests for checked document access.
"""

import json
import math

import numpy as np
import pytest

from jsonlp.errors import CompileError, SchemaError
from jsonlp.model.document import (
    is_number,
    get_field,
    expect_object,
    expect_number,
    expect_string,
    expect_pair,
    load_document,
)


class TestIsNumber:
    """Tests for the number predicate."""

    @pytest.mark.parametrize("value", [0, 1, -3, 2.5, np.float64(1.5), np.int32(4)])
    def test_numbers(self, value):
        assert is_number(value)

    @pytest.mark.parametrize("value", [True, False, None, "1", [1], {"a": 1},
                                       math.inf, -math.inf, math.nan])
    def test_non_numbers(self, value):
        assert not is_number(value)


class TestAccessors:
    """Tests for expect_* accessors."""

    def test_get_field_default(self):
        assert get_field({"a": 1}, "a") == 1
        assert get_field({"a": 1}, "b") is None
        assert get_field({"a": 1}, "b", 7) == 7

    def test_expect_object(self):
        obj = {"x": 1}
        assert expect_object(obj, "thing") is obj

    def test_expect_object_rejects_array(self):
        with pytest.raises(SchemaError, match="thing must be an object, got array"):
            expect_object([1, 2], "thing")

    def test_expect_number_converts_to_float(self):
        value = expect_number(3, "n")
        assert value == 3.0
        assert isinstance(value, float)

    def test_expect_number_rejects_bool(self):
        with pytest.raises(SchemaError, match="boolean"):
            expect_number(True, "n")

    def test_expect_number_reports_entity(self):
        with pytest.raises(SchemaError) as info:
            expect_number("7", "Coefficient", entity="x")
        assert info.value.entity == "x"
        assert "string '7'" in str(info.value)

    def test_expect_string(self):
        assert expect_string("abc", "s") == "abc"
        with pytest.raises(SchemaError):
            expect_string(5, "s")

    def test_expect_pair(self):
        assert expect_pair([1, 2.5], "r") == (1.0, 2.5)
        assert expect_pair((0, 1), "r") == (0.0, 1.0)

    @pytest.mark.parametrize("value", [[1], [1, 2, 3], "ab", 5, [1, "2"], None])
    def test_expect_pair_rejects(self, value):
        with pytest.raises(SchemaError):
            expect_pair(value, "r")

    def test_schema_error_is_value_error(self):
        """Compilation errors can be caught as ValueError."""
        assert issubclass(SchemaError, CompileError)
        assert issubclass(SchemaError, ValueError)


class TestLoadDocument:
    """Tests for reading model files."""

    def test_preserves_key_order(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text('{"constraints": {"b": {"max": 1}, "a": {"max": 2}}}')
        doc = load_document(path)
        assert list(doc["constraints"]) == ["b", "a"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SchemaError, match="not valid JSON"):
            load_document(path)

    def test_round_trip(self, tmp_path):
        model = {"direction": "maximize", "objective": "profit"}
        path = tmp_path / "m.json"
        path.write_text(json.dumps(model))
        assert load_document(str(path)) == model

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"name": "caf\xe9"}')
        with pytest.raises(SchemaError, match="not valid UTF-8"):
            load_document(path)
