"""Unit tests for deep_equal."""

from __future__ import annotations

import pytest

from confscope.core.equality import deep_equal
from confscope.core.types import UNDEFINED


class TestPrimitives:
    """Test suite for primitive comparisons."""

    @pytest.mark.parametrize(
        "value",
        ["python", "", 0, 1, -3.5, True, False, None, UNDEFINED, float("nan")],
    )
    def test_reflexive(self, value):
        """Test that every primitive equals itself."""
        assert deep_equal(value, value) is True

    def test_strings(self):
        """Test string comparison."""
        assert deep_equal("node", "node") is True
        assert deep_equal("node", "python") is False

    def test_no_string_number_coercion(self):
        """Test that a numeric string is not equal to the number."""
        assert deep_equal("1", 1) is False
        assert deep_equal(1, "1") is False

    def test_bool_is_not_number(self):
        """Test that booleans never equal numbers."""
        assert deep_equal(True, 1) is False
        assert deep_equal(0, False) is False
        assert deep_equal(True, True) is True

    def test_int_and_float_share_number_type(self):
        """Test that 1 and 1.0 are the same JSON number."""
        assert deep_equal(1, 1.0) is True
        assert deep_equal(1, 1.5) is False

    def test_nan_equals_nan(self):
        """Test that two distinct NaN objects compare equal."""
        assert deep_equal(float("nan"), float("nan")) is True
        assert deep_equal(float("nan"), 0.0) is False

    def test_null_and_undefined_are_distinct(self):
        """Test that None and UNDEFINED only equal themselves."""
        assert deep_equal(None, UNDEFINED) is False
        assert deep_equal(UNDEFINED, None) is False
        assert deep_equal(None, None) is True
        assert deep_equal(UNDEFINED, UNDEFINED) is True

    def test_empty_values_are_distinct(self):
        """Test that empty string, list, dict and None differ."""
        empties = ["", [], {}, None, 0, False]
        for i, a in enumerate(empties):
            for j, b in enumerate(empties):
                assert deep_equal(a, b) is (i == j)


class TestContainers:
    """Test suite for arrays and objects."""

    def test_arrays_are_order_sensitive(self):
        """Test that [1, 2] differs from [2, 1]."""
        assert deep_equal([1, 2], [1, 2]) is True
        assert deep_equal([1, 2], [2, 1]) is False

    def test_arrays_length_mismatch(self):
        """Test arrays of different length."""
        assert deep_equal([1], [1, 1]) is False

    def test_list_and_tuple_are_arrays(self):
        """Test that tuples compare as arrays."""
        assert deep_equal([1, "a"], (1, "a")) is True

    def test_objects_are_key_order_independent(self):
        """Test that key order does not matter for objects."""
        assert deep_equal({"a": 1, "b": 2}, {"b": 2, "a": 1}) is True

    def test_objects_with_different_keys(self):
        """Test objects with different key sets."""
        assert deep_equal({"a": 1}, {"b": 1}) is False
        assert deep_equal({"a": 1}, {"a": 1, "b": 2}) is False

    def test_object_value_null_vs_missing(self):
        """Test that a null-valued key differs from a missing key."""
        assert deep_equal({"a": None}, {}) is False

    def test_array_vs_object(self):
        """Test that an array never equals an object."""
        assert deep_equal([], {}) is False
        assert deep_equal({"0": 1}, [1]) is False

    def test_nested_structures(self):
        """Test deeply nested equality and inequality."""
        a = {"command": "npx", "args": ["-y", "server"], "env": {"DEBUG": True, "PORT": 8080}}
        b = {"env": {"PORT": 8080, "DEBUG": True}, "args": ["-y", "server"], "command": "npx"}
        assert deep_equal(a, b) is True
        c = {"command": "npx", "args": ["-y", "server"], "env": {"DEBUG": 1, "PORT": 8080}}
        assert deep_equal(a, c) is False

    def test_nested_reflexive(self):
        """Test that a nested value equals itself."""
        value = {"a": [{"b": [1, {"c": None}]}], "d": {}}
        assert deep_equal(value, value) is True
