"""
Unit tests for the stock primitive checks.
"""

import re

import pytest

from paramcontract.checks import (
    check_allow_nil,
    check_equals,
    check_format,
    check_func,
    check_in,
    check_length,
    check_not_in,
    check_numericality,
    check_required,
    check_struct,
    check_type,
)


class Point:
    pass


class TestRequired:

    def test_present(self):
        assert check_required({"a": 0}, "a", True) is True

    def test_missing(self):
        assert check_required({}, "a", True) == {"a": "is required"}

    def test_none(self):
        assert check_required({"a": None}, "a", True) == {"a": "is required"}

    def test_not_required(self):
        assert check_required({}, "a", False) is True


class TestAllowNil:

    def test_explicit_none_rejected(self):
        assert check_allow_nil({"a": None}, "a", False) == {"a": "doesn't allow nil"}

    def test_missing_key_is_not_nil(self):
        assert check_allow_nil({}, "a", False) is True

    def test_allowed(self):
        assert check_allow_nil({"a": None}, "a", True) is True


class TestType:

    @pytest.mark.parametrize("expected,value", [
        ("integer", 1),
        ("float", 1.5),
        ("number", 2),
        ("number", 2.5),
        ("string", "s"),
        ("boolean", False),
        ("map", {}),
        ("list", []),
        ("tuple", ()),
        ("function", len),
        (str, "s"),
        (dict, {"k": 1}),
    ])
    def test_matching_types(self, expected, value):
        assert check_type({"a": value}, "a", expected) is True

    @pytest.mark.parametrize("expected,value", [
        ("integer", True),
        ("integer", 1.0),
        ("number", "1"),
        ("string", 1),
        ("map", []),
        ("list", (1,)),
        (int, False),
    ])
    def test_mismatched_types(self, expected, value):
        assert check_type({"a": value}, "a", expected) == {"a": "has wrong type"}

    def test_none_passes(self):
        assert check_type({"a": None}, "a", "integer") is True

    def test_unknown_type_name_passes(self, caplog):
        assert check_type({"a": 1}, "a", "quaternion") is True
        assert "Unknown type" in caplog.text


class TestNumericality:

    def test_all_bounds_pass(self):
        result = check_numericality({"n": 5}, "n", {"gt": 1, "lte": 5, "eq": 5})
        assert result == [True, True, True]

    def test_each_failure_reported(self):
        result = check_numericality({"n": 10}, "n", {"greater_than": 1, "less_than": 5, "max": 9})
        assert result == [
            True,
            {"n": "must be less than 5"},
            {"n": "must be less than or equal to 9"},
        ]

    def test_not_a_number(self):
        assert check_numericality({"n": "5"}, "n", {"gt": 1}) == {"n": "must be a number"}

    def test_no_rules(self):
        assert check_numericality({"n": 1}, "n", {}) is True


class TestMembership:

    def test_in(self):
        assert check_in({"a": 2}, "a", [1, 2, 3]) is True
        assert check_in({"a": 4}, "a", [1, 2, 3]) == {"a": "must be one of [1, 2, 3]"}

    def test_not_in(self):
        assert check_not_in({"a": 4}, "a", [1, 2, 3]) is True
        assert check_not_in({"a": 1}, "a", (1, 2)) == {"a": "must not be included in [1, 2]"}

    def test_equals(self):
        assert check_equals({"a": "x"}, "a", "x") is True
        assert check_equals({"a": "y"}, "a", "x") == {"a": "must be equal to 'x'"}


class TestFormat:

    def test_string_pattern(self):
        assert check_format({"id": "ab-12"}, "id", r"^[a-z]+-\d+$") is True

    def test_compiled_pattern(self):
        assert check_format({"id": "AB"}, "id", re.compile(r"^[a-z]+$")) == {"id": "has invalid format"}

    def test_non_string(self):
        assert check_format({"id": 12}, "id", r"\d+") == {"id": "has invalid format"}


class TestLength:

    def test_min(self):
        assert check_length({"s": "6chars"}, "s", {"min": 7}) == [
            {"s": "length must be greater than or equal to 7"},
        ]

    def test_max_and_is(self):
        assert check_length({"s": [1, 2, 3]}, "s", {"max": 2, "is": 3}) == [
            {"s": "length must be less than or equal to 2"},
            True,
        ]

    def test_in_range(self):
        assert check_length({"s": "abc"}, "s", {"in": (4, 6)}) == [
            {"s": "length must be in range 4..6"},
        ]

    def test_no_length(self):
        assert check_length({"s": 5}, "s", {"min": 1}) == {"s": "has no length"}


class TestStructAndFunc:

    def test_struct(self):
        assert check_struct({"p": Point()}, "p", Point) is True
        assert check_struct({"p": {}}, "p", Point) == {"p": "is not expected struct"}

    def test_func_truthy(self):
        assert check_func({"n": 4}, "n", lambda v: v % 2 == 0) is True

    def test_func_falsy(self):
        assert check_func({"n": 3}, "n", lambda v: v % 2 == 0) == {"n": "isn't valid"}

    def test_func_message(self):
        assert check_func({"n": 3}, "n", lambda v: "must be even") == {"n": "must be even"}
