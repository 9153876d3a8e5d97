"""Utility function tests."""

import pytest
from celpy import celtypes

from setbuilder._errors import InvalidVariableNameError, UnsupportedValueError
from setbuilder._utils import (
    to_cel,
    to_python,
    validate_distinct_names,
    validate_variable_name,
)


class TestValidateVariableName:
    def test_valid_name(self):
        validate_variable_name("my_var")

    def test_empty_name(self):
        with pytest.raises(InvalidVariableNameError):
            validate_variable_name("")

    def test_too_long(self):
        with pytest.raises(InvalidVariableNameError, match="too long"):
            validate_variable_name("a" * 64)

    def test_invalid_chars(self):
        with pytest.raises(InvalidVariableNameError):
            validate_variable_name("my var")

    def test_starts_with_number(self):
        with pytest.raises(InvalidVariableNameError):
            validate_variable_name("1x")

    @pytest.mark.parametrize("name", ["true", "null", "in", "string", "map"])
    def test_reserved(self, name):
        with pytest.raises(InvalidVariableNameError, match="reserved"):
            validate_variable_name(name)


class TestValidateDistinctNames:
    def test_distinct(self):
        validate_distinct_names("x", "y")

    def test_same(self):
        with pytest.raises(InvalidVariableNameError) as exc_info:
            validate_distinct_names("x", "x")
        assert "'x'" in exc_info.value.internal()


class TestToCel:
    def test_int(self):
        assert isinstance(to_cel(3), celtypes.IntType)

    def test_bool(self):
        assert isinstance(to_cel(True), celtypes.BoolType)

    def test_string(self):
        assert isinstance(to_cel("a"), celtypes.StringType)

    def test_list(self):
        assert isinstance(to_cel([1, 2]), celtypes.ListType)

    def test_unsupported(self):
        with pytest.raises(UnsupportedValueError) as exc_info:
            to_cel(object())
        assert exc_info.value.wrapped is not None


class TestToPython:
    def test_none(self):
        assert to_python(None) is None

    def test_bool(self):
        assert to_python(celtypes.BoolType(True)) is True

    def test_int(self):
        result = to_python(celtypes.IntType(7))
        assert result == 7
        assert type(result) is int

    def test_double(self):
        assert type(to_python(celtypes.DoubleType(1.5))) is float

    def test_nested(self):
        value = celtypes.MapType({
            celtypes.StringType("k"): celtypes.ListType([celtypes.IntType(1)]),
        })
        result = to_python(value)
        assert result == {"k": [1]}
        assert type(result["k"]) is list

    def test_plain_value_passes_through(self):
        assert to_python(5) == 5
