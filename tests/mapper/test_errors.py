"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------


Author: Sébastien Gachoud
Created: 2026-10-16
Description: Tests for the mapping error taxonomy and the traced exceptions.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import copy
import pickle

import pytest

from strictmap.exceptions import (
    ArrayTypeMissingError,
    ErrorKind,
    InstanceConstructionError,
    IntersectionTypesNotAllowedError,
    IntrospectionError,
    InvalidArrayElementTypeError,
    InvalidMapKeyTypeError,
    InvalidMapValueTypeError,
    InvalidTypeError,
    MappingError,
    MissingRequiredPropertyError,
    MixedTypeArraysNotAllowedError,
    MixedTypeMapsNotAllowedError,
    MixedTypeNotAllowedError,
    NullNotAllowedError,
    PropertyTypeMissingError,
    TracedException,
    UnionTypesNotAllowedError,
    UnsupportedMapKeyTypeError,
    format_exception,
)
from strictmap.mapper.errors import as_array_element_error, as_map_value_error

STRUCTURAL_ERRORS = [
    PropertyTypeMissingError,
    UnionTypesNotAllowedError,
    IntersectionTypesNotAllowedError,
    MixedTypeNotAllowedError,
    ArrayTypeMissingError,
    MixedTypeArraysNotAllowedError,
    MixedTypeMapsNotAllowedError,
    UnsupportedMapKeyTypeError,
    MissingRequiredPropertyError,
    NullNotAllowedError,
]

MISMATCH_ERRORS = [
    InvalidTypeError,
    InvalidArrayElementTypeError,
    InvalidMapValueTypeError,
    InvalidMapKeyTypeError,
]


class TestTracedException:
    """Test the root of the exceptions."""

    def test_format_exception(self):
        """Test formatting a raised exception with its traceback."""
        try:
            raise ValueError("Test error message")
        except ValueError as e:
            result = format_exception(e)
        assert "ValueError: Test error message" in result
        assert "Traceback" in result

    def test_traceback_format(self):
        """Test that a mapping error formats its own traceback."""
        try:
            raise NullNotAllowedError("Owner", "field")
        except MappingError as e:
            result = e.traceback_format()
        assert "NullNotAllowedError" in result
        assert "Owner.$field" in result

    @pytest.mark.parametrize(
        "error_type", [MappingError, IntrospectionError, InstanceConstructionError]
    )
    def test_all_errors_are_traced(self, error_type):
        """Test that every error of the library derives from TracedException."""
        assert issubclass(error_type, TracedException)


class TestTaxonomy:
    """Test the flat taxonomy of mapping errors."""

    def test_one_class_per_kind(self):
        """Test that the 14 kinds have distinct classes."""
        kinds = {error_type.kind for error_type in STRUCTURAL_ERRORS + MISMATCH_ERRORS}
        assert kinds == set(ErrorKind)

    @pytest.mark.parametrize("error_type", STRUCTURAL_ERRORS + MISMATCH_ERRORS)
    def test_flat(self, error_type):
        """Test that no kind is a subclass of another kind."""
        others = [e for e in STRUCTURAL_ERRORS + MISMATCH_ERRORS if e is not error_type]
        assert issubclass(error_type, MappingError)
        assert not any(issubclass(error_type, other) for other in others)

    def test_collaborator_errors_are_outside(self):
        """Test that collaborator failures are not mapping errors."""
        assert not issubclass(IntrospectionError, MappingError)
        assert not issubclass(InstanceConstructionError, MappingError)

    def test_kind_values(self):
        """Test the tag names."""
        assert ErrorKind.INVALID_MAP_KEY_TYPE == "InvalidMapKeyType"
        assert MissingRequiredPropertyError.kind is ErrorKind.MISSING_REQUIRED_PROPERTY


class TestMessagesAndEquality:
    """Test the content of the errors."""

    def test_addressing(self):
        """Test that an error carries its class and property names."""
        error = MissingRequiredPropertyError("Child", "field")
        assert error.class_name == "Child"
        assert error.property_name == "field"
        assert error.property_path == "Child.$field"
        assert error.message == (
            "Required property Child.$field is missing in the given document."
        )

    def test_path_without_owner(self):
        """Test the path of an error with an unknown owner."""
        assert NullNotAllowedError("", "field").property_path == "$field"

    def test_mismatch_message(self):
        """Test that mismatch errors render the expected and actual types."""
        error = InvalidTypeError("Owner", "field", "float", "int")
        assert (error.expected_type, error.actual_type) == ("float", "int")
        assert str(error) == (
            "Property Owner.$field expects a value of type 'float', 'int' found."
        )

    def test_equality(self):
        """Test that errors compare by kind, address and types."""
        assert NullNotAllowedError("A", "f") == NullNotAllowedError("A", "f")
        assert NullNotAllowedError("A", "f") != NullNotAllowedError("A", "g")
        assert NullNotAllowedError("A", "f") != MissingRequiredPropertyError("A", "f")
        assert InvalidTypeError("A", "f", "int", "string") != InvalidTypeError(
            "A", "f", "int", "bool"
        )
        assert len({NullNotAllowedError("A", "f"), NullNotAllowedError("A", "f")}) == 1

    def test_repr(self):
        """Test the repr of errors."""
        assert repr(InvalidMapKeyTypeError("A", "f", "string", "int")) == (
            "InvalidMapKeyTypeError('A', 'f', 'string', 'int')"
        )
        assert repr(NullNotAllowedError("A", "f")) == "NullNotAllowedError('A', 'f')"

    @pytest.mark.parametrize(
        "error",
        [NullNotAllowedError("A", "f"), InvalidMapValueTypeError("A", "f", "Child", "null")],
    )
    def test_pickle_and_copy(self, error):
        """Test that errors survive pickling and copying with their fields and message."""
        for clone in (pickle.loads(pickle.dumps(error)), copy.copy(error)):
            assert type(clone) is type(error)
            assert clone == error
            assert str(clone) == str(error)
            assert clone.property_path == "A.$f"


class TestRetagging:
    """Test the conversion of value failures to container failures."""

    def test_array_element_from_invalid_type(self):
        """Test that the expected and actual types are kept."""
        error = as_array_element_error(InvalidTypeError("A", "f", "int", "string"), "int")
        assert error == InvalidArrayElementTypeError("A", "f", "int", "string")

    def test_array_element_from_null(self):
        """Test that a null failure becomes a mismatch with 'null'."""
        error = as_array_element_error(NullNotAllowedError("A", "f"), "int")
        assert error == InvalidArrayElementTypeError("A", "f", "int", "null")

    def test_map_value(self):
        """Test the map value re-tagging."""
        assert as_map_value_error(
            InvalidTypeError("A", "f", "string", "float"), "string"
        ) == InvalidMapValueTypeError("A", "f", "string", "float")
        assert as_map_value_error(
            NullNotAllowedError("A", "f"), "string"
        ) == InvalidMapValueTypeError("A", "f", "string", "null")
