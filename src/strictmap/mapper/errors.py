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
Created: 2026-10-12
Description: Errors raised while mapping a document to a class.
            - TracedException: root of every error of the library, formats with traceback
            - MappingError: flat taxonomy, one subclass per ErrorKind
            - as_array_element_error / as_map_value_error: re-tag a value failure into the
              container specific kind
            - IntrospectionError, InstanceConstructionError: collaborator failures
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import traceback
from enum import StrEnum
from typing import Any, ClassVar


def format_exception(e: BaseException) -> str:
    """Format the provided exception to a string with its traceback.

    Args:
        e (BaseException): The exception to format.

    Returns:
        str: The string representation of the exception with its traceback.
    """
    return "".join(traceback.format_exception(type(e), e, e.__traceback__))


class TracedException(Exception):
    """Base traceable exception class."""

    def traceback_format(self) -> str:
        """Format the exception to a string with its traceback.

        Returns:
            str: The string representation of the exception with its traceback.
        """
        return format_exception(self)


class ErrorKind(StrEnum):
    """Tag of a mapping failure."""

    PROPERTY_TYPE_MISSING = "PropertyTypeMissing"
    UNION_TYPES_NOT_ALLOWED = "UnionTypesNotAllowed"
    INTERSECTION_TYPES_NOT_ALLOWED = "IntersectionTypesNotAllowed"
    MIXED_TYPE_NOT_ALLOWED = "MixedTypeNotAllowed"
    ARRAY_TYPE_MISSING = "ArrayTypeMissing"
    MIXED_TYPE_ARRAYS_NOT_ALLOWED = "MixedTypeArraysNotAllowed"
    MIXED_TYPE_MAPS_NOT_ALLOWED = "MixedTypeMapsNotAllowed"
    UNSUPPORTED_MAP_KEY_TYPE = "UnsupportedMapKeyType"
    MISSING_REQUIRED_PROPERTY = "MissingRequiredProperty"
    NULL_NOT_ALLOWED = "NullNotAllowed"
    INVALID_TYPE = "InvalidType"
    INVALID_ARRAY_ELEMENT_TYPE = "InvalidArrayElementType"
    INVALID_MAP_VALUE_TYPE = "InvalidMapValueType"
    INVALID_MAP_KEY_TYPE = "InvalidMapKeyType"


class MappingError(TracedException):
    """Base class of all mapping failures. Every failure is addressed by the owning class name
    and the property name.

    Subclasses only set `kind` and `template`. The template is formatted with `path`, and for
    type mismatches with `expected` and `actual`.
    """

    kind: ClassVar[ErrorKind]
    template: ClassVar[str] = (
        "Something is wrong with the value for the {path} property in the given document."
    )

    def __init__(self, class_name: str, property_name: str) -> None:
        self.class_name = class_name
        self.property_name = property_name
        super().__init__(self._make_message())

    @property
    def property_path(self) -> str:
        """'Owner.$field', or '$field' when the owner is unknown."""
        path = f"${self.property_name}"
        if self.class_name:
            path = f"{self.class_name}.{path}"
        return path

    @property
    def message(self) -> str:
        return str(self)

    def _make_message(self) -> str:
        return self.template.format(path=self.property_path)

    def _arguments(self) -> tuple[str, ...]:
        """Arguments of the constructor, in order."""
        return (self.class_name, self.property_name)

    def _key(self) -> tuple[Any, ...]:
        return (self.kind, *self._arguments())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MappingError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __reduce__(self) -> tuple[Any, ...]:
        # args only holds the message, rebuild from the fields instead.
        return (type(self), self._arguments())

    def __repr__(self) -> str:
        arguments = ", ".join(map(repr, self._arguments()))
        return f"{type(self).__name__}({arguments})"


class TypeMismatchError(MappingError):
    """Mixin base for the failures that carry an expected and an actual type.

    It is not a kind on its own: the four mismatch kinds stay siblings so that catching one of
    them never catches another.
    """

    def __init__(
        self, class_name: str, property_name: str, expected_type: str, actual_type: str
    ) -> None:
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(class_name, property_name)

    def _make_message(self) -> str:
        return self.template.format(
            path=self.property_path,
            expected=self.expected_type,
            actual=self.actual_type,
        )

    def _arguments(self) -> tuple[str, ...]:
        return (*super()._arguments(), self.expected_type, self.actual_type)


class PropertyTypeMissingError(MappingError):
    kind = ErrorKind.PROPERTY_TYPE_MISSING
    template = "Property {path} should have a type specified."


class UnionTypesNotAllowedError(MappingError):
    kind = ErrorKind.UNION_TYPES_NOT_ALLOWED
    template = "Union types are not allowed in {path}."


class IntersectionTypesNotAllowedError(MappingError):
    kind = ErrorKind.INTERSECTION_TYPES_NOT_ALLOWED
    template = "Intersection types are not allowed in {path}."


class MixedTypeNotAllowedError(MappingError):
    kind = ErrorKind.MIXED_TYPE_NOT_ALLOWED
    template = "{path}: mixed-type properties are not allowed. Give the property a proper type."


class ArrayTypeMissingError(MappingError):
    kind = ErrorKind.ARRAY_TYPE_MISSING
    template = "Array {path} should have an element type specified."


class MixedTypeArraysNotAllowedError(MappingError):
    kind = ErrorKind.MIXED_TYPE_ARRAYS_NOT_ALLOWED
    template = "{path}: mixed-type arrays (mixed[]) are not allowed. Use a nested object instead."


class MixedTypeMapsNotAllowedError(MappingError):
    kind = ErrorKind.MIXED_TYPE_MAPS_NOT_ALLOWED
    template = (
        "{path}: maps with mixed-type values (mixed) are not allowed. Use a nested object instead."
    )


class UnsupportedMapKeyTypeError(MappingError):
    kind = ErrorKind.UNSUPPORTED_MAP_KEY_TYPE
    template = "Map {path} key type should be either 'string' or 'int'."


class MissingRequiredPropertyError(MappingError):
    kind = ErrorKind.MISSING_REQUIRED_PROPERTY
    template = "Required property {path} is missing in the given document."


class NullNotAllowedError(MappingError):
    kind = ErrorKind.NULL_NOT_ALLOWED
    template = "Trying to set 'null' to a not-nullable property {path}."


class InvalidTypeError(TypeMismatchError):
    kind = ErrorKind.INVALID_TYPE
    template = "Property {path} expects a value of type '{expected}', '{actual}' found."


class InvalidArrayElementTypeError(TypeMismatchError):
    kind = ErrorKind.INVALID_ARRAY_ELEMENT_TYPE
    template = (
        "Typed array {path} expects all of its elements to be of type '{expected}',"
        " '{actual}' found."
    )


class InvalidMapValueTypeError(TypeMismatchError):
    kind = ErrorKind.INVALID_MAP_VALUE_TYPE
    template = "All values of map {path} are expected to be of type '{expected}', '{actual}' found."


class InvalidMapKeyTypeError(TypeMismatchError):
    kind = ErrorKind.INVALID_MAP_KEY_TYPE
    template = "All keys of map {path} are expected to be of type '{expected}', '{actual}' found."


def _retag[E: TypeMismatchError](
    error: NullNotAllowedError | InvalidTypeError, expected_type: str, kind: type[E]
) -> E:
    if isinstance(error, NullNotAllowedError):
        return kind(error.class_name, error.property_name, expected_type, "null")
    return kind(error.class_name, error.property_name, error.expected_type, error.actual_type)


def as_array_element_error(
    error: NullNotAllowedError | InvalidTypeError, expected_type: str
) -> InvalidArrayElementTypeError:
    """Re-tag a value failure raised for an array element.

    Args:
        error (NullNotAllowedError | InvalidTypeError): the raw failure.
        expected_type (str): the element type, used when the raw failure is a null.

    Returns:
        InvalidArrayElementTypeError: the container specific failure.
    """
    return _retag(error, expected_type, InvalidArrayElementTypeError)


def as_map_value_error(
    error: NullNotAllowedError | InvalidTypeError, expected_type: str
) -> InvalidMapValueTypeError:
    """Re-tag a value failure raised for a map value.

    Args:
        error (NullNotAllowedError | InvalidTypeError): the raw failure.
        expected_type (str): the value type, used when the raw failure is a null.

    Returns:
        InvalidMapValueTypeError: the container specific failure.
    """
    return _retag(error, expected_type, InvalidMapValueTypeError)


class IntrospectionError(TracedException):
    """Signals that a class or an annotation cannot be described or a type name resolved."""


class InstanceConstructionError(TracedException):
    """Signals that a target class rejected the arguments collected from a document."""
