"""
Re-export exceptions module for cleaner imports.

This allows: from strictmap.exceptions import InvalidTypeError
Instead of: from strictmap.mapper.errors import InvalidTypeError
"""

from .mapper.errors import (
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
    TypeMismatchError,
    UnionTypesNotAllowedError,
    UnsupportedMapKeyTypeError,
    format_exception,
)

__all__ = [
    "TracedException",
    "format_exception",
    "ErrorKind",
    "MappingError",
    "TypeMismatchError",
    "PropertyTypeMissingError",
    "UnionTypesNotAllowedError",
    "IntersectionTypesNotAllowedError",
    "MixedTypeNotAllowedError",
    "ArrayTypeMissingError",
    "MixedTypeArraysNotAllowedError",
    "MixedTypeMapsNotAllowedError",
    "UnsupportedMapKeyTypeError",
    "MissingRequiredPropertyError",
    "NullNotAllowedError",
    "InvalidTypeError",
    "InvalidArrayElementTypeError",
    "InvalidMapValueTypeError",
    "InvalidMapKeyTypeError",
    "IntrospectionError",
    "InstanceConstructionError",
]
