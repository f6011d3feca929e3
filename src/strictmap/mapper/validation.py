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
Created: 2026-10-14
Description: Validation rules of the mapper. This includes:
            - the structural checks of a property schema, run before any value is read
            - the check of a document value against a builtin type or a custom class
            - the checks of array elements, map keys and map values
            Every check raises a MappingError and returns None when the value is valid.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Mapping
from typing import Any, cast

from ..schema.types import (
    MAP_KEY_TYPES,
    ArrayType,
    ClassSchema,
    MainType,
    MapType,
    Primitive,
    PropertySchema,
)
from .classify import Container, classify, classify_key, iter_items
from .config import MapperConfig
from .errors import (
    ArrayTypeMissingError,
    IntersectionTypesNotAllowedError,
    InvalidArrayElementTypeError,
    InvalidMapKeyTypeError,
    InvalidMapValueTypeError,
    InvalidTypeError,
    MissingRequiredPropertyError,
    MixedTypeArraysNotAllowedError,
    MixedTypeMapsNotAllowedError,
    MixedTypeNotAllowedError,
    NullNotAllowedError,
    PropertyTypeMissingError,
    UnionTypesNotAllowedError,
    UnsupportedMapKeyTypeError,
    as_array_element_error,
    as_map_value_error,
)

# Only documents can be mapped to a custom class.
DOCUMENT_KIND = "array"


class ValidationEngine:
    """Apply the type rules of the mapper to schemas and document values.

    Args:
        config (MapperConfig): The flags relaxing the rules.
    """

    def __init__(self, config: MapperConfig | None = None) -> None:
        self.config = config or MapperConfig()

    # Structural checks

    def validate_schema(self, schema: ClassSchema) -> None:
        """Run validate_property_schema on every property, in order."""
        for prop in schema:
            self.validate_property_schema(prop)

    def validate_property_schema(self, prop: PropertySchema) -> None:
        """Check that a property can be mapped at all, whatever the document.

        The checks run in a fixed order and the first failing one raises.

        Raises:
            PropertyTypeMissingError: untyped property, untyped properties not allowed.
            UnionTypesNotAllowedError: the property is declared with a union.
            IntersectionTypesNotAllowedError: the property is declared with an intersection.
            MixedTypeNotAllowedError: the property is declared as mixed.
            ArrayTypeMissingError: array without element type, untyped properties not allowed.
            MixedTypeArraysNotAllowedError: array of mixed.
            UnsupportedMapKeyTypeError: map key type other than string and int.
            MixedTypeMapsNotAllowedError: map of mixed values.
        """
        untyped_allowed = self.config.allow_untyped_properties
        owner, name = prop.owner_type, prop.name

        if not prop.is_typed and not untyped_allowed:
            raise PropertyTypeMissingError(owner, name)
        if prop.is_union_type:
            raise UnionTypesNotAllowedError(owner, name)
        if prop.is_intersection_type:
            raise IntersectionTypesNotAllowedError(owner, name)
        if prop.is_typed and cast(MainType, prop.main_type).shape == Primitive("mixed"):
            raise MixedTypeNotAllowedError(owner, name)

        if prop.is_array and not prop.is_map:
            if prop.array_type is None:
                if not untyped_allowed:
                    raise ArrayTypeMissingError(owner, name)
            elif prop.array_type.element_type == "mixed":
                raise MixedTypeArraysNotAllowedError(owner, name)

        if prop.is_map and prop.map_type is not None:
            if prop.map_type.key_type not in MAP_KEY_TYPES:
                raise UnsupportedMapKeyTypeError(owner, name)
            if prop.map_type.value_type == "mixed":
                raise MixedTypeMapsNotAllowedError(owner, name)

    def assert_has_property(self, prop: PropertySchema, document: Mapping[Any, Any]) -> None:
        """A document must hold every typed and not-nullable property.

        Raises:
            MissingRequiredPropertyError: Raised if the key is missing.
        """
        if prop.name in document:
            return
        if not prop.is_typed or cast(MainType, prop.main_type).is_nullable:
            return
        raise MissingRequiredPropertyError(prop.owner_type, prop.name)

    # Value checks

    def validate_builtin(
        self,
        class_name: str,
        property_name: str,
        value: Any,
        expected_type: str,
        nullable: bool,
    ) -> None:
        """Check a document value against a builtin type.

        An int is accepted for a float when int to float conversion is allowed.

        Raises:
            NullNotAllowedError: Raised if the value is null and not nullable.
            InvalidTypeError: Raised if the value kind is not the expected type.
        """
        actual_type = classify(value)
        if self.widens(expected_type, actual_type):
            return
        if actual_type == "null":
            if nullable:
                return
            raise NullNotAllowedError(class_name, property_name)
        if expected_type != actual_type:
            raise InvalidTypeError(class_name, property_name, expected_type, actual_type)

    def validate_custom(
        self, class_name: str, property_name: str, value: Any, nullable: bool
    ) -> None:
        """Check that a document value can be mapped to a custom class.

        Raises:
            NullNotAllowedError: Raised if the value is null and not nullable.
            InvalidTypeError: Raised if the value is not a document.
        """
        actual_type = classify(value)
        if actual_type == "null":
            if nullable:
                return
            raise NullNotAllowedError(class_name, property_name)
        if actual_type != DOCUMENT_KIND:
            raise InvalidTypeError(class_name, property_name, DOCUMENT_KIND, actual_type)

    def validate_array_element(self, prop: PropertySchema, element: Any) -> None:
        """Check an element of a builtin typed array. Elements are never nullable.

        Raises:
            InvalidArrayElementTypeError: Raised if the element is null or of another type.
        """
        expected_type = cast(ArrayType, prop.array_type).element_type
        try:
            self.validate_builtin(prop.owner_type, prop.name, element, expected_type, False)
        except (NullNotAllowedError, InvalidTypeError) as e:
            raise as_array_element_error(e, expected_type) from e

    def validate_map_value(self, prop: PropertySchema, value: Any) -> None:
        """Check a value of a builtin typed map.

        Raises:
            InvalidMapValueTypeError: Raised if the value is of another type, or null when the
                map values are not nullable.
        """
        map_type = cast(MapType, prop.map_type)
        expected_type = map_type.value_type
        try:
            self.validate_builtin(
                prop.owner_type,
                prop.name,
                value,
                expected_type,
                map_type.is_value_nullable,
            )
        except (NullNotAllowedError, InvalidTypeError) as e:
            raise as_map_value_error(e, expected_type) from e

    def validate_map_keys(self, prop: PropertySchema, container: Container) -> None:
        """Check that every key of a map is of the map key type. The first mismatch in
        iteration order is reported.

        Raises:
            InvalidMapKeyTypeError: Raised on the first key of another type.
        """
        expected_type = cast(MapType, prop.map_type).key_type
        for key, _ in iter_items(container):
            actual_type = classify_key(key)
            if actual_type != expected_type:
                raise InvalidMapKeyTypeError(
                    prop.owner_type, prop.name, expected_type, actual_type
                )

    def assert_array_element_is_document(self, prop: PropertySchema, element: Any) -> None:
        """Elements of a custom typed array must be documents.

        Raises:
            InvalidArrayElementTypeError: Raised if the element is not a document.
        """
        element_type = cast(ArrayType, prop.array_type).element_type
        actual_type = classify(element)
        if actual_type != DOCUMENT_KIND:
            raise InvalidArrayElementTypeError(
                prop.owner_type, prop.name, element_type, actual_type
            )

    def assert_map_value_is_document(self, prop: PropertySchema, value: Any) -> None:
        """Values of a custom typed map must be documents. Value nullability only applies to
        builtin typed maps, a null value is never a document.

        Raises:
            InvalidMapValueTypeError: Raised if the value is not a document.
        """
        map_type = cast(MapType, prop.map_type)
        actual_type = classify(value)
        if actual_type != DOCUMENT_KIND:
            raise InvalidMapValueTypeError(
                prop.owner_type, prop.name, map_type.value_type, actual_type
            )

    def widens(self, expected_type: str, actual_type: str) -> bool:
        """Whether an int value is accepted, and converted, for a float type."""
        return (
            self.config.allow_int_to_float_conversion
            and expected_type == "float"
            and actual_type == "int"
        )
