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
Created: 2026-10-13
Description: Build the ClassSchema of a target class from the description given by a
            TypeIntrospectionProvider and the container annotations of its docstring.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging

from .annotations import AnnotationParser, ParsedAnnotations, trim_type_name
from .introspection import (
    FieldDescription,
    ReflectionIntrospectionProvider,
    TypeIntrospectionProvider,
)
from .types import (
    ArrayType,
    ClassSchema,
    IntersectionShape,
    MainType,
    MapType,
    Named,
    Primitive,
    PropertySchema,
    TypeShape,
    UnionShape,
    is_builtin_type,
)

log = logging.getLogger(__name__)


def _target_of(shape: TypeShape | None) -> type | None:
    return shape.target if isinstance(shape, Named) else None


class SchemaExtractor:
    """Extract the schema of target classes.

    No schema is cached: every call to extract describes the target again and returns a new
    immutable ClassSchema.

    Args:
        provider (TypeIntrospectionProvider | None): Source of the raw class descriptions.
            Defaults to a ReflectionIntrospectionProvider.
        parser (AnnotationParser | None): Parser of the docstring container annotations.
    """

    def __init__(
        self,
        provider: TypeIntrospectionProvider | None = None,
        parser: AnnotationParser | None = None,
    ) -> None:
        self.provider = provider or ReflectionIntrospectionProvider()
        self.parser = parser or AnnotationParser()

    def extract(self, target: type) -> ClassSchema:
        """Extract the schema of a target class.

        Args:
            target (type): The class to describe.

        Returns:
            ClassSchema: One PropertySchema per constructor-visible field, in constructor order.
        """
        description = self.provider.describe(target)
        parsed = self.parser.parse(
            description.annotation, (f.name for f in description.fields)
        )
        properties = tuple(
            self.extract_property(description.type_name, f, parsed)
            for f in description.fields
        )
        log.debug("Extracted schema of '%s' with %d properties.", description.type_name,
                  len(properties))
        return ClassSchema(description.type_name, target, properties)

    def extract_property(
        self, owner_type: str, description: FieldDescription, parsed: ParsedAnnotations
    ) -> PropertySchema:
        """Build the schema of a single field."""
        main_type = self.main_type_of(description)
        # The docstring wins over native generics, and a map annotation excludes an array one.
        map_type = array_type = None
        is_union_type = isinstance(description.declared, UnionShape)
        if description.name in parsed.map_types:
            map_type = parsed.map_types[description.name]
        elif description.name in parsed.array_types:
            array_type = self.array_type_of(description, parsed)
        else:
            map_type = self.map_type_of(description, parsed)
            array_type = None if map_type else self.array_type_of(description, parsed)
            # Union element and value types are rejected like union fields.
            is_union_type = is_union_type or isinstance(description.element, UnionShape)

        return PropertySchema(
            owner_type=owner_type,
            name=description.name,
            main_type=main_type,
            is_array=(
                main_type is not None
                and isinstance(main_type.shape, Primitive)
                and main_type.shape.name == "array"
            ),
            is_map=map_type is not None,
            is_union_type=is_union_type,
            is_intersection_type=isinstance(description.declared, IntersectionShape),
            array_type=array_type,
            map_type=map_type,
        )

    @staticmethod
    def main_type_of(description: FieldDescription) -> MainType | None:
        """MainType of a field, None for an untyped field. Union and intersection types are
        never builtin.
        """
        shape = description.declared
        if shape is None:
            return None
        return MainType(
            shape=shape,
            is_builtin=isinstance(shape, Primitive) and is_builtin_type(shape.name),
            is_nullable=description.allows_null,
        )

    @staticmethod
    def array_type_of(
        description: FieldDescription, parsed: ParsedAnnotations
    ) -> ArrayType | None:
        """ArrayType from the docstring annotation, else from a native list[T] annotation."""
        element_type = parsed.array_types.get(description.name)
        if element_type is not None:
            element_type = trim_type_name(element_type)
            return ArrayType(element_type, is_builtin_type(element_type))

        if description.element is not None and description.key is None:
            element = description.element
            return ArrayType(
                element.name,
                isinstance(element, Primitive),
                _target_of(element),
            )
        return None

    @staticmethod
    def map_type_of(
        description: FieldDescription, parsed: ParsedAnnotations
    ) -> MapType | None:
        """MapType from the docstring annotation, else from a native dict[K, V] annotation."""
        map_type = parsed.map_types.get(description.name)
        if map_type is not None:
            return map_type

        if description.key is not None and description.element is not None:
            value = description.element
            return MapType(
                key_type=description.key.name,
                value_type=value.name,
                is_value_builtin=isinstance(value, Primitive),
                is_value_nullable=description.value_allows_null,
                value_target=_target_of(value),
            )
        return None


def extract_schema(target: type) -> ClassSchema:
    """This function is a shortcut to `SchemaExtractor().extract()`."""
    return SchemaExtractor().extract(target)
