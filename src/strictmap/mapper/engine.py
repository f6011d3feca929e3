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
Description: Strict mapping of a decoded document to an instance of a class. This includes:
            - JsonMapper: the recursive descent over a document and the schema of a class
            - InstanceConstructor and positional_constructor: how instances are built
            - map_document and map_json: shortcuts using a default configured mapper
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, cast

from ..meta.typing.registry import BuiltinTypeRegistry
from ..schema.extractor import SchemaExtractor
from ..schema.introspection import (
    ReflectionIntrospectionProvider,
    TypeIntrospectionProvider,
    resolve_named,
)
from ..schema.types import ClassSchema, MainType, MapType, Named, PropertySchema
from .classify import Container, as_mapping, iter_items
from .config import MapperConfig
from .errors import InstanceConstructionError
from .validation import ValidationEngine

log = logging.getLogger(__name__)

# Canonical decimal integers only: '01', '+1', '1.0' and '-0' stay strings.
_INT_KEY = re.compile(r"-?[1-9][0-9]*|0")


class InstanceConstructor(Protocol):
    """Builds an instance of a target class from arguments in schema order."""

    def __call__(self, target: type, arguments: Sequence[Any], /) -> Any: ...


def positional_constructor(target: type, arguments: Sequence[Any], /) -> Any:
    """Default instance constructor: call the class with the arguments positionally."""
    return target(*arguments)


class JsonMapper:
    """Map decoded documents to instances of classes, validating every value against the
    declared type of its field.

        >>> @dataclass
        ... class Point:
        ...     x: float
        ...     y: float
        >>> JsonMapper(allow_int_to_float_conversion=True).map({"x": 1, "y": 2.5}, Point)
        Point(x=1.0, y=2.5)

    Containers are typed in the class docstring, or natively:

        >>> @dataclass
        ... class Polygon:
        ...     '''
        ...     @param Point[] $points
        ...     @param array<string, ?int> $tags
        ...     '''
        ...     points: list
        ...     tags: dict

    The mapping is all or nothing: the first failure raises a MappingError and no instance
    is returned. The mapper holds no state besides its configuration and collaborators, so a
    single mapper can be shared.

    Args:
        allow_untyped_properties (bool): See MapperConfig.
        allow_int_to_float_conversion (bool): See MapperConfig.
        config (MapperConfig | None): A full configuration. Overrides the two flags.
        provider (TypeIntrospectionProvider | None): Source of the class descriptions.
        registry (BuiltinTypeRegistry | None): Builtin type registry of the default provider.
            Ignored when a provider is given.
        constructor (InstanceConstructor | None): Builder of the instances.
    """

    def __init__(
        self,
        allow_untyped_properties: bool = False,
        allow_int_to_float_conversion: bool = False,
        *,
        config: MapperConfig | None = None,
        provider: TypeIntrospectionProvider | None = None,
        registry: BuiltinTypeRegistry | None = None,
        constructor: InstanceConstructor | None = None,
    ) -> None:
        self.config = config or MapperConfig(
            allow_untyped_properties=allow_untyped_properties,
            allow_int_to_float_conversion=allow_int_to_float_conversion,
        )
        self.provider = provider or ReflectionIntrospectionProvider(registry)
        self.constructor = constructor or positional_constructor
        self.extractor = SchemaExtractor(self.provider)
        self.validator = ValidationEngine(self.config)

    def map[T](self, document: Mapping[str | int, Any], target: type[T]) -> T:
        """Map a document to an instance of target.

        Args:
            document (Mapping[str | int, Any]): The decoded document.
            target (type[T]): The class to instantiate.

        Raises:
            MappingError: Raised on the first property that cannot be mapped.
            IntrospectionError: Raised if a class or a type name cannot be described.
            InstanceConstructionError: Raised if a class rejects the mapped arguments.

        Returns:
            T: The instance.
        """
        return cast(T, self.map_to_class(document, target))

    def map_to_class(self, document: Container, target: type) -> Any:
        """Recursive step of map: extract, validate, collect the arguments and construct."""
        schema = self.extractor.extract(target)
        self.validator.validate_schema(schema)
        arguments = self.extract_arguments(schema, as_mapping(document))
        try:
            return self.constructor(target, arguments)
        except Exception as e:
            raise InstanceConstructionError(
                f"Could not construct '{schema.type_name}' from the mapped arguments."
            ) from e

    def extract_arguments(
        self, schema: ClassSchema, document: Mapping[Any, Any]
    ) -> list[Any]:
        """Constructor arguments of a schema, in schema order."""
        arguments = []
        for prop in schema:
            self.validator.assert_has_property(prop, document)
            arguments.append(self.map_property(prop, document.get(prop.name), schema.target))
        return arguments

    def map_property(self, prop: PropertySchema, value: Any, owner: type) -> Any:
        """Mapped value of a property. Untyped properties are passed through."""
        if not prop.is_typed:
            return value
        if cast(MainType, prop.main_type).is_builtin:
            return self.map_builtin(prop, value, owner)
        return self.map_custom(prop, value, owner)

    def map_builtin(self, prop: PropertySchema, value: Any, owner: type) -> Any:
        main_type = cast(MainType, prop.main_type)
        self.validator.validate_builtin(
            prop.owner_type, prop.name, value, main_type.type, main_type.is_nullable
        )
        if prop.is_map:
            return self.map_map(prop, value, owner)
        if prop.is_array:
            return self.map_array(prop, value, owner)
        return self.widen(main_type.type, value)

    def map_custom(self, prop: PropertySchema, value: Any, owner: type) -> Any:
        main_type = cast(MainType, prop.main_type)
        self.validator.validate_custom(prop.owner_type, prop.name, value, main_type.is_nullable)
        if value is None:
            return None
        shape = cast(Named, main_type.shape)
        target = resolve_named(shape, owner, self.provider)
        log.debug("Mapping '%s.%s' to '%s'.", prop.owner_type, prop.name, shape.type_name)
        return self.map_to_class(value, target)

    def map_map(self, prop: PropertySchema, value: Any, owner: type) -> dict[Any, Any] | None:
        """Validate the keys then map every value. A map is always returned as a dict."""
        if value is None:
            return None
        map_type = cast(MapType, prop.map_type)
        self.validator.validate_map_keys(prop, value)

        mapped: dict[Any, Any] = {}
        if map_type.is_value_builtin:
            for key, item in iter_items(value):
                self.validator.validate_map_value(prop, item)
                mapped[key] = self.widen(map_type.value_type, item)
            return mapped

        target = self._element_target(map_type.value_type, map_type.value_target, owner)
        for key, item in iter_items(value):
            self.validator.assert_map_value_is_document(prop, item)
            mapped[key] = self.map_to_class(item, target)
        return mapped

    def map_array(self, prop: PropertySchema, value: Any, owner: type) -> list[Any] | None:
        """Map every element of an array. An array is always returned as a list of its
        values, mapping keys are dropped.
        """
        if value is None:
            return None
        array_type = prop.array_type
        if array_type is None:
            # Untyped array, only reachable when untyped properties are allowed.
            return value

        if array_type.is_element_builtin:
            mapped = []
            for _, element in iter_items(value):
                self.validator.validate_array_element(prop, element)
                mapped.append(self.widen(array_type.element_type, element))
            return mapped

        target = self._element_target(
            array_type.element_type, array_type.element_target, owner
        )
        mapped = []
        for _, element in iter_items(value):
            self.validator.assert_array_element_is_document(prop, element)
            mapped.append(self.map_to_class(element, target))
        return mapped

    def widen(self, expected_type: str, value: Any) -> Any:
        """Convert an int to float for a float type when allowed. Other values are returned
        unchanged.
        """
        if (
            self.config.allow_int_to_float_conversion
            and expected_type == "float"
            and isinstance(value, int)
            and not isinstance(value, bool)
        ):
            log.debug("Widening %r to float.", value)
            return float(value)
        return value

    def _element_target(self, type_name: str, known: type | None, owner: type) -> type:
        return resolve_named(Named(type_name, known), owner, self.provider)


def map_document[T](
    document: Mapping[str | int, Any],
    target: type[T],
    *,
    allow_untyped_properties: bool = False,
    allow_int_to_float_conversion: bool = False,
) -> T:
    """This function is a shortcut to `JsonMapper(**flags).map()`."""
    mapper = JsonMapper(
        allow_untyped_properties=allow_untyped_properties,
        allow_int_to_float_conversion=allow_int_to_float_conversion,
    )
    return mapper.map(document, target)


def int_keys_hook(pairs: list[tuple[str, Any]]) -> dict[str | int, Any]:
    """json object_pairs_hook converting the integer-looking keys of an object to int."""
    return {int(k) if _INT_KEY.fullmatch(k) else k: v for k, v in pairs}


def map_json[T](
    text: str | bytes,
    target: type[T],
    *,
    allow_untyped_properties: bool = False,
    allow_int_to_float_conversion: bool = False,
) -> T:
    """Decode a JSON text and map it to target. See map_document.

    JSON object keys are always strings. Keys written as canonical decimal integers are decoded
    as int so that int keyed maps can be read from JSON.

    Raises:
        json.JSONDecodeError: Raised if the text is not valid JSON.
        ValueError: Raised if the JSON text is not an object.
    """
    document = json.loads(text, object_pairs_hook=int_keys_hook)
    if not isinstance(document, dict):
        raise ValueError(
            f"Cannot map a JSON {type(document).__name__} to '{target.__qualname__}'."
            " A JSON object is expected."
        )
    return map_document(
        document,
        target,
        allow_untyped_properties=allow_untyped_properties,
        allow_int_to_float_conversion=allow_int_to_float_conversion,
    )
