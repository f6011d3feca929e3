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
Created: 2026-10-15
Description: Tests for the reflection based class introspection and type name resolution.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from dataclasses import dataclass
from typing import Optional, Union

import pytest

from strictmap.mapper.errors import IntrospectionError
from strictmap.meta.typing.registry import BuiltinTypeRegistry
from strictmap.schema.introspection import (
    FieldDescription,
    ReflectionIntrospectionProvider,
    TypeIntrospectionProvider,
    constructor_annotation,
    resolve_named,
)
from strictmap.schema.types import Named, Primitive, UnionShape


class Outer:
    class Inner:
        def __init__(self, value: int):
            self.value = value

    def __init__(self, inner: "Outer.Inner"):
        self.inner = inner


@dataclass
class Node:
    """A node of a tree."""

    label: str
    parent: Optional["Node"]


class WithDocstring:
    """Class docstring."""

    def __init__(self, field: int):
        """Constructor docstring."""
        self.field = field


class WithoutConstructorDocstring:
    """Class docstring."""

    def __init__(self, field: int):
        self.field = field


class ClassLevelAnnotations:
    field: int

    def __init__(self, field):
        self.field = field


class Celsius(float):
    pass


@pytest.fixture
def provider():
    return ReflectionIntrospectionProvider()


class TestDescribe:
    """Test ReflectionIntrospectionProvider.describe."""

    def test_is_a_provider(self, provider):
        """Test that the default provider satisfies the protocol."""
        assert isinstance(provider, TypeIntrospectionProvider)

    def test_self_reference(self, provider):
        """Test that a class can reference itself through a forward reference."""
        description = provider.describe(Node)
        assert description.type_name == "Node"
        assert description.fields == (
            FieldDescription("label", Primitive("string")),
            FieldDescription("parent", Named("Node"), allows_null=True),
        )
        assert description.fields[1].declared.target is Node
        assert description.annotation == "A node of a tree."

    def test_nested_class_forward_reference(self, provider):
        """Test a forward reference to a nested class through the owner name."""
        (field,) = provider.describe(Outer).fields
        assert field.declared.target is Outer.Inner
        assert field.declared.name == "Outer.Inner"

    def test_class_level_annotations_fill_in(self, provider):
        """Test that class annotations type the parameters left unannotated."""
        (field,) = provider.describe(ClassLevelAnnotations).fields
        assert field.declared == Primitive("int")

    def test_typing_union_spellings(self, provider):
        """Test that typing.Union and Optional are read like the | syntax."""
        assert provider.describe_field("f", Optional[int]) == FieldDescription(
            "f", Primitive("int"), allows_null=True
        )
        assert provider.describe_field("f", Union[int, str]) == FieldDescription(
            "f", UnionShape((Primitive("int"), Primitive("string")))
        )

    def test_native_generic_union_element(self, provider):
        """Test that a union element type is kept as a union shape."""
        field = provider.describe_field("f", list[int | str])
        assert field.element == UnionShape((Primitive("int"), Primitive("string")))

    def test_unsupported_annotation(self, provider):
        """Test that an annotation that is neither a type nor a generic fails."""
        with pytest.raises(IntrospectionError):
            provider.describe_field("f", 42)

    def test_unsupported_generic(self, provider):
        """Test that generics without a builtin origin fail."""
        with pytest.raises(IntrospectionError):
            provider.describe_field("f", set[int])


class TestConstructorAnnotation:
    """Test the choice of the annotation text."""

    def test_constructor_docstring(self):
        """Test that a hand-written constructor docstring wins."""
        assert constructor_annotation(WithDocstring) == "Constructor docstring."

    def test_class_docstring(self):
        """Test the fallback on the class docstring."""
        assert constructor_annotation(WithoutConstructorDocstring) == "Class docstring."

    def test_no_docstring(self):
        """Test a class without any docstring."""
        assert constructor_annotation(ClassLevelAnnotations) is None


class TestResolve:
    """Test the resolution of type names written in annotations."""

    def test_module_global(self, provider):
        """Test a name of the owner module."""
        assert provider.resolve("Node", Outer) is Node

    def test_owner_itself(self, provider):
        """Test a name referencing the owner."""
        assert provider.resolve("Outer", Outer) is Outer

    def test_nested_class(self, provider):
        """Test a nested class, by short and by owner qualified name."""
        assert provider.resolve("Inner", Outer) is Outer.Inner
        assert provider.resolve("Outer.Inner", Outer) is Outer.Inner

    def test_import_path(self, provider):
        """Test a fully qualified name."""
        assert provider.resolve("collections.OrderedDict", Node).__name__ == "OrderedDict"
        assert provider.resolve("json.decoder.JSONDecoder", Node).__name__ == "JSONDecoder"

    def test_not_a_class(self, provider):
        """Test that a name resolving to something else than a class fails."""
        with pytest.raises(IntrospectionError):
            provider.resolve("provider", Node)

    @pytest.mark.parametrize("type_name", ["Missing", "missing_module.Missing", "json.Missing"])
    def test_unknown(self, provider, type_name):
        """Test that unknown names fail."""
        with pytest.raises(IntrospectionError):
            provider.resolve(type_name, Node)

    def test_resolve_named_with_known_target(self, provider):
        """Test that a shape knowing its class is not resolved again."""
        assert resolve_named(Named("Whatever", Node), Outer, provider) is Node

    def test_resolve_named_by_name(self, provider):
        """Test that a shape without class is resolved by the provider."""
        assert resolve_named(Named("Node"), Outer, provider) is Node


class TestCustomRegistry:
    """Test a provider using a customized registry."""

    def test_registered_subclass_is_builtin(self):
        """Test that a registered float subclass is seen as a builtin float."""
        registry = BuiltinTypeRegistry.with_defaults()
        registry.register_builtin(Celsius, "float")
        provider = ReflectionIntrospectionProvider(registry)
        assert provider.describe_field("t", Celsius).declared == Primitive("float")

    def test_default_registry_sees_a_class(self, provider):
        """Test that without registration the subclass is a custom type."""
        assert provider.describe_field("t", Celsius).declared == Named("Celsius")
