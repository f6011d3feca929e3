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
Description: Describe a target class for the schema extractor. This includes:
            - TypeIntrospectionProvider: the protocol the extractor and the mapper rely on
            - ReflectionIntrospectionProvider: the default provider, reading the constructor
              signature, the type hints and the docstring of a class
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import importlib
import inspect
import sys
from dataclasses import dataclass, field
from types import NoneType
from typing import Any, Protocol, get_args, get_origin, runtime_checkable

from ..mapper.errors import IntrospectionError
from ..meta.typing.registry import BuiltinTypeRegistry, builtin_registry
from ..meta.typing.utilities import (
    Annotation,
    constructor_parameters,
    constructor_type_hints,
    is_intersection,
    is_union,
    non_null_members,
)
from .types import IntersectionShape, Named, Primitive, TypeShape, UnionShape


@dataclass(frozen=True, slots=True)
class FieldDescription:
    """Raw description of a constructor-visible field.

    element and key refine a container declared with a native generic: list[T] gives element,
    dict[K, V] gives key and element (the value type).
    """

    name: str
    declared: TypeShape | None
    allows_null: bool = False
    element: TypeShape | None = None
    key: TypeShape | None = None
    value_allows_null: bool = False


@dataclass(frozen=True, slots=True)
class TypeDescription:
    """Raw description of a target class."""

    type_name: str
    target: type = field(compare=False)
    fields: tuple[FieldDescription, ...] = ()
    annotation: str | None = None


@runtime_checkable
class TypeIntrospectionProvider(Protocol):
    """Supplies the structural data of a target class."""

    def describe(self, target: type) -> TypeDescription:
        """Describe the constructor-visible fields of the target, in constructor order."""
        ...

    def resolve(self, type_name: str, owner: type) -> type:
        """Resolve a type name found in an annotation of owner to a class."""
        ...


def type_name_of(target: type) -> str:
    """Name used for a class in schemas and error messages."""
    return target.__qualname__


def constructor_annotation(target: type) -> str | None:
    """The annotation text of a class: the docstring of its own __init__, else its docstring.

    Generated constructors (dataclasses) have no docstring, so their class docstring is used.
    """
    init = target.__dict__.get("__init__")
    if init is not None and inspect.isfunction(init) and init.__doc__:
        return init.__doc__
    return target.__dict__.get("__doc__")


class ReflectionIntrospectionProvider:
    """Describe classes with the standard library reflection tools.

    Args:
        registry (BuiltinTypeRegistry | None): Registry deciding which annotations are builtin
            types. Defaults to builtin_registry().
    """

    def __init__(self, registry: BuiltinTypeRegistry | None = None) -> None:
        self._registry = registry or builtin_registry()

    def describe(self, target: type) -> TypeDescription:
        if not isinstance(target, type):
            raise IntrospectionError(f"Cannot describe '{target!r}': not a class.")
        try:
            parameters = constructor_parameters(target)
            hints = constructor_type_hints(target)
        except (NameError, TypeError, ValueError) as e:
            raise IntrospectionError(
                f"Could not read the constructor annotations of '{type_name_of(target)}'."
            ) from e

        fields = tuple(self.describe_field(p.name, hints.get(p.name)) for p in parameters)
        return TypeDescription(
            type_name=type_name_of(target),
            target=target,
            fields=fields,
            annotation=constructor_annotation(target),
        )

    def describe_field(self, name: str, annotation: Annotation | None) -> FieldDescription:
        """Describe a single field from its resolved annotation. None means untyped."""
        if annotation is None:
            return FieldDescription(name=name, declared=None)

        allows_null = False
        if is_union(annotation):
            members = non_null_members(annotation)
            allows_null = len(members) != len(get_args(annotation))
            if len(members) > 1:
                return FieldDescription(
                    name=name,
                    declared=UnionShape(tuple(self.shape_of(m) for m in members)),
                    allows_null=allows_null,
                )
            annotation = members[0]

        declared = self.shape_of(annotation)
        if isinstance(declared, Primitive) and declared.name in ("mixed", "null"):
            allows_null = True

        element = key = None
        value_allows_null = False
        origin = get_origin(annotation)
        args = get_args(annotation)
        if origin is dict and len(args) == 2:
            key = self.shape_of(args[0])
            element, value_allows_null = self._element_of(args[1])
        elif origin is list and len(args) == 1:
            element, _ = self._element_of(args[0])
        elif origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            element, _ = self._element_of(args[0])

        return FieldDescription(
            name=name,
            declared=declared,
            allows_null=allows_null,
            element=element,
            key=key,
            value_allows_null=value_allows_null,
        )

    def _element_of(self, annotation: Annotation) -> tuple[TypeShape, bool]:
        if is_union(annotation):
            members = non_null_members(annotation)
            nullable = len(members) != len(get_args(annotation))
            if len(members) == 1:
                return self.shape_of(members[0]), nullable
            return UnionShape(tuple(self.shape_of(m) for m in members)), nullable
        if annotation in (None, NoneType):
            return Primitive("null"), True
        return self.shape_of(annotation), False

    def shape_of(self, annotation: Annotation) -> TypeShape:
        """Convert a resolved annotation to a TypeShape.

        Raises:
            IntrospectionError: Raised if the annotation cannot be represented.
        """
        builtin = self._registry.get_builtin_name(annotation)
        if builtin is not None:
            return Primitive(builtin)

        if is_intersection(annotation):
            return IntersectionShape(tuple(self.shape_of(a) for a in get_args(annotation)))

        if is_union(annotation):
            members = non_null_members(annotation)
            if len(members) == 1:
                return self.shape_of(members[0])
            return UnionShape(tuple(self.shape_of(m) for m in members))

        origin = get_origin(annotation)
        if origin is not None:
            # Parametrized containers keep their builtin kind, e.g. list[int] is an array.
            builtin = self._registry.get_builtin_name(origin)
            if builtin is not None:
                return Primitive(builtin)
            raise IntrospectionError(f"Unsupported annotation: '{annotation}'.")

        if isinstance(annotation, type):
            return Named(type_name_of(annotation), annotation)

        raise IntrospectionError(f"Unsupported annotation: '{annotation}'.")

    def resolve(self, type_name: str, owner: type) -> type:
        """Resolve a type name written in the annotation of owner.

        Looked up in order: the owner itself, the owner attributes (nested classes), the owner
        module globals, and finally a 'module.Class' import path.

        Raises:
            IntrospectionError: Raised if the name cannot be resolved to a class.
        """
        head, _, rest = type_name.partition(".")
        candidates: list[Any] = []
        if head == owner.__name__:
            candidates.append(owner)
        candidates.append(getattr(owner, head, None))
        module = sys.modules.get(owner.__module__)
        if module is not None:
            candidates.append(getattr(module, head, None))

        for candidate in candidates:
            resolved = self._walk(candidate, rest)
            if isinstance(resolved, type):
                return resolved

        module_name, _, class_path = type_name.rpartition(".")
        while module_name:
            try:
                resolved = self._walk(importlib.import_module(module_name), class_path)
            except ImportError:
                resolved = None
            if isinstance(resolved, type):
                return resolved
            module_name, _, head = module_name.rpartition(".")
            class_path = f"{head}.{class_path}"

        raise IntrospectionError(
            f"Could not resolve type '{type_name}' referenced by '{type_name_of(owner)}'."
        )

    @staticmethod
    def _walk(obj: Any, dotted: str) -> Any:
        if not dotted:
            return obj
        for part in dotted.split("."):
            obj = getattr(obj, part, None)
            if obj is None:
                return None
        return obj


def resolve_named(
    shape: Named, owner: type, provider: TypeIntrospectionProvider
) -> type:
    """The class of a Named shape, resolving its name when the class is not known yet."""
    if shape.target is not None:
        return shape.target
    return provider.resolve(shape.type_name, owner)
