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
Description: Immutable schema model. A ClassSchema is the ordered list of PropertySchema
            describing the constructor-visible fields of a target class:
            - TypeShape: Primitive, Named, UnionShape or IntersectionShape
            - MainType: the declared shape of a field and its nullability
            - ArrayType / MapType: container refinements coming from annotations
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from dataclasses import dataclass, field
from typing import Final, Iterator


BUILTIN_TYPES: Final[frozenset[str]] = frozenset(
    {
        "bool",
        "int",
        "float",
        "string",
        "null",
        "true",
        "false",
        "array",
        "object",
        "mixed",
        "self",
    }
)

MAP_KEY_TYPES: Final[frozenset[str]] = frozenset({"string", "int"})


def is_builtin_type(type_name: str | None) -> bool:
    """Whether the type name is one of the primitive kinds the mapper understands natively."""
    return type_name is not None and type_name in BUILTIN_TYPES


@dataclass(frozen=True, slots=True)
class Primitive:
    """A builtin type, see BUILTIN_TYPES."""

    name: str

    def __post_init__(self) -> None:
        if self.name not in BUILTIN_TYPES:
            raise ValueError(f"'{self.name}' is not a builtin type name.")


@dataclass(frozen=True, slots=True)
class Named:
    """A reference to another mappable class.

    The target is known when the shape comes from a real annotation. Shapes coming from
    docstring annotations only carry the name, which is resolved when the mapper needs it.
    """

    type_name: str
    target: type | None = field(default=None, compare=False)

    @property
    def name(self) -> str:
        return self.type_name


@dataclass(frozen=True, slots=True)
class UnionShape:
    """A union of two or more non-null members. Never mapped."""

    members: tuple[TypeShape, ...]

    @property
    def name(self) -> str:
        return "|".join(
            f"({m.name})" if isinstance(m, IntersectionShape) else m.name
            for m in self.members
        )


@dataclass(frozen=True, slots=True)
class IntersectionShape:
    """An intersection of two or more members. Never mapped."""

    members: tuple[TypeShape, ...]

    @property
    def name(self) -> str:
        return "&".join(m.name for m in self.members)


type TypeShape = Primitive | Named | UnionShape | IntersectionShape


@dataclass(frozen=True, slots=True)
class MainType:
    """Declared type of a field.

    is_nullable comes from the declared signature only. Null markers written in the docstring
    annotation never make the field itself nullable.
    """

    shape: TypeShape
    is_builtin: bool
    is_nullable: bool

    @property
    def type(self) -> str:
        """Readable type name, e.g. 'string', 'Child', 'int|string', 'A&B'."""
        return self.shape.name


@dataclass(frozen=True, slots=True)
class ArrayType:
    """Element type of a `T[]` container."""

    element_type: str
    is_element_builtin: bool
    element_target: type | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class MapType:
    """Key and value types of an `array<K, V>` container."""

    key_type: str
    value_type: str
    is_value_builtin: bool
    is_value_nullable: bool
    value_target: type | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class PropertySchema:
    """Schema of a single constructor-visible field.

    A map field is reported with both is_array and is_map set: at the document level a map is
    an array whose keys and values are typed.
    """

    owner_type: str
    name: str
    main_type: MainType | None
    is_array: bool = False
    is_map: bool = False
    is_union_type: bool = False
    is_intersection_type: bool = False
    array_type: ArrayType | None = None
    map_type: MapType | None = None

    def __post_init__(self) -> None:
        if self.array_type is not None and self.map_type is not None:
            raise ValueError(
                f"Property '{self.owner_type}.{self.name}' cannot be both an array and a map."
            )

    @property
    def is_typed(self) -> bool:
        return self.main_type is not None


@dataclass(frozen=True, slots=True)
class ClassSchema:
    """Ordered properties of a target class. The order is the constructor argument order."""

    type_name: str
    target: type = field(compare=False)
    properties: tuple[PropertySchema, ...] = ()

    def __iter__(self) -> Iterator[PropertySchema]:
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def __getitem__(self, name: str) -> PropertySchema:
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise KeyError(name)

    def names(self) -> tuple[str, ...]:
        """Return all property names in constructor order."""
        return tuple(p.name for p in self.properties)
