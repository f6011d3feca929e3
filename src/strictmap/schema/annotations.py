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
Description: Parser for the container annotations written in a constructor docstring.
            Two forms are understood, one per line:
                @param Child[] $children
                @param array<string, ?int> $counters
            The first gives the element type of an array, the second the key and value
            types of a map.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Final

from .types import MapType, is_builtin_type

PARAM_TAG: Final[str] = "@param"

# Separators a type name may start with, e.g. '.pkg.module.Child' or '\Pkg\Child'.
PATH_SEPARATORS: Final[str] = ".\\"

_ARRAY_PARAM = re.compile(r"@param\s+.*\[\]\s+\$.*")
_ARRAY_PARAM_SPLIT = re.compile(r"[\[\]\s$]+")
_MAP_PARAM = re.compile(r"@param\s+array<.+,.+>\s+\$.*")
_MAP_TYPES = re.compile(r"<(.+),\s*(.+)>")
_PARAM_NAME = re.compile(r"\$(\w+)")


def strip_nulls(text: str) -> str:
    """Remove the 'null|' and '|null' fragments of a text."""
    return text.replace("null|", "").replace("|null", "")


def trim_type_name(type_name: str) -> str:
    """Trim the leading path separators of a type name."""
    return type_name.strip().lstrip(PATH_SEPARATORS)


@dataclass(frozen=True, slots=True)
class ParsedAnnotations:
    """Container types found in an annotation, keyed by field name."""

    array_types: dict[str, str] = field(default_factory=dict)
    map_types: dict[str, MapType] = field(default_factory=dict)


class AnnotationParser:
    """Parse the container annotations of a docstring.

    Nullability is never read from the annotation for the field itself: it comes from the
    declared type. Only the value type of a map may be marked nullable, with a leading '?' or a
    union with null.
    """

    def parse(
        self, annotation: str | None, field_names: Iterable[str] | None = None
    ) -> ParsedAnnotations:
        """Parse both the array and the map annotations.

        Args:
            annotation (str | None): The docstring text. None gives empty results.
            field_names (Iterable[str] | None): If provided, entries for other names are dropped.

        Returns:
            ParsedAnnotations: The element types and map types keyed by field name.
        """
        array_types = self.parse_array_types(annotation)
        map_types = self.parse_map_types(annotation)
        if field_names is not None:
            names = set(field_names)
            array_types = {k: v for k, v in array_types.items() if k in names}
            map_types = {k: v for k, v in map_types.items() if k in names}
        return ParsedAnnotations(array_types, map_types)

    def parse_array_types(self, annotation: str | None) -> dict[str, str]:
        """Find the '@param T[] $name' lines.

        Returns:
            dict[str, str]: The raw element type token keyed by field name.
        """
        if not annotation:
            return {}

        array_types: dict[str, str] = {}
        for match in _ARRAY_PARAM.finditer(strip_nulls(annotation)):
            parts = _ARRAY_PARAM_SPLIT.split(match.group(0))
            if len(parts) < 3 or not parts[1] or not parts[2]:
                continue
            _, type_name, name = parts[:3]
            array_types[name] = type_name
        return array_types

    def parse_map_types(self, annotation: str | None) -> dict[str, MapType]:
        """Find the '@param array<K, V> $name' lines.

        A line without a recoverable field name is dropped, the field is then seen as an
        untyped container.

        Returns:
            dict[str, MapType]: The map types keyed by field name.
        """
        if not annotation:
            return {}

        map_types: dict[str, MapType] = {}
        for match in _MAP_PARAM.finditer(annotation):
            line = match.group(0)
            name = _PARAM_NAME.search(line)
            types = _MAP_TYPES.search(line)
            if name is None or types is None:
                continue

            key_type = types.group(1).strip()
            value_type = trim_type_name(types.group(2))
            value_nullable = False
            if value_type.startswith("?"):
                value_nullable = True
                value_type = trim_type_name(value_type[1:])
            elif "null" in value_type:
                value_nullable = True
                value_type = strip_nulls(value_type)

            map_types[name.group(1)] = MapType(
                key_type=key_type,
                value_type=value_type,
                is_value_builtin=is_builtin_type(value_type),
                is_value_nullable=value_nullable,
            )
        return map_types


def parse_array_types(annotation: str | None) -> dict[str, str]:
    """This function is a shortcut to `AnnotationParser().parse_array_types()`."""
    return AnnotationParser().parse_array_types(annotation)


def parse_map_types(annotation: str | None) -> dict[str, MapType]:
    """This function is a shortcut to `AnnotationParser().parse_map_types()`."""
    return AnnotationParser().parse_map_types(annotation)
