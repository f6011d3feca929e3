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
Description: Registry mapping Python annotations to the builtin type names of the mapper.
            The registry can be extended with register_builtin, for example to map a custom
            str subclass to 'string'.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from functools import lru_cache
from types import NoneType
from typing import Any, Literal, Self

from ...schema.types import BUILTIN_TYPES
from .utilities import Annotation


class BuiltinTypeRegistry:
    """
    A class to hold the builtin type name of annotations. It allows customization.
    """

    __builtins: dict[Annotation, str]

    def __init__(self) -> None:
        self.__builtins = {}

    def register_builtin(self, annotation: Annotation, type_name: str) -> None:
        """
        Register the builtin type name of an annotation. Document values for a field declared
        with this annotation are then validated against the builtin kind.

        Mappers read the registry without locking. Register before any mapping starts, or
        give a mapper its own registry with `JsonMapper(registry=...)`.

        Args:
            annotation (Annotation): The annotation, usually a type.
            type_name (str): One of the builtin type names.

        Raises:
            ValueError: Raised if the type name is not a builtin type name.
        """
        if type_name not in BUILTIN_TYPES:
            raise ValueError(
                f"Cannot register '{annotation}' as '{type_name}'. '{type_name}' is not a builtin"
                f" type name. Expected one of {sorted(BUILTIN_TYPES)}."
            )
        self.__builtins[annotation] = type_name

    def unregister_builtin(self, annotation: Annotation) -> None:
        """Remove the registration of an annotation. Does nothing if it is not registered."""
        self.__builtins.pop(annotation, None)

    def get_builtin_name(self, annotation: Annotation) -> str | None:
        """Get the builtin type name of an annotation.

        Args:
            annotation (Annotation): The annotation for which to get the name.

        Returns:
            str | None: The builtin type name, or None if the annotation is not a builtin.
        """
        try:
            return self.__builtins.get(annotation)
        except TypeError:
            # unhashable annotation
            return None

    def has_builtin(self, annotation: Annotation) -> bool:
        """Check if an annotation is registered as a builtin."""
        return self.get_builtin_name(annotation) is not None

    def list_registered_types(self) -> list[Annotation]:
        """Get all registered annotations for debugging/introspection."""
        return list(self.__builtins.keys())

    @classmethod
    def with_defaults(cls) -> Self:
        """Create a registry knowing the Python equivalents of every builtin type name."""
        registry = cls()
        for annotation, type_name in (
            (bool, "bool"),
            (int, "int"),
            (float, "float"),
            (str, "string"),
            (None, "null"),
            (NoneType, "null"),
            (Literal[True], "true"),
            (Literal[False], "false"),
            (list, "array"),
            (tuple, "array"),
            (dict, "array"),
            (object, "object"),
            (Any, "mixed"),
            (Self, "self"),
        ):
            registry.register_builtin(annotation, type_name)
        return registry


@lru_cache(1)
def builtin_registry() -> BuiltinTypeRegistry:
    """Default builtin type registry, shared by every mapper built without a registry.
    Allows to register custom builtin annotations, before any mapping starts.
    See BuiltinTypeRegistry for more information.

    Returns:
        BuiltinTypeRegistry: the registry instance.
    """
    return BuiltinTypeRegistry.with_defaults()
