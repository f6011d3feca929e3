"""Classification of document values.

The kinds are the ones of a decoded JSON document, named like the builtin types of a schema so
that both can be compared directly: null, bool, int, float, string, array and object. Mappings
and lists are both 'array', any other Python object is an 'object'.
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Iterator, Mapping
from typing import Any, Final, Literal

type ValueKind = Literal["null", "bool", "int", "float", "string", "array", "object"]

VALUE_KINDS: Final[tuple[ValueKind, ...]] = (
    "null",
    "bool",
    "int",
    "float",
    "string",
    "array",
    "object",
)


def classify(value: Any) -> ValueKind:
    """Kind of a document value, independent of any schema.

    Args:
        value (Any): The document value.

    Returns:
        ValueKind: The kind of the value.
    """
    if value is None:
        return "null"
    # bool first, it is an int subclass.
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (Mapping, list, tuple)):
        return "array"
    return "object"


def classify_key(key: Any) -> ValueKind:
    """Kind of a container key. Keys are classified like values."""
    return classify(key)


type Container = Mapping[Any, Any] | list[Any] | tuple[Any, ...]


def iter_items(container: Container) -> Iterator[tuple[Any, Any]]:
    """Iterate the (key, value) pairs of an array-kind value. Sequences have int keys."""
    if isinstance(container, Mapping):
        return iter(container.items())
    return enumerate(container)


def as_mapping(container: Container) -> Mapping[Any, Any]:
    """View an array-kind value as a mapping. A sequence is keyed by index."""
    if isinstance(container, Mapping):
        return container
    return dict(enumerate(container))
