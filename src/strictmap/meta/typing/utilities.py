"""Type annotation utility functions.

This module provides helper functions for working with Python type annotations,
including utilities for checking union types and the Intersection marker, listing the
non-null members of a union and resolving the annotations of a class constructor.
"""

import inspect
import sys
from types import NoneType, UnionType
from typing import Any, Union, get_args, get_origin, get_type_hints

type Annotation = Any


class Intersection[*Ts]:
    """Typing marker for an intersection of types. Python has no intersection types, this
    marker lets a class declare one so that it can be described (and rejected by the mapper).

        >>> class Both:
        ...     def __init__(self, field: Intersection[Readable, Writable]): ...
    """


def is_union(annotation: Annotation) -> bool:
    """Check if an annotation is a union. A union is a Union or UnionType type.

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation is a union.
    """
    o = get_origin(annotation) or annotation
    return o in (Union, UnionType)


def is_intersection(annotation: Annotation) -> bool:
    """Check if an annotation is an Intersection[...] marker."""
    return get_origin(annotation) is Intersection


def non_null_members(annotation: Annotation) -> tuple[Annotation, ...]:
    """Members of a union without NoneType, in declaration order."""
    return tuple(a for a in get_args(annotation) if a is not NoneType)


def constructor_parameters(target: type) -> list[inspect.Parameter]:
    """Parameters of the target constructor that receive a document field.

    self, *args and **kwargs are not fields.
    """
    signature = inspect.signature(target.__init__)
    return [
        p
        for i, p in enumerate(signature.parameters.values())
        if i > 0 and p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
    ]


def constructor_type_hints(target: type) -> dict[str, Annotation]:
    """
    Get the resolved type hints of the target constructor parameters. See typing.get_type_hints.

    The constructor annotations win over the class level annotations. Forward references are
    resolved in the module of the target with the target itself in scope, so that a class can
    reference itself.

    Args:
        target (type): The class to inspect.

    Returns:
        dict[str, Any]: A dictionary of type hints, without the return annotation.
    """
    module = sys.modules.get(target.__module__)
    globalns = dict(vars(module)) if module else {}
    localns = {target.__name__: target}

    hints: dict[str, Annotation] = {}
    init = target.__init__
    if inspect.isfunction(init):
        hints.update(get_type_hints(init, globalns=globalns, localns=localns))
    hints.pop("return", None)

    # Parameters left unannotated in __init__ may still be annotated on the class.
    names = {p.name for p in constructor_parameters(target)}
    if names - hints.keys():
        class_hints = get_type_hints(target, globalns=globalns, localns=localns)
        hints.update({k: v for k, v in class_hints.items() if k in names and k not in hints})
    return hints
