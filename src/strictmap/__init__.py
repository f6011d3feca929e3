"""
strictmap: Strict mapping of decoded JSON documents to class instances.

This library provides:
- JsonMapper for all or nothing mapping of a document to an instance of a class
- Schema extraction from class signatures and docstring container annotations
- A flat MappingError taxonomy reporting the first failing property
- Type classification of document values
"""

import logging

from .mapper.engine import (
    InstanceConstructor,
    JsonMapper,
    map_document,
    map_json,
    positional_constructor,
)
from .mapper.config import MapperConfig
from .mapper.errors import (
    ErrorKind,
    InstanceConstructionError,
    IntrospectionError,
    MappingError,
)
from .meta.typing.utilities import Intersection
from .schema.extractor import SchemaExtractor, extract_schema

__version__ = "0.1.0"
__author__ = "Sébastien Gachoud"
__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Mapping
    "JsonMapper",
    "MapperConfig",
    "map_document",
    "map_json",
    "InstanceConstructor",
    "positional_constructor",
    # Schema
    "SchemaExtractor",
    "extract_schema",
    "Intersection",
    # Errors
    "ErrorKind",
    "MappingError",
    "IntrospectionError",
    "InstanceConstructionError",
]
