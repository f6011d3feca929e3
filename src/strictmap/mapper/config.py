"""Configuration of a JsonMapper."""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from dataclasses import dataclass, replace
from typing import Any, Self


@dataclass(frozen=True, slots=True)
class MapperConfig:
    """Flags relaxing the strict mapping rules. Both are off by default.

    Attributes:
        allow_untyped_properties (bool): Accept fields without a declared type and arrays
            without an element type. Their document values are passed through unchanged and
            a missing key gives None.
        allow_int_to_float_conversion (bool): Accept an int document value for a float
            field, array element or map value. The value is converted to float.
    """

    allow_untyped_properties: bool = False
    allow_int_to_float_conversion: bool = False

    def replace(self, **changes: Any) -> Self:
        """Return a copy of the configuration with some flags changed."""
        return replace(self, **changes)
