"""chclient Core Types Package - Common type definitions and aliases.

The types are organized into logical groups:
- Option related enums (compression, format, buffering, ssl mode)
- Node protocol definitions
- Geometry aliases for nested coordinate structures
"""

from .common import (
    BufferingMode,
    Compression,
    Format,
    NestedMultiPolygon,
    OptionKey,
    Point,
    Polygon,
    Protocol,
    Ring,
    SslMode,
    TimeZoneName,
)

__all__ = [
    # Enums
    "BufferingMode",
    "Compression",
    "Format",
    "Protocol",
    "SslMode",

    # String types
    "OptionKey",
    "TimeZoneName",

    # Geometry aliases
    "Point",
    "Ring",
    "Polygon",
    "NestedMultiPolygon",
]
