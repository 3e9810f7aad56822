"""chclient Core Package - Exceptions, types, models and typed values.

This package contains the building blocks shared by the configuration layer
and the typed value model. Configuration lives in ``chclient.core.config``
and is imported from there, since it depends on the option registry.

Modules:
    exceptions: Exception hierarchy for configuration and value conversion
    types: Option enums, protocols and geometry aliases
    models: Credentials, node selector and server version
    values: Typed value containers and update source variants
"""

from .exceptions import (
    ChClientError,
    ConfigurationError,
    DiscoveryError,
    InvalidPointError,
    TypeMismatchError,
    UnsupportedConversionError,
    ValueConversionError,
)
from .models import Credentials, NodeSelector, ServerVersion
from .types import BufferingMode, Compression, Format, Protocol, SslMode
from .values import MultiPolygon, MultiPolygonValue, ObjectValue

__all__ = [
    # Models
    "Credentials",
    "NodeSelector",
    "ServerVersion",

    # Types
    "BufferingMode",
    "Compression",
    "Format",
    "Protocol",
    "SslMode",

    # Values
    "ObjectValue",
    "MultiPolygon",
    "MultiPolygonValue",

    # Exceptions
    "ChClientError",
    "ConfigurationError",
    "TypeMismatchError",
    "ValueConversionError",
    "UnsupportedConversionError",
    "InvalidPointError",
    "DiscoveryError",
]
