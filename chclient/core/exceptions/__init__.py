"""chclient Core Exceptions Package - Core exception classes for error handling.

This package contains the exception hierarchy for chclient. Configuration
errors are raised by option parsing and typed accessors, conversion errors by
typed values, and discovery errors are swallowed by the option registry.
"""

from .core import (
    ChClientError,
    ConfigurationError,
    DiscoveryError,
    InvalidPointError,
    TypeMismatchError,
    UnsupportedConversionError,
    ValueConversionError,
)

__all__ = [
    # Base exception
    "ChClientError",

    # Configuration
    "ConfigurationError",
    "TypeMismatchError",

    # Values
    "ValueConversionError",
    "UnsupportedConversionError",
    "InvalidPointError",

    # Discovery
    "DiscoveryError",
]
