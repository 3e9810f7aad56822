"""chclient Core Exceptions - Core exception classes for error handling.

This module contains the exception hierarchy for the chclient system. These
exceptions provide clear error categorization for configuration resolution
and typed value conversion.
"""

from typing import Any, Dict, Optional


class ChClientError(Exception):
    """Base exception for all chclient-specific errors.

    This is the root exception class that all other chclient exceptions
    inherit from. It provides common functionality for error handling,
    context tracking, and debugging.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize chclient error.

        Args:
            message: Human-readable error description
            context: Optional dictionary with error context (e.g., option keys, values)
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message

    def add_context(self, key: str, value: Any) -> "ChClientError":
        """Add context information to the error."""
        self.context[key] = value
        return self


class ConfigurationError(ChClientError):
    """Raised when configuration is invalid.

    This exception is used for option values that cannot be parsed or do not
    match the declared type of their option.
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize configuration error.

        Args:
            config_key: Option key that caused the error
            config_value: Invalid option value
            reason: Description of what went wrong
            context: Optional additional context
            cause: Optional underlying exception
        """
        if config_key:
            message = f"Configuration error for '{config_key}': {reason}"
        else:
            message = f"Configuration error: {reason}" if reason else "Configuration error"

        super().__init__(message, context, cause)
        self.config_key = config_key
        self.config_value = config_value
        self.reason = reason


class TypeMismatchError(ConfigurationError):
    """Raised when an option is read as a type other than its declared one."""

    def __init__(self, option: Any, expected: type, actual: type):
        """Initialize type mismatch error.

        Args:
            option: Option descriptor being read
            expected: Declared value type of the option
            actual: Value type requested by the caller
        """
        key = getattr(option, "key", str(option))
        super().__init__(
            config_key=key,
            reason=f"Cannot convert value from type {expected.__name__} to {actual.__name__}",
        )
        self.option = option
        self.expected = expected
        self.actual = actual


class ValueConversionError(ChClientError):
    """Raised when a typed value cannot absorb or produce a representation."""

    def __init__(
        self,
        source: Optional[str] = None,
        target: Optional[str] = None,
        reason: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize value conversion error.

        Args:
            source: Kind of the source value (e.g., "Integer", "String")
            target: Kind of the target value (e.g., "MultiPolygon")
            reason: Description of what went wrong
            value: The offending value
            context: Optional additional context
            cause: Optional underlying exception
        """
        parts = []
        if source:
            parts.append(f"from={source}")
        if target:
            parts.append(f"to={target}")

        prefix = f"Conversion error ({', '.join(parts)})" if parts else "Conversion error"
        message = f"{prefix}: {reason}" if reason else prefix

        super().__init__(message, context, cause)
        self.source = source
        self.target = target
        self.reason = reason
        self.value = value


class UnsupportedConversionError(ValueConversionError):
    """Raised when the source kind structurally cannot represent the target kind."""

    def __init__(self, source: str, target: str, value: Optional[Any] = None):
        super().__init__(
            source=source,
            target=target,
            reason=f"Converting {source} to {target} is not supported",
            value=value,
        )


class InvalidPointError(ValueConversionError):
    """Raised when a point is not made of exactly two coordinates."""

    ERROR_INVALID_POINT = "Invalid point: "

    def __init__(self, value: Any, target: str = "Point"):
        super().__init__(
            target=target,
            reason=f"{self.ERROR_INVALID_POINT}{value!r}",
            value=value,
        )


class DiscoveryError(ChClientError):
    """Raised when client implementations or their option sets cannot be loaded.

    The option registry never lets this escape; it degrades to built-in
    options instead.
    """

    def __init__(
        self,
        client: Optional[str] = None,
        reason: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        message = f"Discovery error for '{client}': {reason}" if client else f"Discovery error: {reason}"
        super().__init__(message, cause=cause)
        self.client = client
        self.reason = reason
