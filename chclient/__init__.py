"""chclient - Configuration resolution and typed values for a columnar database client."""

__version__ = "0.1.0"
__description__ = "Configuration resolution and typed values for a columnar database client"

# Import modules only when needed to avoid import cycles between config and registry
__all__ = [
    "Configuration",
    "ConfigurationResolver",
    "ConnectionSettings",
    "ClientOption",
    "MultiPolygonValue",
    "build_configuration",
    "get_registry",
]


def __getattr__(name: str):
    """Lazy import of the public API."""
    if name in ("Configuration", "ConfigurationResolver", "ConnectionSettings",
                "ClientOption", "build_configuration"):
        from .core import config
        return getattr(config, name)
    elif name == "MultiPolygonValue":
        from .core.values import MultiPolygonValue
        return MultiPolygonValue
    elif name == "get_registry":
        from .registry import get_registry
        return get_registry
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
