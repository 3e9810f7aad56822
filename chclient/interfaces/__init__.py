"""Interfaces package for chclient - abstract protocols for pluggable implementations."""

from .client import ClientPlugin
from .value import TypedValue

__all__ = [
    "ClientPlugin",
    "TypedValue",
]
